# rotation_guard/utils/security.py
"""Credential utilities for the host application
bcrypt hashing for stored passwords and signed, expiring password reset tokens
"""
import bcrypt
from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

RESET_TOKEN_SALT = 'password-reset'


def hash_password(password: str, rounds: int = None) -> str:
    """
    Hash password using bcrypt

    Args:
        password: Plain text password
        rounds: bcrypt cost factor, BCRYPT_ROUNDS from config when omitted

    Returns:
        bcrypt hash as text
    """
    if rounds is None:
        rounds = current_app.config.get('BCRYPT_ROUNDS', 12)
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify password against stored bcrypt hash"""
    if not password or not stored_hash:
        return False
    return bcrypt.checkpw(password.encode('utf-8'), stored_hash.encode('utf-8'))


def _reset_serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=RESET_TOKEN_SALT)


def generate_reset_token(user) -> str:
    """
    Signed token identifying a user for a password reset

    The current password hash is bound into the token, so it stops working
    once the password has been changed.
    """
    return _reset_serializer().dumps({'uid': user.id, 'ph': user.password_hash[-12:]})


def load_reset_token(token: str, max_age: int = None):
    """
    Decode a reset token

    Returns:
        (user_id, hash_fragment) tuple, or None if the token is invalid or expired
    """
    if max_age is None:
        max_age = current_app.config.get('PASSWORD_RESET_MAX_AGE', 3600)
    try:
        data = _reset_serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        return None
    except BadSignature:
        return None
    return data.get('uid'), data.get('ph')
