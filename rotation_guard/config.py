# rotation_guard/config.py
"""Configuration for Rotation Guard
Class-based settings loaded through app.config.from_object
"""
import os
from datetime import timedelta


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.urandom(32).hex()

    # Session configuration
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(hours=1)

    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///rotation_guard.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Anti-forgery tokens (Flask-WTF)
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600

    # Password policy
    PASSWORD_MIN_LENGTH = 22
    PASSWORD_RESET_MAX_AGE = 3600  # seconds
    PASSWORD_RESET_BASE_URL = os.environ.get('BASE_URL', 'http://localhost:5000')
    BCRYPT_ROUNDS = 12

    # Forced rotation
    ROTATION_ARM_ON_INSTALL = True
    ROTATION_PROMPT_MARKER = 'force_password_change'
    ROTATION_ADMIN_CAPABILITY = 'manage_options'
    ROTATION_TIME_SOURCE = None  # callable returning unix seconds, None for time.time

    # Flask endpoint -> logical route understood by the gate
    ROTATION_ROUTE_MAP = {
        'auth.profile': 'profile-settings',
        'auth.login': 'login',
        'auth.logout': 'login',
        'auth.reset_password': 'login',
        'api.rotation_status': 'background-action',
        'api.password_check': 'background-action',
    }

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = True
    SECRET_KEY = 'testing-secret-key'

    # Use in-memory database for tests
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    # Global CSRF check off; the reactivation token is still verified
    WTF_CSRF_ENABLED = False

    # Faster hashing for tests
    BCRYPT_ROUNDS = 4


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
