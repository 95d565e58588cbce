# rotation_guard/controllers/auth_controller.py
"""Authentication Controller
Registration, login, profile and password reset. Every surface that accepts a
new password runs it through the strength policy and stamps the rotation
clock once the change has been stored.
"""
import logging

from flask import Blueprint, render_template, request, redirect, url_for, session, flash

from rotation_guard.extensions import db, guard
from rotation_guard.models.user import User
from rotation_guard.utils.decorators import load_current_user, login_required
from rotation_guard.utils.security import hash_password, verify_password, load_reset_token

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


def _flash_violations(password) -> bool:
    """Flash one message per policy violation; True when the password passed"""
    violations = guard.policy.evaluate(password)
    for message in guard.policy.messages(violations):
        flash(message, 'error')
    return not violations


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """New account; the password must already satisfy the policy"""
    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')
        confirm_password = request.form.get('confirm_password', '')

        # Required fields come before the strength policy
        if not username or not password:
            flash('Username and password are required', 'error')
            return render_template('auth/register.html'), 400

        if password != confirm_password:
            flash('Passwords do not match', 'error')
            return render_template('auth/register.html'), 400

        if not _flash_violations(password):
            return render_template('auth/register.html'), 400

        if User.query.filter_by(username=username).first():
            flash('Username already exists', 'error')
            return render_template('auth/register.html'), 400

        user = User(username=username, password_hash=hash_password(password))
        try:
            db.session.add(user)
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception('Registration of %s failed', username)
            flash('Registration failed. Please try again.', 'error')
            return render_template('auth/register.html'), 500

        guard.on_password_changed(user.id)
        flash('Registration successful! Please log in.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        user = User.query.filter_by(username=username, is_active=True).first()
        if not user or not verify_password(password, user.password_hash):
            flash('Invalid username or password', 'error')
            return render_template('auth/login.html'), 401

        session.clear()
        session['user_id'] = user.id
        session['username'] = user.username
        session.permanent = True

        if guard.clock.is_rotation_required(user.id):
            flash('Please change your password to continue.', 'warning')
        return redirect(url_for('dashboard.index'))

    return render_template('auth/login.html')


@auth_bp.route('/logout')
def logout():
    session.clear()
    flash('You have been logged out', 'info')
    return redirect(url_for('auth.login'))


@auth_bp.route('/profile', methods=['GET', 'POST'])
@login_required
def profile():
    """Profile page; also the only page reachable while a rotation is pending"""
    user = load_current_user()

    if request.method == 'POST':
        current_password = request.form.get('current_password', '')
        new_password = request.form.get('new_password', '')
        confirm_password = request.form.get('confirm_password', '')

        # Blank new password keeps the current one
        if not new_password:
            flash('Profile updated', 'success')
            return redirect(url_for('auth.profile'))

        if new_password != confirm_password:
            flash('Passwords do not match', 'error')
            return render_template('auth/profile.html', user=user), 400

        if not verify_password(current_password, user.password_hash):
            flash('Current password is incorrect', 'error')
            return render_template('auth/profile.html', user=user), 400

        if not _flash_violations(new_password):
            return render_template('auth/profile.html', user=user), 400

        if verify_password(new_password, user.password_hash):
            flash('New password cannot be the same as current password', 'error')
            return render_template('auth/profile.html', user=user), 400

        user.password_hash = hash_password(new_password)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception('Password update for user %s failed', user.id)
            flash('Failed to update password. Please try again.', 'error')
            return render_template('auth/profile.html', user=user), 500

        guard.on_password_changed(user.id)
        flash('Password updated successfully', 'success')
        return redirect(url_for('dashboard.index'))

    return render_template('auth/profile.html', user=user)


@auth_bp.route('/reset/<token>', methods=['GET', 'POST'])
def reset_password(token):
    """Set a new password from a signed reset link"""
    user = None
    decoded = load_reset_token(token)
    if decoded:
        user_id, fragment = decoded
        user = db.session.get(User, user_id)
        # Token was issued for an older password
        if user is not None and user.password_hash[-12:] != fragment:
            user = None
    if user is None:
        flash('This password reset link is invalid or has expired.', 'error')
        return redirect(url_for('auth.login'))

    if request.method == 'POST':
        new_password = request.form.get('new_password', '')
        confirm_password = request.form.get('confirm_password', '')

        if not new_password:
            flash('Please enter a new password', 'error')
            return render_template('auth/reset_password.html', token=token), 400

        if new_password != confirm_password:
            flash('Passwords do not match', 'error')
            return render_template('auth/reset_password.html', token=token), 400

        if not _flash_violations(new_password):
            return render_template('auth/reset_password.html', token=token), 400

        user.password_hash = hash_password(new_password)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception('Password reset for user %s failed', user.id)
            flash('Failed to reset password. Please try again.', 'error')
            return render_template('auth/reset_password.html', token=token), 500

        guard.on_password_changed(user.id)

        flash('Your password has been reset. Please log in.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/reset_password.html', token=token)
