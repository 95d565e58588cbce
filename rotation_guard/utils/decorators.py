# rotation_guard/utils/decorators.py
"""Authentication and authorization decorators"""
from functools import wraps

from flask import abort, current_app, flash, g, redirect, session, url_for

from rotation_guard.extensions import db
from rotation_guard.models.user import User


def load_current_user():
    """Active user of the current session, or None"""
    if 'current_user' not in g:
        user = None
        if 'user_id' in session:
            user = db.session.get(User, session['user_id'])
            if user is not None and not user.is_active:
                user = None
        g.current_user = user
    return g.current_user


def login_required(f):
    """Decorator to ensure user is authenticated before accessing route"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'user_id' not in session:
            flash('Please log in to access this page.', 'warning')
            return redirect(url_for('auth.login'))

        # Verify user still exists and is active
        if load_current_user() is None:
            session.clear()
            flash('Session invalid. Please log in again.', 'error')
            return redirect(url_for('auth.login'))

        return f(*args, **kwargs)
    return decorated_function


def capability_required(capability=None):
    """
    Decorator to require a capability of the logged-in user
    Args:
        capability: Capability name, e.g. manage_options; defaults to
            ROTATION_ADMIN_CAPABILITY from config
    """
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            required = capability or current_app.config['ROTATION_ADMIN_CAPABILITY']
            if not load_current_user().can(required):
                abort(403)
            return f(*args, **kwargs)
        return decorated_function
    return decorator
