# rotation_guard/controllers/dashboard_controller.py
"""Dashboard pages"""
from flask import Blueprint, render_template

from rotation_guard.extensions import guard
from rotation_guard.utils.decorators import load_current_user, login_required

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/')
@login_required
def index():
    """User dashboard showing password status"""
    user = load_current_user()
    status = guard.clock.status(user.id)
    return render_template('dashboard.html', user=user, status=status)
