# rotation_guard/controllers/admin_controller.py
"""Administration of the forced password rotation"""
from flask import Blueprint, abort, current_app, render_template, request

from rotation_guard.errors import Forbidden
from rotation_guard.extensions import csrf, guard
from rotation_guard.guard import reactivation_token, redirect_to_route
from rotation_guard.utils.decorators import capability_required, load_current_user, login_required

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/force-password', methods=['GET'])
@capability_required()
def force_password():
    """Page with the button that re-requires a password change from everyone"""
    status = guard.clock.status(load_current_user().id)
    return render_template('admin/force_password.html',
                           token=reactivation_token(),
                           activated_at=status.activated_at,
                           forced=bool(request.args.get('forced')))


@admin_bp.route('/force-password', methods=['POST'])
# Carries its own action-scoped token, verified by the reactivation action
@csrf.exempt
@login_required
def force_password_again():
    """Re-arm the rotation requirement"""
    try:
        result = guard.reactivation.execute(load_current_user(), request.form.get('csrf_token'))
    except Forbidden as exc:
        current_app.logger.warning('Forced rotation refused: %s', exc)
        abort(403)

    return redirect_to_route(result.redirect.route, result.redirect.query)
