# rotation_guard/controllers/api_controller.py
"""Background endpoints
Requests to this blueprint are classified as background calls, so a pending
rotation never redirects them.
"""
from flask import Blueprint, jsonify, request, session

from rotation_guard.extensions import guard

api_bp = Blueprint('api', __name__)


@api_bp.route('/rotation-status')
def rotation_status():
    """Rotation status of the current session's user"""
    user_id = session.get('user_id')
    if user_id is None:
        return jsonify({'error': 'Unauthorized'}), 401

    status = guard.clock.status(user_id)
    return jsonify({
        'user_id': user_id,
        'required': status.required,
        'activated_at': status.activated_at,
        'changed_at': status.changed_at,
    })


@api_bp.route('/password-check', methods=['POST'])
def password_check():
    """Evaluate a candidate password without storing anything"""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return jsonify({'error': 'Expected a JSON object'}), 400

    password = payload.get('password') or request.form.get('password', '')
    if not isinstance(password, str):
        return jsonify({'error': 'password must be a string'}), 400
    violations = guard.policy.evaluate(password)

    return jsonify({
        'valid': not violations,
        'length': len(password),
        'min_length': guard.policy.min_length,
        'violations': sorted(kind.value for kind in violations),
        'messages': guard.policy.messages(violations),
    })
