# rotation_guard/guard.py
"""Flask integration for the rotation policy engine
Builds the policy, clock, gate and reactivation action for an application,
classifies each incoming request and redirects blocked ones before the view
runs.
"""
import logging

from flask import current_app, g, redirect, request, session, url_for
from flask_wtf.csrf import generate_csrf, validate_csrf
from wtforms.validators import ValidationError

from rotation_guard.services.force_change_gate import (
    DEFAULT_ALLOWED_ROUTES, ForceChangeGate, RequestContext, RequestKind, Route,
)
from rotation_guard.services.password_policy import PasswordPolicy
from rotation_guard.services.reactivation import ReactivationAction
from rotation_guard.services.rotation_clock import RotationClock
from rotation_guard.services.timestamp_store import SqlTimestampStore

logger = logging.getLogger(__name__)

REACTIVATION_TOKEN_KEY = 'csrf_force_password_again'

# Where the host sends a logical route
ROUTE_ENDPOINTS = {
    Route.PROFILE_SETTINGS: 'auth.profile',
    Route.LOGIN: 'auth.login',
    Route.ADMIN_CONFIRMATION: 'admin.force_password',
}

BACKGROUND_BLUEPRINTS = frozenset({'api'})


class _State:
    """Per-application engine components"""

    def __init__(self, app, db):
        self.policy = PasswordPolicy(app.config['PASSWORD_MIN_LENGTH'])
        self.store = SqlTimestampStore(db)
        self.clock = RotationClock(self.store, app.config.get('ROTATION_TIME_SOURCE'))
        self.gate = ForceChangeGate(self.clock, DEFAULT_ALLOWED_ROUTES,
                                    app.config['ROTATION_PROMPT_MARKER'])
        self.reactivation = ReactivationAction(self.clock, verify_reactivation_token,
                                               app.config['ROTATION_ADMIN_CAPABILITY'])
        self.route_map = {endpoint: Route.lookup(name)
                          for endpoint, name in app.config['ROTATION_ROUTE_MAP'].items()}


class RotationGuard:
    """Flask extension enforcing the password policy and forced rotation"""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        from rotation_guard.extensions import db

        app.config.setdefault('PASSWORD_MIN_LENGTH', 22)
        app.config.setdefault('ROTATION_PROMPT_MARKER', 'force_password_change')
        app.config.setdefault('ROTATION_ADMIN_CAPABILITY', 'manage_options')
        app.config.setdefault('ROTATION_ROUTE_MAP', {})
        app.extensions['rotation_guard'] = _State(app, db)

        app.before_request(self._enforce)
        app.context_processor(self._template_context)

    @property
    def state(self) -> _State:
        return current_app.extensions['rotation_guard']

    @property
    def policy(self) -> PasswordPolicy:
        return self.state.policy

    @property
    def clock(self) -> RotationClock:
        return self.state.clock

    @property
    def gate(self) -> ForceChangeGate:
        return self.state.gate

    @property
    def reactivation(self) -> ReactivationAction:
        return self.state.reactivation

    def install(self) -> bool:
        """Arm the rotation requirement once, if it has never been armed"""
        if self.clock.is_armed():
            return False
        self.clock.arm_rotation_requirement()
        return True

    def on_password_changed(self, user_id):
        """Hook for credential updates that passed the policy"""
        return self.clock.record_password_changed(user_id)

    def classify_current_request(self) -> RequestContext:
        user_id = session.get('user_id')
        return RequestContext(
            user_id=user_id,
            authenticated=user_id is not None,
            route=self.state.route_map.get(request.endpoint, Route.OTHER),
            kind=classify_request_kind(),
            query=request.args.to_dict(),
        )

    def should_show_prompt(self) -> bool:
        if 'rotation_prompt' not in g:
            g.rotation_prompt = self.gate.should_show_prompt(self.classify_current_request())
        return g.rotation_prompt

    def _enforce(self):
        if request.endpoint is None:
            return None
        return self.gate.enforce(self.classify_current_request(), redirect_to_route)

    def _template_context(self):
        return {
            'rotation_prompt': self.should_show_prompt,
            'password_policy': self.policy,
        }


def classify_request_kind() -> RequestKind:
    """Interactive page load or background/programmatic request"""
    if request.headers.get('X-Requested-With', '').lower() == 'xmlhttprequest':
        return RequestKind.BACKGROUND
    if request.blueprint in BACKGROUND_BLUEPRINTS or request.endpoint == 'static':
        return RequestKind.BACKGROUND
    best = request.accept_mimetypes.best_match(['text/html', 'application/json'])
    if best == 'application/json' and request.accept_mimetypes[best] > request.accept_mimetypes['text/html']:
        return RequestKind.BACKGROUND
    return RequestKind.INTERACTIVE_PAGE


def redirect_to_route(route: Route, query):
    """Redirect response for a logical route, carrying the query marker"""
    return redirect(url_for(ROUTE_ENDPOINTS[route], **dict(query or {})))


def reactivation_token() -> str:
    """Anti-forgery token scoped to the reactivation action"""
    return generate_csrf(token_key=REACTIVATION_TOKEN_KEY)


def verify_reactivation_token(token) -> bool:
    try:
        validate_csrf(token, token_key=REACTIVATION_TOKEN_KEY)
    except ValidationError as exc:
        logger.info('Reactivation token rejected: %s', exc)
        return False
    return True
