# rotation_guard/services/force_change_gate.py
"""Force change gate
Per-request decision whether an authenticated user who still owes a password
rotation may continue, or has to be sent to the profile page first. The gate
only decides; the host performs the redirect before any body is produced.
"""
import logging
from collections import namedtuple
from enum import Enum
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_MARKER = 'force_password_change'


class RequestKind(Enum):
    INTERACTIVE_PAGE = 'interactive'
    BACKGROUND = 'background'


class Route(Enum):
    PROFILE_SETTINGS = 'profile-settings'
    LOGIN = 'login'
    BACKGROUND_ACTION = 'background-action'
    ADMIN_CONFIRMATION = 'admin-confirmation'
    OTHER = 'other'

    @classmethod
    def lookup(cls, name) -> 'Route':
        try:
            return cls(name)
        except ValueError:
            return cls.OTHER


DEFAULT_ALLOWED_ROUTES = frozenset({
    Route.PROFILE_SETTINGS,
    Route.LOGIN,
    Route.BACKGROUND_ACTION,
})

Redirect = namedtuple('Redirect', ['route', 'query'])


class RequestContext(namedtuple('RequestContext', ['user_id', 'authenticated', 'route', 'kind', 'query'])):
    """Who is asking for what, as classified by the host"""
    __slots__ = ()

    def __new__(cls, user_id=None, authenticated=False, route=Route.OTHER,
                kind=RequestKind.INTERACTIVE_PAGE, query=None):
        return super().__new__(cls, user_id, bool(authenticated and user_id is not None),
                               route, kind, dict(query or {}))


class ForceChangeGate:
    """
    Blocks interactive page loads of users who must rotate their password

    Args:
        clock: RotationClock consulted on every decision
        allowed_routes: Routes reachable while a rotation is pending
        prompt_marker: Query parameter that asks the profile page to show the prompt
    """

    def __init__(self, clock, allowed_routes=DEFAULT_ALLOWED_ROUTES,
                 prompt_marker: str = DEFAULT_PROMPT_MARKER):
        self.clock = clock
        self.allowed_routes = frozenset(allowed_routes)
        self.prompt_marker = prompt_marker

    def _rotation_pending(self, context: RequestContext) -> bool:
        return context.authenticated and self.clock.is_rotation_required(context.user_id)

    def should_block(self, context: RequestContext) -> bool:
        # Background and programmatic requests are never redirected
        if context.kind is RequestKind.BACKGROUND:
            return False
        if context.route in self.allowed_routes:
            return False
        return self._rotation_pending(context)

    def should_show_prompt(self, context: RequestContext) -> bool:
        if context.route is not Route.PROFILE_SETTINGS:
            return False
        # '0' counts as absent
        if context.query.get(self.prompt_marker) in (None, '', '0'):
            return False
        return self._rotation_pending(context)

    def check(self, context: RequestContext) -> Optional[Redirect]:
        """Redirect instruction for a blocked request, None when allowed"""
        if not self.should_block(context):
            return None
        logger.info('Blocking %s for user %s until password is rotated',
                    context.route.value, context.user_id)
        return Redirect(Route.PROFILE_SETTINGS, {self.prompt_marker: '1'})

    def enforce(self, context: RequestContext, redirect: Callable[[Route, Mapping], object]):
        """Hand a blocked request to the host's redirect; returns its result or None"""
        target = self.check(context)
        if target is None:
            return None
        return redirect(target.route, target.query)
