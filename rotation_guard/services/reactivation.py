# rotation_guard/services/reactivation.py
"""Administrative re-arming of the forced password rotation"""
import logging
from collections import namedtuple

from rotation_guard.errors import Forbidden
from rotation_guard.services.force_change_gate import Redirect, Route

logger = logging.getLogger(__name__)

ADMIN_CAPABILITY = 'manage_options'

ReactivationResult = namedtuple('ReactivationResult', ['activated_at', 'redirect'])


class ReactivationAction:
    """
    Re-require a password change from every user

    Args:
        clock: RotationClock whose watermark is moved
        verify_token: Callable(token) -> bool checking the anti-forgery token
            issued for this action
        capability: Capability the acting user must hold
    """

    def __init__(self, clock, verify_token, capability=ADMIN_CAPABILITY):
        self.clock = clock
        self.verify_token = verify_token
        self.capability = capability

    def is_permitted(self, actor) -> bool:
        return actor is not None and bool(actor.can(self.capability))

    def execute(self, actor, token) -> ReactivationResult:
        """
        Arm the rotation requirement on behalf of an administrator

        Raises:
            Forbidden: actor lacks the capability or the token is invalid;
                the watermark is left untouched
        """
        if not self.is_permitted(actor):
            logger.warning('Rotation reactivation refused: %r lacks %s', actor, self.capability)
            raise Forbidden('Insufficient permissions.')
        if not token or not self.verify_token(token):
            logger.warning('Rotation reactivation refused: bad anti-forgery token from %r', actor)
            raise Forbidden('The link you followed has expired.')

        activated_at = self.clock.arm_rotation_requirement()
        return ReactivationResult(activated_at, Redirect(Route.ADMIN_CONFIRMATION, {'forced': '1'}))
