# rotation_guard/errors.py
"""Exceptions raised by the rotation policy engine"""


class RotationGuardError(Exception):
    """Base class for policy engine errors"""


class ValidationFailed(RotationGuardError):
    """Candidate password violates one or more strength rules"""

    def __init__(self, violations, messages=None):
        self.violations = frozenset(violations)
        self.messages = list(messages or [])
        super().__init__('; '.join(self.messages) or 'Password rejected by policy')


class Forbidden(RotationGuardError):
    """Actor may not perform the requested administrative action"""
