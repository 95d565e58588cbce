# rotation_guard/services/password_policy.py
"""Password strength policy
Every rule is checked independently so a candidate can report several
violations at once. Evaluation is pure: no I/O, no state.
"""
import re
import unicodedata
from enum import Enum
from typing import FrozenSet, List, Optional

from rotation_guard.errors import ValidationFailed

MIN_PASSWORD_LENGTH = 22

_ASCII_DIGIT = re.compile(r'[0-9]')
_NON_ALPHANUMERIC = re.compile(r'[^A-Za-z0-9]')


class ViolationKind(Enum):
    TOO_SHORT = 'too_short'
    MISSING_UPPERCASE = 'missing_uppercase'
    MISSING_DIGIT = 'missing_digit'
    MISSING_SPECIAL = 'missing_special'


# Display order for messages
_ORDER = (
    ViolationKind.TOO_SHORT,
    ViolationKind.MISSING_UPPERCASE,
    ViolationKind.MISSING_DIGIT,
    ViolationKind.MISSING_SPECIAL,
)


class PasswordPolicy:
    """
    Strength rules for new passwords

    Args:
        min_length: Minimum number of characters (code points, not bytes)
    """

    def __init__(self, min_length: int = MIN_PASSWORD_LENGTH):
        self.min_length = min_length

    def evaluate(self, password: Optional[str]) -> FrozenSet[ViolationKind]:
        """
        Return the set of rules the candidate violates

        An empty or missing password yields no violations; whether a blank
        field means "keep the current password" or "required" is up to the
        caller.
        """
        if not password:
            return frozenset()

        violations = set()
        if len(password) < self.min_length:
            violations.add(ViolationKind.TOO_SHORT)
        if not any(unicodedata.category(ch) == 'Lu' for ch in password):
            violations.add(ViolationKind.MISSING_UPPERCASE)
        if not _ASCII_DIGIT.search(password):
            violations.add(ViolationKind.MISSING_DIGIT)
        if not _NON_ALPHANUMERIC.search(password):
            violations.add(ViolationKind.MISSING_SPECIAL)
        return frozenset(violations)

    def validate(self, password: Optional[str]) -> None:
        """Raise ValidationFailed when the candidate breaks any rule"""
        violations = self.evaluate(password)
        if violations:
            raise ValidationFailed(violations, self.messages(violations))

    def messages(self, violations) -> List[str]:
        """One user-facing message per violation, in a stable order"""
        texts = {
            ViolationKind.TOO_SHORT: f'Password must be at least {self.min_length} characters.',
            ViolationKind.MISSING_UPPERCASE: 'Password must include at least one uppercase letter.',
            ViolationKind.MISSING_DIGIT: 'Password must include at least one number.',
            ViolationKind.MISSING_SPECIAL: 'Password must include at least one special character.',
        }
        return [texts[kind] for kind in _ORDER if kind in violations]

    def hint(self) -> str:
        return (f'Hint: Password must be at least {self.min_length} characters long '
                'and include an uppercase letter, a number, and a special character.')

    def requirements(self) -> List[str]:
        """Checklist shown with the forced change prompt"""
        return [
            f'Minimum length: {self.min_length} characters',
            'At least one uppercase letter',
            'At least one number',
            'At least one special character',
            'Passwords must match',
        ]


default_policy = PasswordPolicy()


def evaluate_password(candidate: Optional[str]) -> FrozenSet[ViolationKind]:
    """Evaluate a candidate against the default policy"""
    return default_policy.evaluate(candidate)
