"""Password strength policy"""
import pytest

from rotation_guard.errors import ValidationFailed
from rotation_guard.services.password_policy import PasswordPolicy, ViolationKind, evaluate_password

TOO_SHORT = ViolationKind.TOO_SHORT
MISSING_UPPERCASE = ViolationKind.MISSING_UPPERCASE
MISSING_DIGIT = ViolationKind.MISSING_DIGIT
MISSING_SPECIAL = ViolationKind.MISSING_SPECIAL


@pytest.fixture
def policy():
    return PasswordPolicy()


@pytest.mark.parametrize('password', [
    'Correct-Horse-Battery-9',
    'A' + 'a' * 19 + '1!',
    'Tr0ub4dor & 3 staples XY',
])
def test_strong_passwords_pass(policy, password):
    assert len(password) >= 22
    assert policy.evaluate(password) == frozenset()


def test_short_password_reports_only_length(policy):
    assert policy.evaluate('ShortPw1!') == {TOO_SHORT}


def test_lowercase_only_reports_three_rules(policy):
    assert policy.evaluate('a' * 22) == {MISSING_UPPERCASE, MISSING_DIGIT, MISSING_SPECIAL}


@pytest.mark.parametrize('password', ['a', 'A1!', 'Aa1!' * 5, 'x' * 21])
def test_anything_shorter_than_minimum_is_too_short(policy, password):
    assert TOO_SHORT in policy.evaluate(password)


def test_all_rules_reported_together(policy):
    assert policy.evaluate('abc') == {TOO_SHORT, MISSING_UPPERCASE, MISSING_DIGIT, MISSING_SPECIAL}


@pytest.mark.parametrize('password', ['', None])
def test_empty_password_has_no_violations(policy, password):
    assert policy.evaluate(password) == frozenset()


def test_length_counts_characters_not_bytes(policy):
    # 21 characters but well over 22 bytes in UTF-8
    password = 'ř' * 19 + 'A1'
    assert len(password.encode('utf-8')) > 22
    assert TOO_SHORT in policy.evaluate(password)
    assert TOO_SHORT not in policy.evaluate('ř' * 20 + 'A1')


@pytest.mark.parametrize('upper', ['Ž', 'Ω', 'Ж'])
def test_uppercase_in_any_script(policy, upper):
    assert MISSING_UPPERCASE not in policy.evaluate(upper + 'a' * 20 + '1')


def test_only_ascii_digits_count(policy):
    # ARABIC-INDIC DIGIT THREE is a decimal digit, but not 0-9
    violations = policy.evaluate('A' + 'a' * 20 + '!\u0663')
    assert violations == {MISSING_DIGIT}


def test_non_ascii_letter_counts_as_special(policy):
    assert policy.evaluate('ábcdefghijklmnopqrstuV1') == frozenset()


def test_space_counts_as_special(policy):
    assert MISSING_SPECIAL not in policy.evaluate('Aaaaaaaaaa aaaaaaaaaa1')


def test_custom_minimum_length():
    policy = PasswordPolicy(min_length=8)
    assert policy.evaluate('Abcdef1!') == frozenset()
    assert policy.evaluate('Abcde1!') == {TOO_SHORT}


def test_messages_follow_rule_order(policy):
    messages = policy.messages({MISSING_SPECIAL, TOO_SHORT, MISSING_DIGIT})
    assert messages == [
        'Password must be at least 22 characters.',
        'Password must include at least one number.',
        'Password must include at least one special character.',
    ]


def test_validate_raises_with_messages(policy):
    with pytest.raises(ValidationFailed) as excinfo:
        policy.validate('ShortPw1!')
    assert excinfo.value.violations == {TOO_SHORT}
    assert excinfo.value.messages == ['Password must be at least 22 characters.']


def test_validate_accepts_strong_and_empty(policy):
    policy.validate('Correct-Horse-Battery-9')
    policy.validate('')


def test_hint_and_requirements_mention_minimum():
    policy = PasswordPolicy(min_length=30)
    assert '30 characters' in policy.hint()
    assert policy.requirements()[0] == 'Minimum length: 30 characters'


def test_module_level_evaluate_uses_default_policy():
    assert evaluate_password('ShortPw1!') == {TOO_SHORT}
