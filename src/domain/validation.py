"""
Registration input validation - Per-field rule chains.

Each field owns an ordered list of rules. Within a field the first failing
rule wins and later rules are not evaluated; fields are always evaluated
independently so every failing field is reported in one pass.

Field rules:
    username: present -> 4..32 characters
    email:    present -> local@domain with a dot-delimited domain
    password: present -> at least 6 characters -> upper + lower + digit

Empty strings count as missing. Input is never trimmed.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from email_validator import EmailNotValidError, validate_email

from .messages import DEFAULT_LOCALE, ErrorKey, translate
from .models import RegistrationRequest

FIELD_ORDER = ("username", "email", "password")

USERNAME_MIN_LENGTH = 4
USERNAME_MAX_LENGTH = 32
PASSWORD_MIN_LENGTH = 6

_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).*$", re.DOTALL | re.ASCII)

# A rule returns True when the value passes.
Rule = tuple[Callable[[str], bool], ErrorKey]


def _is_email(value: str) -> bool:
    # Syntax only. .test is accepted; the library still rejects reserved names
    # such as .local and .localhost. The domain must contain a dot.
    try:
        validated = validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError:
        return False
    return "." in validated.ascii_domain


RULES: Mapping[str, tuple[ErrorKey, list[Rule]]] = {
    "username": (
        ErrorKey.USERNAME_NULL,
        [
            (
                lambda v: USERNAME_MIN_LENGTH <= len(v) <= USERNAME_MAX_LENGTH,
                ErrorKey.USERNAME_SIZE,
            ),
        ],
    ),
    "email": (
        ErrorKey.EMAIL_NULL,
        [(_is_email, ErrorKey.EMAIL_INVALID)],
    ),
    "password": (
        ErrorKey.PASSWORD_NULL,
        [
            (lambda v: len(v) >= PASSWORD_MIN_LENGTH, ErrorKey.PASSWORD_SIZE),
            (lambda v: _PASSWORD_PATTERN.match(v) is not None, ErrorKey.PASSWORD_PATTERN),
        ],
    ),
}


@dataclass(frozen=True)
class ValidationResult:
    """Ordered field -> error key mapping; empty when the input is valid."""

    errors: dict[str, ErrorKey] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def with_error(self, field_name: str, key: ErrorKey) -> "ValidationResult":
        """Return a copy with ``key`` set for ``field_name``, keeping field order."""
        merged = {**self.errors, field_name: key}
        ordered = {name: merged[name] for name in FIELD_ORDER if name in merged}
        return ValidationResult(ordered)

    def localized(self, locale: str = DEFAULT_LOCALE) -> dict[str, str]:
        """Render the error set for a locale, preserving field order."""
        return {name: translate(key, locale) for name, key in self.errors.items()}

    @classmethod
    def email_in_use(cls) -> "ValidationResult":
        return cls({"email": ErrorKey.EMAIL_IN_USE})


def _check_field(value: str | None, null_key: ErrorKey, rules: list[Rule]) -> ErrorKey | None:
    if not value:
        return null_key
    for passes, key in rules:
        if not passes(value):
            return key
    return None


def validate(request: RegistrationRequest) -> ValidationResult:
    """Validate a registration request, collecting one error per failing field."""
    errors: dict[str, ErrorKey] = {}
    for name in FIELD_ORDER:
        null_key, rules = RULES[name]
        failure = _check_field(getattr(request, name), null_key, rules)
        if failure is not None:
            errors[name] = failure
    return ValidationResult(errors)
