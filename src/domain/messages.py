"""
Localized messages - Error keys and their per-locale display text.

Error identity (ErrorKey) is decoupled from display text: validation and
uniqueness checks produce keys, and the API edge renders them for the
caller's locale. Missing translations fall back to the default locale.
"""

from enum import Enum

DEFAULT_LOCALE = "en"


class ErrorKey(str, Enum):
    """Message keys produced by registration checks."""

    USERNAME_NULL = "username.null"
    USERNAME_SIZE = "username.size"
    EMAIL_NULL = "email.null"
    EMAIL_INVALID = "email.invalid"
    EMAIL_IN_USE = "email.inUse"
    PASSWORD_NULL = "password.null"
    PASSWORD_SIZE = "password.size"
    PASSWORD_PATTERN = "password.pattern"
    REGISTRATION_SUCCESS = "registration.success"


MESSAGES: dict[str, dict[ErrorKey, str]] = {
    "en": {
        ErrorKey.USERNAME_NULL: "Username cannot be null",
        ErrorKey.USERNAME_SIZE: "Must have minimum 4 and maximum 32 characters",
        ErrorKey.EMAIL_NULL: "E-mail cannot be null",
        ErrorKey.EMAIL_INVALID: "E-mail is not valid",
        ErrorKey.EMAIL_IN_USE: "E-mail in use",
        ErrorKey.PASSWORD_NULL: "Password cannot be null",
        ErrorKey.PASSWORD_SIZE: "Password must be at least 6 characters long",
        ErrorKey.PASSWORD_PATTERN: (
            "Password must have at least one uppercase, one lowercase and one number"
        ),
        ErrorKey.REGISTRATION_SUCCESS: "User created",
    },
    "es": {
        ErrorKey.USERNAME_NULL: "El nombre de usuario no puede ser nulo",
        ErrorKey.USERNAME_SIZE: "Debe tener mínimo 4 y máximo 32 caracteres",
        ErrorKey.EMAIL_NULL: "El correo electrónico no puede ser nulo",
        ErrorKey.EMAIL_INVALID: "El correo electrónico no es válido",
        ErrorKey.EMAIL_IN_USE: "El correo electrónico ya está en uso",
        ErrorKey.PASSWORD_NULL: "La contraseña no puede ser nula",
        ErrorKey.PASSWORD_SIZE: "La contraseña debe tener al menos 6 caracteres",
        ErrorKey.PASSWORD_PATTERN: (
            "La contraseña debe tener al menos una mayúscula, una minúscula y un número"
        ),
        ErrorKey.REGISTRATION_SUCCESS: "Usuario creado",
    },
}

SUPPORTED_LOCALES = frozenset(MESSAGES)


def translate(key: ErrorKey, locale: str = DEFAULT_LOCALE) -> str:
    """
    Render a message key for a locale.

    Unknown locales and missing translations fall back to the default
    locale; this function never raises for a known key.
    """
    translated = MESSAGES.get(locale, {}).get(key)
    if translated is None:
        translated = MESSAGES[DEFAULT_LOCALE][key]
    return translated


def resolve_locale(accept_language: str | None, default: str = DEFAULT_LOCALE) -> str:
    """
    Pick a supported locale from an Accept-Language header value.

    Entries are ranked by their q-weight (header order breaks ties) and
    matched on the primary language tag, so "es-MX,es;q=0.9" resolves to
    "es". Anything unsupported resolves to the default.
    """
    if default not in SUPPORTED_LOCALES:
        default = DEFAULT_LOCALE
    if not accept_language:
        return default

    candidates: list[tuple[float, int, str]] = []
    for position, entry in enumerate(accept_language.split(",")):
        tag, _, params = entry.strip().partition(";")
        weight = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                weight = float(params[2:])
            except ValueError:
                weight = 0.0
        primary = tag.strip().split("-")[0].lower()
        if primary and weight > 0:
            candidates.append((-weight, position, primary))

    for _, _, primary in sorted(candidates):
        if primary in SUPPORTED_LOCALES:
            return primary
    return default
