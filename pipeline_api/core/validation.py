"""Password strength and email shape checks for user accounts."""

import re
from collections.abc import Callable

PASSWORD_MIN_LEN = 8
PASSWORD_SPECIAL_CHARACTERS = "$&+,:;=?@#|'<>.^*()%!-"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_DIGIT = re.compile(r"\d")
_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_SPECIAL = re.compile("[" + re.escape(PASSWORD_SPECIAL_CHARACTERS) + "]")


class CredentialError(ValueError):
    """Raised when a password or email fails validation; message is shown to the caller."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Checked in order; callers only ever see the first failing rule.
PASSWORD_RULES: tuple[tuple[str, Callable[[str], object]], ...] = (
    (
        "Password must be at least 8 characters long",
        lambda pw: len(pw) >= PASSWORD_MIN_LEN,
    ),
    ("Password must contain at least one number", lambda pw: _DIGIT.search(pw)),
    (
        "Password must contain at least one uppercase letter",
        lambda pw: _UPPER.search(pw),
    ),
    (
        "Password must contain at least one lowercase letter",
        lambda pw: _LOWER.search(pw),
    ),
    (
        "Password must contain at least one special character",
        lambda pw: _SPECIAL.search(pw),
    ),
)


def validate_password(password: str) -> bool:
    """
    Check password strength after trimming surrounding whitespace.

    Raises CredentialError with the message of the first rule violated.
    Returns True when every rule passes.
    """
    candidate = password.strip()
    for message, check in PASSWORD_RULES:
        if not check(candidate):
            raise CredentialError(message)
    return True


def validate_email(email: str) -> str:
    """Return the trimmed email, or raise CredentialError if it is not local@domain.tld shaped."""
    candidate = email.strip()
    if not EMAIL_PATTERN.match(candidate):
        raise CredentialError("Email format is invalid")
    return candidate
