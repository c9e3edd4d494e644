"""Email address validation with a disposable-domain denylist."""

import re
from dataclasses import dataclass

# RFC 5322 approximation: local part charset, then dot-separated domain labels
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

DISPOSABLE_DOMAINS = frozenset(
    {
        "mailinator.com",
        "tempmail.com",
        "temp-mail.org",
        "guerrillamail.com",
        "yopmail.com",
        "sharklasers.com",
        "throwawaymail.com",
        "10minutemail.com",
        "mailnesia.com",
        "trashmail.com",
        "dispostable.com",
    }
)

REASON_REQUIRED = "required"
REASON_INVALID_FORMAT = "invalid format"
REASON_DISPOSABLE = "disposable not allowed"

REASON_MESSAGES = {
    REASON_REQUIRED: "Email is required",
    REASON_INVALID_FORMAT: "Invalid email format",
    REASON_DISPOSABLE: "Disposable email addresses are not allowed",
}


@dataclass(frozen=True)
class EmailValidation:
    """Outcome of validating an email address."""

    valid: bool
    reason: str | None = None

    @property
    def message(self) -> str | None:
        """Human-readable message for the failure reason."""
        return REASON_MESSAGES.get(self.reason) if self.reason else None


def is_valid_email_format(email: str) -> bool:
    """Check the address against the structural pattern."""
    return EMAIL_PATTERN.match(email) is not None


def is_disposable_email(email: str) -> bool:
    """Check whether the address belongs to a throwaway mail provider."""
    _, _, domain = email.partition("@")
    return domain.lower() in DISPOSABLE_DOMAINS


def validate_email(email: str | None) -> EmailValidation:
    """Validate an email address; the first failing rule wins."""
    if not email or not email.strip():
        return EmailValidation(valid=False, reason=REASON_REQUIRED)
    if not is_valid_email_format(email):
        return EmailValidation(valid=False, reason=REASON_INVALID_FORMAT)
    if is_disposable_email(email):
        return EmailValidation(valid=False, reason=REASON_DISPOSABLE)
    return EmailValidation(valid=True)
