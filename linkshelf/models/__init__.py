"""SQLAlchemy models."""

from linkshelf.models.link import Link
from linkshelf.models.user import User
from linkshelf.models.verification_token import VerificationToken

__all__ = [
    "User",
    "Link",
    "VerificationToken",
]
