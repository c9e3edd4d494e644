"""Single-use email verification tokens."""

import logging
import secrets
from datetime import timedelta

from sqlalchemy import delete
from sqlalchemy.orm import Session

from linkshelf.config import get_settings
from linkshelf.models.mixins import utcnow
from linkshelf.models.verification_token import VerificationToken
from linkshelf.services.user_repository import UserRepository

logger = logging.getLogger(__name__)

settings = get_settings()


def generate_token() -> str:
    """32 random bytes, hex encoded."""
    return secrets.token_hex(32)


class VerificationService:
    """Issue and consume email verification tokens."""

    def __init__(self, db: Session):
        self.db = db

    def issue(self, user_id: str, email: str) -> str:
        """Store a new token for ``email`` that expires after the configured window."""
        now = utcnow()
        token = VerificationToken(
            user_id=user_id,
            email=email,
            token=generate_token(),
            expires_at=now + timedelta(hours=settings.verification_token_hours),
            created_at=now,
            updated_at=now,
        )
        self.db.add(token)
        self.db.commit()
        logger.info(f"Issued verification token for user {user_id}")
        return token.token

    def consume(self, token: str) -> bool:
        """Verify the owner of ``token`` and remove the token.

        Expired and already-used tokens are treated as nonexistent. The delete
        is conditional on the token still being unexpired, and only the caller
        whose delete removed the row gets to mark the user verified.
        """
        now = utcnow()
        row = (
            self.db.query(VerificationToken)
            .filter(VerificationToken.token == token, VerificationToken.expires_at > now)
            .first()
        )
        if row is None:
            return False

        user_id, email = row.user_id, row.email
        result = self.db.execute(
            delete(VerificationToken)
            .where(VerificationToken.id == row.id, VerificationToken.expires_at > now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            return False
        self.db.expunge(row)

        if not UserRepository(self.db).mark_email_verified(user_id, email):
            self.db.rollback()
            logger.warning(f"Verification token points at missing user {user_id}")
            return False
        logger.info(f"Verified email for user {user_id}")
        return True
