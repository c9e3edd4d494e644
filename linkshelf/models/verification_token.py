"""Email verification token model."""

from sqlalchemy import Column, DateTime, ForeignKey, String

from linkshelf.database import Base
from linkshelf.models.mixins import TimestampMixin, generate_id


class VerificationToken(Base, TimestampMixin):
    """Single-use token proving control of an email address."""

    __tablename__ = "verification_tokens"

    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    token = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
