"""User model."""

from sqlalchemy import Column, DateTime, String

from linkshelf.database import Base
from linkshelf.models.mixins import TimestampMixin, generate_id


class User(Base, TimestampMixin):
    """User model for authentication and link ownership."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Null for OAuth-only accounts
    password_hash = Column(String(255), nullable=True)
    image = Column(String(2048), nullable=True)
    email_verified_at = Column(DateTime(timezone=True), nullable=True)
