"""Mixins for SQLAlchemy models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func


def generate_id() -> str:
    """Generate an opaque record id."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
