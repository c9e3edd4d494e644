"""Database configuration and session management."""

import json
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from linkshelf.config import get_settings

settings = get_settings()


def _json_serializer(value: Any) -> str:
    # Store non-ASCII tags as-is rather than \u escapes
    return json.dumps(value, ensure_ascii=False)


def build_engine(database_url: str):
    """Create an engine with the options every environment shares."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            json_serializer=_json_serializer,
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        json_serializer=_json_serializer,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from linkshelf import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
