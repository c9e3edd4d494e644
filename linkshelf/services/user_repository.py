"""User persistence."""

import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from linkshelf.models.mixins import utcnow
from linkshelf.models.user import User
from linkshelf.schemas.auth import UserRecord
from linkshelf.services.auth import get_password_hash, verify_password
from linkshelf.services.errors import RecordDecodeError, UserAlreadyExistsError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "email", "password", "image")


def normalize_email(email: str) -> str:
    """Emails are stored and looked up lower-cased."""
    return email.strip().lower()


def decode_user(row: User) -> UserRecord:
    """Turn a users row into a typed record."""
    try:
        return UserRecord.model_validate(
            {
                "id": row.id,
                "name": row.name,
                "email": row.email,
                "password_hash": row.password_hash,
                "image": row.image,
                "email_verified_at": row.email_verified_at,
                "created_at": row.created_at,
                "updated_at": row.updated_at,
            }
        )
    except ValidationError as e:
        raise RecordDecodeError("users", row.id, str(e)) from e


class UserRepository:
    """CRUD for user accounts."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> UserRecord | None:
        row = self.db.query(User).filter(User.email == normalize_email(email)).first()
        return decode_user(row) if row else None

    def get_by_id(self, user_id: str) -> UserRecord | None:
        row = self.db.get(User, user_id)
        return decode_user(row) if row else None

    def create(self, name: str, email: str, password: str | None) -> UserRecord:
        """Create an account.

        The unique index on ``users.email`` is the only duplicate check, so
        two concurrent registrations for one address cannot both succeed.
        """
        email = normalize_email(email)
        now = utcnow()
        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(password) if password else None,
            created_at=now,
            updated_at=now,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Registration rejected, email already in use: {email}")
            raise UserAlreadyExistsError(email) from e
        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return decode_user(user)

    def update(self, user_id: str, fields: dict[str, Any]) -> bool:
        """Overwrite the supplied fields; returns False if the user is gone."""
        user = self.db.get(User, user_id)
        if user is None:
            return False

        for key in UPDATABLE_FIELDS:
            if key not in fields or fields[key] is None:
                continue
            if key == "password":
                user.password_hash = get_password_hash(fields["password"])
            elif key == "email":
                user.email = normalize_email(fields["email"])
            else:
                setattr(user, key, fields[key])
        user.updated_at = utcnow()

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(normalize_email(fields.get("email") or "")) from e
        return True

    def authenticate(self, email: str, password: str) -> UserRecord | None:
        """Check credentials; OAuth-only accounts have no password and never match."""
        user = self.get_by_email(email)
        if not user or not user.password_hash:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def mark_email_verified(self, user_id: str, email: str) -> bool:
        """Record that the user proved control of ``email``."""
        user = self.db.get(User, user_id)
        if user is None:
            return False
        now = utcnow()
        verified_email = normalize_email(email)
        user.email_verified_at = now
        user.email = verified_email
        user.updated_at = now
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(verified_email) from e
        return True
