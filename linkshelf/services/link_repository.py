"""Link persistence scoped by owning user."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from linkshelf.models.enums import LinkType
from linkshelf.models.link import Link
from linkshelf.models.mixins import utcnow
from linkshelf.schemas.link import LinkDraft, LinkRecord
from linkshelf.services.errors import RecordDecodeError
from linkshelf.services.link_filters import matches_search
from linkshelf.services.results import ReadResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

UPDATABLE_FIELDS = ("url", "title", "description", "tags", "category", "link_type")


def decode_link(row: Link) -> LinkRecord:
    """Turn a links row into a typed record, or raise RecordDecodeError."""
    try:
        return LinkRecord.model_validate(
            {
                "id": row.id,
                "user_id": row.user_id,
                "url": row.url,
                "title": row.title,
                "description": row.description,
                "tags": row.tags,
                "category": row.category,
                "link_type": row.link_type,
                "created_at": row.created_at,
                "updated_at": row.updated_at,
            }
        )
    except ValidationError as e:
        raise RecordDecodeError("links", row.id, str(e)) from e


def _collect_unique(values) -> list:
    seen: list = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


class LinkRepository:
    """CRUD and aggregate queries over the links table."""

    def __init__(self, db: Session):
        self.db = db

    def _read(self, what: str, user_id: str, reader: Callable[[], T]) -> ReadResult[T]:
        """Run a read and capture store or decode failures instead of raising."""
        try:
            return ReadResult(data=reader())
        except (SQLAlchemyError, RecordDecodeError) as e:
            logger.error(f"Error fetching {what} for user {user_id}: {e}")
            return ReadResult(error=e)

    def _user_links(self, user_id: str):
        return (
            self.db.query(Link)
            .filter(Link.user_id == user_id)
            .order_by(Link.created_at.desc(), Link.id.desc())
        )

    def list_for_user(self, user_id: str) -> ReadResult[list[LinkRecord]]:
        """All of a user's links, newest first."""
        return self._read(
            "links", user_id, lambda: [decode_link(row) for row in self._user_links(user_id)]
        )

    def get(self, link_id: str) -> LinkRecord | None:
        """Fetch one link by id; a missing link is not an error."""
        row = self.db.get(Link, link_id)
        return decode_link(row) if row else None

    def create(self, draft: LinkDraft) -> str:
        """Insert a link and return its generated id.

        Timestamps are always set here, whatever the caller had in mind.
        """
        now = utcnow()
        link = Link(
            user_id=draft.user_id,
            url=draft.url,
            title=draft.title,
            description=draft.description,
            tags=list(draft.tags),
            category=draft.category,
            link_type=LinkType(draft.link_type).value,
            created_at=now,
            updated_at=now,
        )
        self.db.add(link)
        self.db.commit()
        logger.info(f"Created link {link.id} for user {draft.user_id}")
        return link.id

    def update(self, link_id: str, fields: dict[str, Any]) -> LinkRecord | None:
        """Overwrite only the supplied fields. Ownership never changes here."""
        link = self.db.get(Link, link_id)
        if link is None:
            return None

        for key in UPDATABLE_FIELDS:
            if key not in fields:
                continue
            value = fields[key]
            if key == "link_type":
                value = LinkType(value).value
            elif key == "tags":
                value = list(value or [])
            setattr(link, key, value)
        link.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(link)
        return decode_link(link)

    def delete(self, link_id: str) -> bool:
        """Hard delete. Returns False when there was nothing to delete."""
        link = self.db.get(Link, link_id)
        if link is None:
            return False
        self.db.delete(link)
        self.db.commit()
        logger.info(f"Deleted link {link_id}")
        return True

    def distinct_tags(self, user_id: str) -> ReadResult[list[str]]:
        """Every tag the user has used, first-seen order."""

        def reader() -> list[str]:
            rows = self._user_links(user_id).with_entities(Link.tags)
            return _collect_unique(tag for (tags,) in rows for tag in (tags or []))

        return self._read("tags", user_id, reader)

    def distinct_categories(self, user_id: str) -> ReadResult[list[str]]:
        """Every non-empty category the user has used."""

        def reader() -> list[str]:
            rows = self._user_links(user_id).with_entities(Link.category)
            return _collect_unique(category for (category,) in rows)

        return self._read("categories", user_id, reader)

    def distinct_link_types(self, user_id: str) -> ReadResult[list[LinkType]]:
        """Every link type present in the user's collection."""

        def reader() -> list[LinkType]:
            rows = self._user_links(user_id).with_entities(Link.id, Link.link_type)
            link_types = []
            for link_id, link_type in rows:
                if not link_type:
                    continue
                try:
                    link_types.append(LinkType(link_type))
                except ValueError as e:
                    raise RecordDecodeError("links", link_id, str(e)) from e
            return _collect_unique(link_types)

        return self._read("link types", user_id, reader)

    def search(self, user_id: str, query: str) -> ReadResult[list[LinkRecord]]:
        """Case-insensitive substring search across a user's links, newest first."""
        query = query.strip()
        if not query:
            return self.list_for_user(user_id)

        def reader() -> list[LinkRecord]:
            # Matched in Python: SQLite's lower() folds ASCII only, and tags
            # are stored as escaped JSON text.
            records = [decode_link(row) for row in self._user_links(user_id)]
            return [record for record in records if matches_search(record, query)]

        return self._read("search results", user_id, reader)
