"""Link schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from linkshelf.models.enums import LinkType


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def clean_tags(tags: list[str] | None) -> list[str] | None:
    """Trim tags, drop blanks, and drop repeats keeping the first occurrence."""
    if tags is None:
        return None
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


class LinkRecord(CamelModel):
    """A link as decoded from the store and returned by the API."""

    id: str
    user_id: str
    url: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    category: str = ""
    link_type: LinkType = LinkType.WEBSITE
    created_at: datetime
    updated_at: datetime

    @field_validator("description", "category", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_no_tags(cls, value):
        return [] if value is None else value

    @field_validator("link_type", mode="before")
    @classmethod
    def default_link_type(cls, value):
        return LinkType.WEBSITE if not value else value


class LinkDraft(BaseModel):
    """Fields needed to insert a new link."""

    user_id: str
    url: str
    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    category: str = ""
    link_type: LinkType = LinkType.WEBSITE


class LinkCreate(CamelModel):
    """Create a new link.

    url and title are optional here so the handler can answer with a
    specific message when they are missing.
    """

    user_id: str | None = None
    url: str | None = Field(None, max_length=2048)
    title: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=5000)
    tags: list[str] | None = None
    category: str | None = Field(None, max_length=255)
    link_type: LinkType | None = None

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, value: list[str] | None) -> list[str] | None:
        return clean_tags(value)


class LinkUpdate(CamelModel):
    """Update a link."""

    url: str | None = Field(None, max_length=2048)
    title: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=5000)
    tags: list[str] | None = None
    category: str | None = Field(None, max_length=255)
    link_type: LinkType | None = None

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, value: list[str] | None) -> list[str] | None:
        return clean_tags(value)


class LinkCreated(BaseModel):
    """Response for a newly created link."""

    id: str


class LinkUpdated(BaseModel):
    """Response for an updated link."""

    success: bool = True
    link: LinkRecord


class LinkDeleted(BaseModel):
    """Response for a deleted link."""

    success: bool = True


class LinkFacets(CamelModel):
    """Distinct values across a user's links, for the filter sidebar."""

    tags: list[str]
    categories: list[str]
    link_types: list[LinkType]


class DashboardFilters(CamelModel):
    """Filters applied to a dashboard view."""

    tag: str | None = None
    category: str | None = None
    link_type: str | None = None
    keyword: str | None = None


class DashboardResponse(CamelModel):
    """Filtered links together with the facets used to filter them."""

    links: list[LinkRecord]
    tags: list[str]
    categories: list[str]
    link_types: list[LinkType]
    filters: DashboardFilters
