"""Link API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import AnyUrl, TypeAdapter, ValidationError

from linkshelf.api.dependencies import CurrentUser, get_link_repository
from linkshelf.schemas.auth import UserRecord
from linkshelf.schemas.link import (
    LinkCreate,
    LinkCreated,
    LinkDeleted,
    LinkDraft,
    LinkFacets,
    LinkRecord,
    LinkUpdate,
    LinkUpdated,
)
from linkshelf.services.link_repository import LinkRepository
from linkshelf.services.link_types import classify_link_type
from linkshelf.services.results import ReadResult


router = APIRouter(prefix="/links", tags=["links"])

url_adapter = TypeAdapter(AnyUrl)


def require_url_and_title(url: str | None, title: str | None) -> None:
    """Reject bodies that are missing either required field."""
    if not url or not url.strip() or not title or not title.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="URL and title are required"
        )


def require_well_formed_url(url: str) -> None:
    """Reject URLs that do not parse as absolute URLs."""
    try:
        url_adapter.validate_python(url)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid URL format"
        ) from e


def get_owned_link(links: LinkRepository, link_id: str, user: UserRecord) -> LinkRecord:
    """Get a link the user owns. Existence is checked before ownership."""
    link = links.get(link_id)
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
    if link.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return link


def unwrap_read(result: ReadResult, detail: str = "Failed to fetch links"):
    """Surface a failed read as a 500 instead of an empty collection."""
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
    return result.data


@router.get("", response_model=list[LinkRecord])
def get_links(
    current_user: CurrentUser,
    links: Annotated[LinkRepository, Depends(get_link_repository)],
):
    """Get all links owned by the current user, newest first."""
    return unwrap_read(links.list_for_user(current_user.id))


@router.get("/search", response_model=list[LinkRecord])
def search_links(
    current_user: CurrentUser,
    links: Annotated[LinkRepository, Depends(get_link_repository)],
    q: Annotated[str, Query(max_length=200)] = "",
):
    """Search the current user's links."""
    return unwrap_read(links.search(current_user.id, q))


@router.get("/facets", response_model=LinkFacets)
def get_link_facets(
    current_user: CurrentUser,
    links: Annotated[LinkRepository, Depends(get_link_repository)],
):
    """Distinct tags, categories and link types across the user's links."""
    return LinkFacets(
        tags=unwrap_read(links.distinct_tags(current_user.id)),
        categories=unwrap_read(links.distinct_categories(current_user.id)),
        link_types=unwrap_read(links.distinct_link_types(current_user.id)),
    )


@router.post("", response_model=LinkCreated, status_code=status.HTTP_201_CREATED)
def create_link(
    link_data: LinkCreate,
    current_user: CurrentUser,
    links: Annotated[LinkRepository, Depends(get_link_repository)],
):
    """Save a new link, detecting its type from the URL when not given."""
    require_url_and_title(link_data.url, link_data.title)

    # The body must name the session user as owner
    if link_data.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid user ID")

    url = link_data.url.strip()
    require_well_formed_url(url)

    link_id = links.create(
        LinkDraft(
            user_id=current_user.id,
            url=url,
            title=link_data.title.strip(),
            description=link_data.description or "",
            tags=link_data.tags or [],
            category=link_data.category or "",
            link_type=link_data.link_type or classify_link_type(url),
        )
    )
    return LinkCreated(id=link_id)


@router.get("/{link_id}", response_model=LinkRecord)
def get_link(
    link_id: str,
    current_user: CurrentUser,
    links: Annotated[LinkRepository, Depends(get_link_repository)],
):
    """Get a specific link."""
    return get_owned_link(links, link_id, current_user)


@router.patch("/{link_id}", response_model=LinkUpdated)
def update_link(
    link_id: str,
    link_data: LinkUpdate,
    current_user: CurrentUser,
    links: Annotated[LinkRepository, Depends(get_link_repository)],
):
    """Update a link. Fields left out of the body keep their stored values."""
    get_owned_link(links, link_id, current_user)

    require_url_and_title(link_data.url, link_data.title)
    url = link_data.url.strip()
    require_well_formed_url(url)

    fields = link_data.model_dump(exclude_unset=True)
    fields["url"] = url
    fields["title"] = link_data.title.strip()
    for key, default in (("description", ""), ("tags", []), ("category", "")):
        if key in fields and fields[key] is None:
            fields[key] = default
    if fields.get("link_type") is None:
        fields["link_type"] = classify_link_type(url)

    updated = links.update(link_id, fields)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
    return LinkUpdated(link=updated)


@router.delete("/{link_id}", response_model=LinkDeleted)
def delete_link(
    link_id: str,
    current_user: CurrentUser,
    links: Annotated[LinkRepository, Depends(get_link_repository)],
):
    """Delete a link permanently."""
    get_owned_link(links, link_id, current_user)
    links.delete(link_id)
    return LinkDeleted()
