"""Dashboard endpoint: the user's links narrowed by the sidebar filters."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from linkshelf.api.dependencies import CurrentUser, get_link_repository
from linkshelf.api.links import unwrap_read
from linkshelf.schemas.link import DashboardFilters, DashboardResponse
from linkshelf.services.link_filters import LinkFilter, filter_links
from linkshelf.services.link_repository import LinkRepository

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    current_user: CurrentUser,
    links: Annotated[LinkRepository, Depends(get_link_repository)],
    tag: Annotated[str | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
    link_type: Annotated[str | None, Query(alias="type")] = None,
    q: Annotated[str | None, Query()] = None,
):
    """Get the filtered link list together with the available facets."""
    link_filter = LinkFilter(tag=tag, category=category, link_type=link_type, keyword=q)
    all_links = unwrap_read(links.list_for_user(current_user.id))

    return DashboardResponse(
        links=filter_links(all_links, link_filter),
        tags=unwrap_read(links.distinct_tags(current_user.id)),
        categories=unwrap_read(links.distinct_categories(current_user.id)),
        link_types=unwrap_read(links.distinct_link_types(current_user.id)),
        filters=DashboardFilters(tag=tag, category=category, link_type=link_type, keyword=q),
    )
