"""Dashboard filtering over an already-fetched list of links."""

from collections.abc import Iterable
from dataclasses import dataclass

from linkshelf.schemas.link import LinkRecord


@dataclass(frozen=True)
class LinkFilter:
    """Optional filter dimensions; ``None`` or "" means no constraint."""

    tag: str | None = None
    category: str | None = None
    link_type: str | None = None
    keyword: str | None = None


def has_tag(link: LinkRecord, tag: str) -> bool:
    wanted = tag.lower()
    return any(t.lower() == wanted for t in link.tags)


def in_category(link: LinkRecord, category: str) -> bool:
    return bool(link.category) and link.category.lower() == category.lower()


def is_link_type(link: LinkRecord, link_type: str) -> bool:
    return link.link_type.value == link_type.lower()


def matches_keyword(link: LinkRecord, keyword: str) -> bool:
    """Keyword appears in the title, description, url, a tag, or the category."""
    needle = keyword.lower()
    return (
        needle in link.title.lower()
        or needle in link.description.lower()
        or needle in link.url.lower()
        or any(needle in tag.lower() for tag in link.tags)
        or needle in link.category.lower()
    )


def matches_search(link: LinkRecord, query: str) -> bool:
    """Like matches_keyword, but the link type is searchable too."""
    return matches_keyword(link, query) or query.lower() in link.link_type.value


def filter_links(links: Iterable[LinkRecord], link_filter: LinkFilter) -> list[LinkRecord]:
    """Apply every supplied filter together (AND) and return a new list."""
    result = list(links)
    if link_filter.tag:
        result = [link for link in result if has_tag(link, link_filter.tag)]
    if link_filter.category:
        result = [link for link in result if in_category(link, link_filter.category)]
    if link_filter.link_type:
        result = [link for link in result if is_link_type(link, link_filter.link_type)]
    if link_filter.keyword:
        result = [link for link in result if matches_keyword(link, link_filter.keyword)]
    return result
