"""Link type detection from URLs."""

from linkshelf.models.enums import LinkType

# Ordered: the first entry with a matching substring wins
LINK_TYPE_PATTERNS: list[tuple[tuple[str, ...], LinkType]] = [
    (("facebook.com", "fb.com"), LinkType.FACEBOOK),
    (("twitter.com", "x.com"), LinkType.TWITTER),
    (("instagram.com",), LinkType.INSTAGRAM),
    (("linkedin.com",), LinkType.LINKEDIN),
    (("youtube.com", "youtu.be"), LinkType.YOUTUBE),
    (("github.com",), LinkType.GITHUB),
    (("pinterest.com",), LinkType.PINTEREST),
    (("tiktok.com",), LinkType.TIKTOK),
    (("reddit.com",), LinkType.REDDIT),
]


def classify_link_type(url: str) -> LinkType:
    """Map a URL to the platform it points at, or website if none match."""
    lower_url = url.lower()
    for patterns, link_type in LINK_TYPE_PATTERNS:
        if any(pattern in lower_url for pattern in patterns):
            return link_type
    return LinkType.WEBSITE
