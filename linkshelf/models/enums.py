"""Enums for model fields."""

from enum import Enum


class LinkType(str, Enum):
    """Source platform of a saved link."""

    WEBSITE = "website"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"
    YOUTUBE = "youtube"
    GITHUB = "github"
    PINTEREST = "pinterest"
    TIKTOK = "tiktok"
    REDDIT = "reddit"
    OTHER = "other"
