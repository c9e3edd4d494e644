"""Pydantic schemas for API requests and responses."""

from linkshelf.schemas.auth import (
    AuthResponse,
    ProfileUpdate,
    UserCreated,
    UserLogin,
    UserRecord,
    UserRegister,
    UserResponse,
    VerificationIssued,
    VerificationRequest,
)
from linkshelf.schemas.link import (
    DashboardResponse,
    LinkCreate,
    LinkCreated,
    LinkDraft,
    LinkFacets,
    LinkRecord,
    LinkUpdate,
    LinkUpdated,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserCreated",
    "UserRecord",
    "UserResponse",
    "AuthResponse",
    "VerificationRequest",
    "VerificationIssued",
    "ProfileUpdate",
    "LinkRecord",
    "LinkDraft",
    "LinkCreate",
    "LinkUpdate",
    "LinkCreated",
    "LinkUpdated",
    "LinkFacets",
    "DashboardResponse",
]
