"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from linkshelf.schemas.link import CamelModel


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserCreated(BaseModel):
    """Registration response."""

    id: str
    name: str
    email: str


class UserRecord(BaseModel):
    """A user as decoded from the store."""

    id: str
    name: str
    email: str
    password_hash: str | None = None
    image: str | None = None
    email_verified_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserResponse(CamelModel):
    """User information response."""

    id: str
    name: str
    email: str
    image: str | None = None
    email_verified: datetime | None = None

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        """Build the public view of a user, leaving out the password hash."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            image=user.image,
            email_verified=user.email_verified_at,
        )


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class VerificationRequest(BaseModel):
    """Request a verification email for an address."""

    email: str | None = None


class VerificationIssued(BaseModel):
    """Verification request response; token is only exposed in development."""

    message: str
    token: str | None = None


class ProfileUpdate(BaseModel):
    """Update the current user's profile."""

    name: str | None = Field(None, min_length=2, max_length=255)
    image: str | None = Field(None, max_length=2048)
    password: str | None = Field(None, min_length=8, max_length=128)
