"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import RedirectResponse

from linkshelf.api.dependencies import (
    CurrentUser,
    get_user_repository,
    get_verification_service,
)
from linkshelf.config import get_settings
from linkshelf.schemas.auth import (
    AuthResponse,
    UserCreated,
    UserLogin,
    UserRegister,
    UserResponse,
    VerificationIssued,
    VerificationRequest,
)
from linkshelf.services.auth import create_access_token
from linkshelf.services.email_validation import validate_email
from linkshelf.services.errors import UserAlreadyExistsError
from linkshelf.services.user_repository import UserRepository
from linkshelf.services.verification import VerificationService

settings = get_settings()

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Register a new user."""
    try:
        user = users.create(user_data.name, user_data.email, user_data.password)
    except UserAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        ) from e

    return UserCreated(id=user.id, name=user.name, email=user.email)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Login with email and password."""
    user = users.authenticate(credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(user.id, user.email)
    response.set_cookie(
        settings.session_cookie_name,
        access_token,
        max_age=settings.jwt_expiration_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )

    return AuthResponse(access_token=access_token, user=UserResponse.from_record(user))


@router.post("/logout")
def logout(response: Response):
    """Logout; clears the session cookie (bearer clients discard their token)."""
    response.delete_cookie(settings.session_cookie_name)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: CurrentUser):
    """Get current user information."""
    return UserResponse.from_record(current_user)


@router.post("/verify-email", response_model=VerificationIssued, response_model_exclude_none=True)
def request_email_verification(
    body: VerificationRequest,
    current_user: CurrentUser,
    verification: Annotated[VerificationService, Depends(get_verification_service)],
):
    """Issue a verification token for an email address."""
    validation = validate_email(body.email)
    if not validation.valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=validation.message)

    token = verification.issue(current_user.id, body.email.strip())

    # Mail delivery is out of scope; development builds hand the token back instead
    return VerificationIssued(
        message="Verification email sent",
        token=token if settings.is_development else None,
    )


@router.get("/verify-email")
def confirm_email_verification(
    verification: Annotated[VerificationService, Depends(get_verification_service)],
    token: Annotated[str | None, Query()] = None,
):
    """Consume a verification token. No session needed: the token is the credential."""
    if not token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token is required")

    try:
        verified = verification.consume(token)
    except UserAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already used by another account",
        ) from e
    if not verified:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired token"
        )

    return RedirectResponse(settings.email_verified_redirect, status_code=status.HTTP_302_FOUND)
