"""Profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from linkshelf.api.dependencies import CurrentUser, get_user_repository
from linkshelf.schemas.auth import ProfileUpdate, UserResponse
from linkshelf.services.user_repository import UserRepository

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserResponse)
def get_profile(current_user: CurrentUser):
    """Get the current user's profile."""
    return UserResponse.from_record(current_user)


@router.patch("", response_model=UserResponse)
def update_profile(
    profile_data: ProfileUpdate,
    current_user: CurrentUser,
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Update name, avatar or password."""
    users.update(current_user.id, profile_data.model_dump(exclude_unset=True))

    user = users.get_by_id(current_user.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.from_record(user)
