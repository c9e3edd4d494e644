"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from linkshelf.config import get_settings
from linkshelf.database import get_db
from linkshelf.schemas.auth import UserRecord
from linkshelf.services.auth import decode_access_token
from linkshelf.services.link_repository import LinkRepository
from linkshelf.services.user_repository import UserRepository
from linkshelf.services.verification import VerificationService

settings = get_settings()

security = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """Pull the session token from the Authorization header or the session cookie."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


def resolve_user(db: Session, token: str | None) -> UserRecord | None:
    """Map a session token to the user it was issued for."""
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    return UserRepository(db).get_by_id(str(user_id))


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRecord:
    """Get the current authenticated user from the session token."""
    token = get_session_token(request, credentials)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = resolve_user(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


CurrentUser = Annotated[UserRecord, Depends(get_current_user)]


def get_link_repository(
    db: Annotated[Session, Depends(get_db)],
) -> LinkRepository:
    """Get link repository bound to the request's session."""
    return LinkRepository(db)


def get_user_repository(
    db: Annotated[Session, Depends(get_db)],
) -> UserRepository:
    """Get user repository bound to the request's session."""
    return UserRepository(db)


def get_verification_service(
    db: Annotated[Session, Depends(get_db)],
) -> VerificationService:
    """Get verification service bound to the request's session."""
    return VerificationService(db)
