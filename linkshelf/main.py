"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from linkshelf.api import auth, dashboard, links, profile
from linkshelf.api.guard import LoginRedirectMiddleware
from linkshelf.config import get_settings
from linkshelf.database import init_db
from linkshelf.services.errors import RecordDecodeError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    yield


app = FastAPI(
    title="Linkshelf API",
    description="Personal link bookmarking with tags, categories and link-type detection",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(LoginRedirectMiddleware)

# CORS middleware for development; added last so it wraps the guard
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with field-level detail."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
@app.exception_handler(RecordDecodeError)
async def store_exception_handler(request: Request, exc: Exception):
    """Hide store faults behind a generic 500."""
    logger.error(
        f"Unhandled store error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Register routers
app.include_router(auth.router)
app.include_router(links.router)
app.include_router(dashboard.router)
app.include_router(profile.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
