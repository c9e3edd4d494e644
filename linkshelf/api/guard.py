"""Route guard that sends anonymous visitors of protected pages to the login page."""

from urllib.parse import urlencode

from fastapi import status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from linkshelf.config import get_settings
from linkshelf.services.auth import decode_access_token

settings = get_settings()


def is_protected_path(path: str, prefixes: list[str]) -> bool:
    """True for a prefix itself and anything below it, not for look-alikes."""
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


def request_has_session(request: Request) -> bool:
    """Check for a decodable session token in the header or cookie."""
    token = None
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        token = credentials
    else:
        token = request.cookies.get(settings.session_cookie_name)
    return bool(token) and decode_access_token(token) is not None


class LoginRedirectMiddleware(BaseHTTPMiddleware):
    """Redirect unauthenticated requests under protected prefixes to the login page."""

    def __init__(self, app, prefixes: list[str] | None = None, login_path: str | None = None):
        super().__init__(app)
        self.prefixes = prefixes if prefixes is not None else settings.protected_prefixes
        self.login_path = login_path or settings.login_path

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        # CORS preflights never carry credentials
        if request.method == "OPTIONS":
            return await call_next(request)
        if is_protected_path(path, self.prefixes) and not request_has_session(request):
            query = urlencode({"callbackUrl": path})
            return RedirectResponse(
                f"{self.login_path}?{query}", status_code=status.HTTP_307_TEMPORARY_REDIRECT
            )
        return await call_next(request)
