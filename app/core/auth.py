"""HTTP basic authentication for the Requestarr API.

Enabled only when AUTH_USERNAME and AUTH_PASSWORD are both set. Otherwise
every request passes through untouched.
"""

import base64
import binascii
import secrets

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.config import get_settings

# Reachable without credentials (docker/uptime monitors)
PUBLIC_PATHS = frozenset({"/api/health"})


def parse_basic_credentials(auth_header: str | None) -> tuple[str, str] | None:
    """Return ``(username, password)`` from a Basic header, or None if malformed."""
    if not auth_header:
        return None
    try:
        scheme, encoded = auth_header.split(" ", 1)
        if scheme.lower() != "basic":
            return None
        username, password = (
            base64.b64decode(encoded, validate=True).decode("utf-8").split(":", 1)
        )
    except (ValueError, binascii.Error):
        return None
    return username, password


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without valid credentials when auth is configured."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        settings = get_settings()
        if not settings.auth_username or not settings.auth_password:
            return await call_next(request)

        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        credentials = parse_basic_credentials(request.headers.get("Authorization"))
        if credentials is None:
            return self._unauthorized()

        username, password = credentials
        # compare_digest on bytes so non-ASCII input cannot raise
        username_ok = secrets.compare_digest(
            username.encode("utf-8"), settings.auth_username.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            password.encode("utf-8"),
            settings.auth_password.get_secret_value().encode("utf-8"),
        )
        if not (username_ok and password_ok):
            return self._unauthorized()

        return await call_next(request)

    @staticmethod
    def _unauthorized() -> Response:
        return Response(
            content="Unauthorized",
            status_code=401,
            headers={"WWW-Authenticate": 'Basic realm="Requestarr"'},
        )
