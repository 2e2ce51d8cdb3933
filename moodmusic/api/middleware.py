# ============================================================================
# FILE: moodmusic/api/middleware.py
# Request authentication gate
# ============================================================================
from typing import Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp
from moodmusic.core.errors import InvalidToken, Unauthenticated, to_response
import logging

logger = logging.getLogger(__name__)


def is_protected(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(f"{prefix}/")


def extract_bearer_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("Authorization", "")
    if not authorization:
        return None
    # The credential is the second word whatever the scheme; a lone word carries none
    _, _, value = authorization.strip().partition(" ")
    return value.strip() or None


class AuthGateMiddleware(BaseHTTPMiddleware):
    """
    Classify every request as anonymous, authenticated or rejected.

    - no token, unprotected path: anonymous (request.state.user = None)
    - no token, protected path: 401
    - token present: verified; failure is a 400 regardless of the path
    """

    def __init__(self, app: ASGIApp, *, protected_prefix: str = "/api/protected") -> None:
        super().__init__(app)
        self.protected_prefix = protected_prefix.rstrip("/")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.user = None

        token = extract_bearer_token(request)
        if token is None:
            if is_protected(request.url.path, self.protected_prefix):
                return to_response(Unauthenticated())
            return await call_next(request)

        token_service = request.app.state.container.token_service
        try:
            request.state.user = token_service.verify(token)
        except InvalidToken as e:
            logger.info(f"Rejected token on {request.method} {request.url.path}")
            return to_response(e)
        return await call_next(request)
