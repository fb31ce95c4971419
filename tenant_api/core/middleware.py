"""JWT authentication middleware with a public-path allow-list."""

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from tenant_api.core.exceptions import UnauthorizedException
from tenant_api.core.responses import error_response
from tenant_api.core.security import decode_token, extract_token_from_header

logger = logging.getLogger(__name__)

PUBLIC_PATHS = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/auth/refresh",
    "/api/auth/validate",
    "/api/health",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
)


def is_public_path(path: str) -> bool:
    if path == "/":
        return True
    return any(path == p or path.startswith(p + "/") for p in PUBLIC_PATHS)


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Validates the access token of every non-public request.

    The token comes from 'Authorization: Bearer <token>' or, failing that,
    a 'token' query parameter. Valid claims are stored on
    request.state.token_claims; the user row is loaded later by the
    get_current_user dependency. Anything else is answered with 401
    before the route runs.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if request.method == "OPTIONS" or is_public_path(path):
            return await call_next(request)

        token = extract_token_from_header(request.headers.get("Authorization"))
        if token is None:
            token = request.query_params.get("token")

        if not token:
            logger.warning("Rejected %s %s: no token", request.method, path)
            return error_response(401, "Authentication required", "NOT_AUTHENTICATED")

        try:
            claims = decode_token(token)
        except UnauthorizedException as e:
            logger.warning("Rejected %s %s: %s", request.method, path, e)
            return error_response(e.status_code, str(e), e.error_code)

        request.state.token_claims = claims
        return await call_next(request)
