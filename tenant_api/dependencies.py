from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from tenant_api.core.exceptions import (
    AccountDisabledException,
    ForbiddenException,
    UnauthorizedException,
)
from tenant_api.core.pagination import PageRequest
from tenant_api.database import get_db
from tenant_api.models.auth_context import AuthContext
from tenant_api.repositories.user_repository import UserRepository


def get_current_user(request: Request, db: Session = Depends(get_db)) -> AuthContext:
    """
    FastAPI dependency resolving the authenticated caller.

    Flow:
    1. AuthMiddleware has already validated the access token
    2. Read its claims from request.state
    3. Load the User named by the 'sub' claim (email)
    4. Reject missing or deactivated users
    5. Return AuthContext for use in endpoints

    Raises:
        UnauthorizedException: No validated token or unknown user
        AccountDisabledException: User has been deactivated since the token was issued
    """
    claims = getattr(request.state, "token_claims", None)
    if not claims:
        raise UnauthorizedException("Authentication required")

    user = UserRepository(db).get_by_email(claims["sub"])
    if user is None:
        raise UnauthorizedException("User not found", error_code="USER_NOT_FOUND")
    if not user.is_active:
        raise AccountDisabledException("Account is disabled")

    return AuthContext(user=user, role=user.role, claims=claims)


def require_admin(ctx: AuthContext = Depends(get_current_user)) -> AuthContext:
    """Allow only ADMIN callers (403 ACCESS_DENIED otherwise)"""
    if not ctx.is_admin():
        raise ForbiddenException("Admin access required")
    return ctx


def require_tenant(ctx: AuthContext = Depends(get_current_user)) -> AuthContext:
    """Allow only TENANT callers (403 ACCESS_DENIED otherwise)"""
    if not ctx.is_tenant():
        raise ForbiddenException("Tenant access required")
    return ctx


def page_params(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_dir: str = Query("desc", alias="sortDir"),
) -> PageRequest:
    """Zero-based page/size/sortBy/sortDir query parameters"""
    return PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
