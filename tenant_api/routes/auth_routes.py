from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from tenant_api.core.security import TokenPair
from tenant_api.database import get_db
from tenant_api.dependencies import get_current_user
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.user import User
from tenant_api.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenValidationResponse,
    UserInfo,
)
from tenant_api.schemas.common_schemas import MessageResponse
from tenant_api.services.auth_service import AuthService

router = APIRouter()


def _auth_response(user: User, tokens: TokenPair) -> AuthResponse:
    return AuthResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        expires_in=tokens.expires_in,
        refresh_expires_in=tokens.refresh_expires_in,
        user=UserInfo.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for an access/refresh token pair"""
    service = AuthService(db)
    user, tokens = service.login(data.email, data.password)
    return _auth_response(user, tokens)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a tenant user and sign them in"""
    service = AuthService(db)
    user, tokens = service.register(data)
    return _auth_response(user, tokens)


@router.post("/refresh", response_model=AuthResponse)
def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    """New access token for a valid refresh token (which is returned unchanged)"""
    service = AuthService(db)
    user, tokens = service.refresh(data.refresh_token)
    return _auth_response(user, tokens)


@router.post("/logout", response_model=MessageResponse)
def logout(ctx: AuthContext = Depends(get_current_user)):
    """Stateless logout; clients discard their tokens"""
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserInfo)
def me(ctx: AuthContext = Depends(get_current_user)):
    return ctx.user


@router.post("/validate", response_model=TokenValidationResponse)
def validate_token(token: str = Query(...), db: Session = Depends(get_db)):
    """Report whether an access token is valid and how long it has left"""
    service = AuthService(db)
    return TokenValidationResponse(**service.validate(token))
