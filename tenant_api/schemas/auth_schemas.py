import re
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from tenant_api.models.base import utcnow
from tenant_api.models.user import UserRole
from tenant_api.schemas.common_schemas import CamelModel

PASSWORD_SPECIAL_CHARS = "@$!%*?&"
PHONE_PATTERN = r"^(\+\d{1,3}[- ]?)?\d{10}$"


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    """Self-registration of a tenant user"""

    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    confirm_password: str
    phone_number: str | None = Field(None, pattern=PHONE_PATTERN)
    property_address: str | None = Field(None, max_length=500)
    unit_number: str | None = Field(None, max_length=20)
    accept_terms: bool = False
    accept_marketing: bool = False

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        """Require lower and upper case letters, a digit and a special character"""
        checks = (
            re.search(r"[a-z]", value),
            re.search(r"[A-Z]", value),
            re.search(r"\d", value),
            re.search(f"[{re.escape(PASSWORD_SPECIAL_CHARS)}]", value),
        )
        if not all(checks):
            raise ValueError(
                "Password must contain at least one lowercase letter, one uppercase letter, "
                f"one digit and one special character ({PASSWORD_SPECIAL_CHARS})"
            )
        return value


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class UserInfo(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone_number: str | None = None
    role: UserRole
    is_active: bool
    email_verified: bool
    created_at: datetime


class AuthResponse(CamelModel):
    """Tokens plus user info, returned by login, register and refresh"""

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_expires_in: int
    user: UserInfo
    timestamp: datetime = Field(default_factory=utcnow)


class TokenValidationResponse(CamelModel):
    valid: bool
    username: str | None = None
    remaining_time: int | None = None  # milliseconds
    should_refresh: bool | None = None
    timestamp: datetime = Field(default_factory=utcnow)
