import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tenant_api.core.exceptions import (
    AccountDisabledException,
    ConflictException,
    InvalidCredentialsException,
    InvalidTokenException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)
from tenant_api.core.security import (
    TokenPair,
    create_token_pair,
    decode_token,
    hash_password,
    refresh_access_token,
    should_refresh,
    token_remaining_seconds,
    verify_password,
)
from tenant_api.config import settings
from tenant_api.models.base import utcnow
from tenant_api.models.tenant import Tenant, TenantStatus
from tenant_api.models.user import User, UserRole
from tenant_api.repositories.tenant_repository import TenantRepository
from tenant_api.repositories.user_repository import UserRepository
from tenant_api.schemas.auth_schemas import RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Login, registration and token lifecycle"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.tenant_repo = TenantRepository(db)

    def _issue_tokens(self, user: User) -> TokenPair:
        return create_token_pair(user.email, extra_claims={"role": user.role.value})

    def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        """
        Authenticate by email and password.

        Raises:
            InvalidCredentialsException: Unknown email or wrong password
            AccountDisabledException: The account has been deactivated
        """
        logger.info("Login attempt for %s", email)
        user = self.user_repo.get_by_email(email)

        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for %s", email)
            raise InvalidCredentialsException("Invalid email or password")

        if not user.is_active:
            logger.warning("Login rejected for disabled account %s", email)
            raise AccountDisabledException("Account is disabled")

        user.last_login_at = utcnow()
        user = self.user_repo.update(user)

        logger.info("User %s logged in", email)
        return user, self._issue_tokens(user)

    def register(self, data: RegisterRequest) -> tuple[User, TokenPair]:
        """
        Create a TENANT user, plus a PENDING tenant profile when an address is given.

        Raises:
            ValidationException: Passwords differ or terms not accepted
            ConflictException: Email already registered
        """
        if data.password != data.confirm_password:
            raise ValidationException("Passwords do not match", error_code="PASSWORD_MISMATCH")

        if not data.accept_terms:
            raise ValidationException(
                "Terms and conditions must be accepted", error_code="TERMS_NOT_ACCEPTED"
            )

        if self.user_repo.exists_by_email(data.email):
            raise ConflictException(
                "Email address is already registered", error_code="EMAIL_ALREADY_EXISTS"
            )

        user = User(
            email=data.email.lower(),
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone_number=data.phone_number,
            role=UserRole.TENANT,
            is_active=True,
            email_verified=True,
        )
        try:
            self.db.add(user)
            self.db.flush()

            if data.property_address:
                self.tenant_repo.create_no_commit(
                    Tenant(
                        user_id=user.id,
                        property_address=data.property_address,
                        unit_number=data.unit_number,
                        status=TenantStatus.PENDING,
                    )
                )

            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictException(
                "Email address is already registered", error_code="EMAIL_ALREADY_EXISTS"
            ) from e

        self.db.refresh(user)

        logger.info("Registered user %s (id=%s)", user.email, user.id)
        return user, self._issue_tokens(user)

    def refresh(self, refresh_token: str) -> tuple[User, TokenPair]:
        """
        Issue a new access token; the refresh token is returned unchanged.

        Raises:
            UnauthorizedException: Invalid/expired refresh token or unusable account
        """
        try:
            access_token, payload = refresh_access_token(refresh_token)
        except UnauthorizedException as e:
            logger.warning("Token refresh failed: %s", e)
            raise InvalidTokenException(
                "Invalid or expired refresh token", error_code="INVALID_REFRESH_TOKEN"
            )

        user = self.user_repo.get_by_email(payload["sub"])
        if user is None:
            raise InvalidTokenException("User no longer exists", error_code="INVALID_REFRESH_TOKEN")
        if not user.is_active:
            raise AccountDisabledException("Account is disabled")

        pair = TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            refresh_expires_in=token_remaining_seconds(payload),
        )
        return user, pair

    def validate(self, token: str) -> dict:
        """Introspect an access token without raising."""
        try:
            payload = decode_token(token)
        except UnauthorizedException:
            return {"valid": False}

        return {
            "valid": True,
            "username": payload["sub"],
            "remaining_time": token_remaining_seconds(payload) * 1000,
            "should_refresh": should_refresh(payload),
        }

    def set_active(self, user_id: int, active: bool) -> User:
        """Activate or deactivate an account (admin)"""
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found", error_code="USER_NOT_FOUND")

        user.is_active = active
        user = self.user_repo.update(user)
        logger.info("User %s %s", user.email, "activated" if active else "deactivated")
        return user
