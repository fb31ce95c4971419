import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from tenant_api.config import settings
from tenant_api.core.exceptions import ExpiredTokenException, InvalidTokenException

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"
BEARER_PREFIX = "Bearer "

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


@dataclass
class TokenPair:
    """Access/refresh token pair returned on login and registration."""

    access_token: str
    refresh_token: str
    expires_in: int
    refresh_expires_in: int
    token_type: str = "Bearer"


def _encode(subject: str, token_type: str, expires_delta: timedelta, extra_claims: dict | None = None) -> str:
    now = datetime.now(UTC)
    payload = dict(extra_claims or {})
    payload.update(
        {
            "sub": subject,
            "type": token_type,
            "iat": now,
            "exp": now + expires_delta,
        }
    )
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(
    subject: str, extra_claims: dict | None = None, expires_delta: timedelta | None = None
) -> str:
    """
    Issue a short-lived access token.

    Args:
        subject: User email stored in the 'sub' claim
        extra_claims: Additional claims (e.g. role); 'type' is always 'access'
        expires_delta: Override of ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(subject, ACCESS_TOKEN_TYPE, expires_delta, extra_claims)


def create_refresh_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Issue a long-lived refresh token (claim type=refresh)."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _encode(subject, REFRESH_TOKEN_TYPE, expires_delta)


def create_token_pair(subject: str, extra_claims: dict | None = None) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(subject, extra_claims),
        refresh_token=create_refresh_token(subject),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        refresh_expires_in=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def decode_token(token: str, expected_type: str | None = ACCESS_TOKEN_TYPE) -> dict:
    """
    Decode and validate a JWT signed with SECRET_KEY.

    Args:
        token: Encoded JWT
        expected_type: Required value of the 'type' claim, or None to accept any

    Returns:
        Decoded token payload with 'sub', 'type', 'iat', 'exp'

    Raises:
        ExpiredTokenException: If the token is past its expiry
        InvalidTokenException: If the token is malformed, badly signed,
            missing claims or of the wrong type
    """
    if not token:
        raise InvalidTokenException("Token is empty")

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise ExpiredTokenException("Token has expired")
    except JWTError as e:
        raise InvalidTokenException(f"Invalid token: {str(e)}")

    if payload.get("exp") is None:
        raise InvalidTokenException("Token missing expiration")

    if payload.get("sub") is None:
        raise InvalidTokenException("Token missing user identifier")

    if expected_type is not None and payload.get("type") != expected_type:
        raise InvalidTokenException(f"Expected {expected_type} token")

    return payload


def refresh_access_token(refresh_token: str) -> tuple[str, dict]:
    """
    Issue a new access token from a refresh token.

    The refresh token itself is not rotated; it stays valid until its own expiry.

    Returns:
        Tuple of (new access token, refresh token payload)
    """
    payload = decode_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
    return create_access_token(payload["sub"]), payload


def token_remaining_seconds(payload: dict) -> int:
    """Seconds until the decoded token expires (never negative)."""
    remaining = int(payload["exp"]) - int(datetime.now(UTC).timestamp())
    return max(remaining, 0)


def should_refresh(payload: dict) -> bool:
    return token_remaining_seconds(payload) < settings.TOKEN_REFRESH_THRESHOLD_SECONDS


def extract_token_from_header(auth_header: str | None) -> str | None:
    """Return the token part of an 'Authorization: Bearer <token>' header."""
    if auth_header and auth_header.startswith(BEARER_PREFIX):
        token = auth_header[len(BEARER_PREFIX):].strip()
        return token or None
    return None
