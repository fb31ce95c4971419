class TenantApiException(Exception):
    """Base exception for the tenant management API"""

    status_code: int = 500
    error_code: str = "SERVER_ERROR"

    def __init__(self, message: str = "", error_code: str | None = None):
        super().__init__(message)
        if error_code is not None:
            self.error_code = error_code


class UnauthorizedException(TenantApiException):
    """Raised when a request cannot be authenticated"""

    status_code = 401
    error_code = "NOT_AUTHENTICATED"


class InvalidTokenException(UnauthorizedException):
    """Raised when a JWT is malformed, badly signed or of the wrong type"""

    error_code = "INVALID_TOKEN"


class ExpiredTokenException(UnauthorizedException):
    """Raised when a JWT is past its expiry time"""

    error_code = "TOKEN_EXPIRED"


class InvalidCredentialsException(UnauthorizedException):
    """Raised when email/password do not match a stored user"""

    error_code = "INVALID_CREDENTIALS"


class AccountDisabledException(UnauthorizedException):
    """Raised when an inactive user tries to authenticate"""

    error_code = "ACCOUNT_DISABLED"


class ForbiddenException(TenantApiException):
    """Raised when the caller's role or ownership does not allow the action"""

    status_code = 403
    error_code = "ACCESS_DENIED"


class NotFoundException(TenantApiException):
    """Raised when resource not found"""

    status_code = 404
    error_code = "NOT_FOUND"


class ValidationException(TenantApiException):
    """Raised for business logic validation errors"""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class InvalidStatusTransition(ValidationException):
    """Raised when an entity status change violates its transition guards"""

    error_code = "INVALID_STATUS_TRANSITION"


class ConflictException(TenantApiException):
    """Raised when a unique resource already exists"""

    status_code = 409
    error_code = "CONFLICT"


class ExternalServiceException(TenantApiException):
    """Raised when a third-party API call fails"""

    status_code = 502
    error_code = "EXTERNAL_SERVICE_ERROR"
