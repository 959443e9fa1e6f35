"""Authentication and authorization exceptions.

All of them are domain exceptions, so the HTTP layer maps them to status
codes without route-specific handling.
"""

from tessera_identity.domain.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ErrorCode,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, ErrorCode.UNAUTHORIZED)


class UnauthorizedError(AuthenticationError):
    """Raised by the token validator for any failed transition.

    The message is deliberately uniform so callers cannot tell which check
    rejected the request.
    """

    def __init__(self, reason: str | None = None):
        super().__init__(
            "Unauthorized",
            ErrorCode.UNAUTHORIZED,
            details={"reason": reason} if reason else None,
        )


class ForbiddenError(AuthorizationError):
    """Raised when an identity's role is outside the allowed set."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, ErrorCode.FORBIDDEN)


class InvalidCredentialsError(AuthenticationError):
    """Raised when email or password is incorrect."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, ErrorCode.INVALID_CREDENTIALS)


class AccountNotConfirmedError(AuthorizationError):
    """Raised when an unconfirmed account tries to log in."""

    def __init__(
        self,
        message: str = "Email address has not been confirmed",
    ):
        super().__init__(message, ErrorCode.ACCOUNT_NOT_CONFIRMED)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message, ErrorCode.WEAK_PASSWORD)


class InvalidOrExpiredTokenError(ValidationError):
    """Raised when an email confirmation token is unknown, used, or expired."""

    def __init__(self, message: str = "Invalid or expired confirmation token"):
        super().__init__(message, ErrorCode.INVALID_OR_EXPIRED_TOKEN)


class InvalidOrExpiredCodeError(ValidationError):
    """Raised when a password reset code is unknown, used, or expired."""

    def __init__(self, message: str = "Invalid or expired reset code"):
        super().__init__(message, ErrorCode.INVALID_OR_EXPIRED_CODE)


class InvalidProfilePictureError(ValidationError):
    """Raised when an uploaded profile picture is too large or not an image."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INVALID_PROFILE_PICTURE)
