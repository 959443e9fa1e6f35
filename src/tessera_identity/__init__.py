"""Tessera Identity - accounts, authentication and authorization.

This package handles:
- Accounts (profile, role, email confirmation)
- Authentication (login, session tokens, password change)
- Registration with email confirmation
- Password reset with six digit codes
- Route access control (token validation, role authorization)
"""

from tessera_identity.application.access import (
    AccessPipeline,
    RoleAuthorizer,
    RouteAccess,
    TokenValidator,
)
from tessera_identity.application.context import IdentityContext
from tessera_identity.application.services import (
    AuthenticatedSession,
    AuthenticationService,
    PasswordResetService,
    RegistrationService,
)
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
    AccountRole,
    CannotDeleteSelfError,
    CannotDemoteSelfError,
    Email,
    EmailAlreadyRegisteredError,
    InvalidEmailError,
    InvalidPhoneNumberError,
    PhoneNumber,
)
from tessera_identity.domain.shared import DomainException, ErrorCode
from tessera_identity.exceptions import (
    AccountNotConfirmedError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidOrExpiredCodeError,
    InvalidOrExpiredTokenError,
    InvalidProfilePictureError,
    InvalidTokenError,
    UnauthorizedError,
    WeakPasswordError,
)
from tessera_identity.schemas import TokenPayload
from tessera_identity.services import JWTService, PasswordHashingService

__all__ = [
    # Domain
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountRole",
    "CannotDeleteSelfError",
    "CannotDemoteSelfError",
    "DomainException",
    "Email",
    "EmailAlreadyRegisteredError",
    "ErrorCode",
    "InvalidEmailError",
    "InvalidPhoneNumberError",
    "PhoneNumber",
    # Exceptions
    "AccountNotConfirmedError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "InvalidOrExpiredCodeError",
    "InvalidOrExpiredTokenError",
    "InvalidProfilePictureError",
    "InvalidTokenError",
    "UnauthorizedError",
    "WeakPasswordError",
    # Schemas
    "TokenPayload",
    # Services
    "JWTService",
    "PasswordHashingService",
    # Application
    "AccessPipeline",
    "AuthenticatedSession",
    "AuthenticationService",
    "IdentityContext",
    "PasswordResetService",
    "RegistrationService",
    "RoleAuthorizer",
    "RouteAccess",
    "TokenValidator",
]
