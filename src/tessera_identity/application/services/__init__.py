from tessera_identity.application.services.authentication_service import (
    AuthenticatedSession,
    AuthenticationService,
)
from tessera_identity.application.services.password_reset_service import (
    PasswordResetService,
)
from tessera_identity.application.services.registration_service import (
    RegistrationService,
)

__all__ = [
    "AuthenticatedSession",
    "AuthenticationService",
    "PasswordResetService",
    "RegistrationService",
]
