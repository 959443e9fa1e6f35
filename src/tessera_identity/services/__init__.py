"""Identity services - session tokens, password hashing, one-time secrets."""

from tessera_identity.services.jwt_service import JWTService
from tessera_identity.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
]
