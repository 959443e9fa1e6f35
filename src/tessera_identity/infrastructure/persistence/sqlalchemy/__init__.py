"""SQLAlchemy persistence for the identity tables."""

from tessera_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountCredentialModel,
    AccountModel,
    Base,
    ConfirmationTokenModel,
    PasswordResetCodeModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountCredentialRepositorySQLAlchemy,
    AccountRepositorySQLAlchemy,
    ConfirmationTokenRepositorySQLAlchemy,
    PasswordResetCodeRepositorySQLAlchemy,
)

__all__ = [
    "AccountCredentialModel",
    "AccountCredentialRepositorySQLAlchemy",
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "Base",
    "ConfirmationTokenModel",
    "ConfirmationTokenRepositorySQLAlchemy",
    "PasswordResetCodeModel",
    "PasswordResetCodeRepositorySQLAlchemy",
]
