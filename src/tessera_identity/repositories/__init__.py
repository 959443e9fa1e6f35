"""Abstract repository interfaces for credentials, tokens and codes."""

from tessera_identity.repositories.account_credential_repository import (
    AccountCredentialData,
    AccountCredentialRepository,
)
from tessera_identity.repositories.confirmation_token_repository import (
    ConfirmationTokenData,
    ConfirmationTokenRepository,
)
from tessera_identity.repositories.password_reset_code_repository import (
    PasswordResetCodeData,
    PasswordResetCodeRepository,
)

__all__ = [
    "AccountCredentialData",
    "AccountCredentialRepository",
    "ConfirmationTokenData",
    "ConfirmationTokenRepository",
    "PasswordResetCodeData",
    "PasswordResetCodeRepository",
]
