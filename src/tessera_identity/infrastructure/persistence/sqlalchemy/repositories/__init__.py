from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.account_credential_repository import (  # noqa: E501
    AccountCredentialRepositorySQLAlchemy,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.account_repository import (  # noqa: E501
    AccountRepositorySQLAlchemy,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.confirmation_token_repository import (  # noqa: E501
    ConfirmationTokenRepositorySQLAlchemy,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.password_reset_code_repository import (  # noqa: E501
    PasswordResetCodeRepositorySQLAlchemy,
)

__all__ = [
    "AccountCredentialRepositorySQLAlchemy",
    "AccountRepositorySQLAlchemy",
    "ConfirmationTokenRepositorySQLAlchemy",
    "PasswordResetCodeRepositorySQLAlchemy",
]
