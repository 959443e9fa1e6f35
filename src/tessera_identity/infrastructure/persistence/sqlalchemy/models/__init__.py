"""SQLAlchemy models for the identity tables."""

from tessera_identity.infrastructure.persistence.sqlalchemy.models.account_credential_model import (  # noqa: E501
    AccountCredentialModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.models.account_model import (
    AccountModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.models.one_time_secret_models import (  # noqa: E501
    ConfirmationTokenModel,
    PasswordResetCodeModel,
)

__all__ = [
    "AccountCredentialModel",
    "AccountModel",
    "Base",
    "ConfirmationTokenModel",
    "PasswordResetCodeModel",
    "TimestampMixin",
]
