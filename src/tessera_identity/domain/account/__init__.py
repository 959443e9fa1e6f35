"""Account domain: aggregate, value objects, repository port and errors."""

from tessera_identity.domain.account.aggregates import Account
from tessera_identity.domain.account.exceptions import (
    AccountNotFoundError,
    CannotDeleteSelfError,
    CannotDemoteSelfError,
    EmailAlreadyRegisteredError,
    InvalidEmailError,
    InvalidPhoneNumberError,
)
from tessera_identity.domain.account.repositories import AccountRepository
from tessera_identity.domain.account.value_objects import (
    AccountRole,
    Email,
    PhoneNumber,
)

__all__ = [
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountRole",
    "CannotDeleteSelfError",
    "CannotDemoteSelfError",
    "Email",
    "EmailAlreadyRegisteredError",
    "InvalidEmailError",
    "InvalidPhoneNumberError",
    "PhoneNumber",
]
