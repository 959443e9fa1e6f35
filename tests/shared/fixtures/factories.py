"""Factories for test data."""

from datetime import timedelta
from uuid import UUID, uuid4

from tessera_identity import Account, AccountRole
from tessera_identity.domain.shared.time import utc_now
from tessera_identity.repositories import (
    AccountCredentialData,
    ConfirmationTokenData,
    PasswordResetCodeData,
)
from tessera_identity.services.one_time_secrets import hash_secret

TEST_PHONE = "+15551234567"


def make_account(
    email: str = "test@example.com",
    role: AccountRole = AccountRole.USER,
    email_confirmed: bool = True,
    name: str = "Test Account",
) -> Account:
    return Account.create(
        email=email,
        name=name,
        phone_number=TEST_PHONE,
        role=role,
        email_confirmed=email_confirmed,
    )


def make_credential(
    account_id: UUID,
    password_hash: str = "hashed",
) -> AccountCredentialData:
    return AccountCredentialData(account_id=account_id, password_hash=password_hash)


def make_confirmation_token(
    account_id: UUID,
    raw_token: str,
    expires_in: timedelta = timedelta(hours=1),
    used: bool = False,
) -> ConfirmationTokenData:
    now = utc_now()
    return ConfirmationTokenData(
        id=uuid4(),
        account_id=account_id,
        token_hash=hash_secret(raw_token),
        expires_at=now + expires_in,
        used_at=now if used else None,
        created_at=now,
    )


def make_reset_code(
    account_id: UUID,
    code: str,
    expires_in: timedelta = timedelta(minutes=15),
    used: bool = False,
) -> PasswordResetCodeData:
    now = utc_now()
    return PasswordResetCodeData(
        id=uuid4(),
        account_id=account_id,
        code_hash=hash_secret(code),
        expires_at=now + expires_in,
        used_at=now if used else None,
        created_at=now,
    )
