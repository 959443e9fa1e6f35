"""Authentication service: login, token check and password change."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tessera_identity.application.context import IdentityContext
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
)
from tessera_identity.exceptions import (
    AccountNotConfirmedError,
    InvalidCredentialsError,
)
from tessera_identity.repositories import AccountCredentialRepository
from tessera_identity.services import JWTService, PasswordHashingService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedSession:
    """A freshly issued session token together with the account it belongs to."""

    account: Account
    token: str
    expires_in: int

    @classmethod
    def issue(cls, account: Account, jwt_service: JWTService) -> AuthenticatedSession:
        token = jwt_service.create_access_token(
            account_id=account.id,
            email=account.email,
            role=account.role,
        )
        return cls(
            account=account,
            token=token,
            expires_in=jwt_service.access_token_expire_seconds,
        )


class AuthenticationService:
    """Verifies credentials and issues session tokens."""

    def __init__(
        self,
        account_repository: AccountRepository,
        credential_repository: AccountCredentialRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._account_repo = account_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    async def login(self, email: str, password: str) -> AuthenticatedSession:
        """Authenticate with email and password.

        Raises
        ------
        InvalidCredentialsError
            If no account has this email or the password does not match
        AccountNotConfirmedError
            If the password matches but the email was never confirmed
        """
        account = await self._account_repo.find_by_email(email)
        if account is None:
            self._password_service.verify_dummy(password)
            logger.info("Login attempt for unknown email")
            raise InvalidCredentialsError

        credential = await self._credential_repo.find_by_account_id(account.id)
        if credential is None or not self._password_service.verify(
            password,
            credential.password_hash,
        ):
            logger.warning("Failed login attempt for account: %s", account.id)
            raise InvalidCredentialsError

        if not account.email_confirmed:
            logger.info("Login refused for unconfirmed account: %s", account.id)
            raise AccountNotConfirmedError

        await self._credential_repo.record_login(account.id)
        logger.info("Account logged in: %s", account.id)
        return self.issue_session(account)

    async def check_token(self, identity: IdentityContext) -> AuthenticatedSession:
        """Re-read the caller's account and issue a token for its current role."""
        account = await self._account_repo.find_by_id(identity.account_id)
        if account is None:
            raise AccountNotFoundError(str(identity.account_id))
        return self.issue_session(account)

    async def change_password(
        self,
        identity: IdentityContext,
        current_password: str,
        new_password: str,
    ) -> None:
        credential = await self._credential_repo.find_by_account_id(
            identity.account_id,
        )
        if credential is None or not self._password_service.verify(
            current_password,
            credential.password_hash,
        ):
            raise InvalidCredentialsError("Current password is incorrect")

        new_hash = self._password_service.hash(new_password)
        await self._credential_repo.save(
            account_id=identity.account_id,
            password_hash=new_hash,
        )
        logger.info("Password changed for account: %s", identity.account_id)

    def issue_session(self, account: Account) -> AuthenticatedSession:
        return AuthenticatedSession.issue(account, self._jwt_service)
