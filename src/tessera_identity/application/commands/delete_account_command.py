import logging
from uuid import UUID

from tessera_identity.application.context import IdentityContext
from tessera_identity.domain.account import (
    AccountNotFoundError,
    AccountRepository,
    CannotDeleteSelfError,
)
from tessera_identity.repositories import (
    AccountCredentialRepository,
    ConfirmationTokenRepository,
    PasswordResetCodeRepository,
)

logger = logging.getLogger(__name__)


class DeleteAccountCommand:
    """Command to delete an account together with everything keyed on it."""

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        credential_repository: AccountCredentialRepository,
        token_repository: ConfirmationTokenRepository,
        code_repository: PasswordResetCodeRepository,
    ):
        self._account_repo = account_repository
        self._credential_repo = credential_repository
        self._token_repo = token_repository
        self._code_repo = code_repository

    async def execute(self, requester: IdentityContext, account_id: UUID) -> str | None:
        """Delete the account and return its stored picture reference, if any.

        The picture file is left in place; the caller removes it once the
        deletion has been committed.
        """
        if account_id == requester.account_id:
            raise CannotDeleteSelfError

        account = await self._account_repo.find_by_id(account_id)
        if not account:
            raise AccountNotFoundError(str(account_id))

        await self._token_repo.delete_for_account(account_id)
        await self._code_repo.delete_for_account(account_id)
        await self._credential_repo.delete(account_id)
        await self._account_repo.delete(account_id)

        logger.info("Account %s deleted by %s", account_id, requester.account_id)
        return account.profile_picture_url
