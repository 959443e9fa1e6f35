from tessera_identity.application.context import IdentityContext
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
)


class UpdateProfileCommand:
    """Command for an account to edit its own name and phone number."""

    def __init__(self, account_repository: AccountRepository):
        self._account_repo = account_repository

    async def execute(
        self,
        identity: IdentityContext,
        name: str | None = None,
        phone_number: str | None = None,
    ) -> Account:
        account = await self._account_repo.find_by_id(identity.account_id)
        if not account:
            raise AccountNotFoundError(str(identity.account_id))

        account.update_profile(name=name, phone_number=phone_number)
        await self._account_repo.save(account)
        return account
