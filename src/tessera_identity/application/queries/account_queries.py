"""Read-side queries over accounts."""

from uuid import UUID

from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
)


class ListAccountsQuery:
    """Query to list every account, oldest first."""

    def __init__(self, account_repository: AccountRepository):
        self._account_repo = account_repository

    async def execute(self) -> list[Account]:
        return await self._account_repo.list_all()


class GetAccountQuery:
    """Query to fetch one account by id."""

    def __init__(self, account_repository: AccountRepository):
        self._account_repo = account_repository

    async def execute(self, account_id: UUID) -> Account:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account
