from uuid import UUID

from tessera_identity.application.context import IdentityContext
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
    AccountRole,
    CannotDemoteSelfError,
    Email,
    EmailAlreadyRegisteredError,
)


class UpdateAccountCommand:
    """Command for a superadmin to edit any account."""

    def __init__(self, account_repository: AccountRepository):
        self._account_repo = account_repository

    async def execute(  # noqa: PLR0913
        self,
        requester: IdentityContext,
        account_id: UUID,
        email: str | None = None,
        name: str | None = None,
        phone_number: str | None = None,
        role: AccountRole | None = None,
        email_confirmed: bool | None = None,
    ) -> Account:
        account = await self._account_repo.find_by_id(account_id)
        if not account:
            raise AccountNotFoundError(str(account_id))

        if role is not None and role != account.role:
            if account_id == requester.account_id:
                raise CannotDemoteSelfError
            account.change_role(role)

        if email is not None:
            new_email = Email(email)
            if new_email.value != account.email:
                if await self._account_repo.exists_by_email(new_email):
                    raise EmailAlreadyRegisteredError(new_email.value)
                account.change_email(new_email)

        if name is not None or phone_number is not None:
            account.update_profile(name=name, phone_number=phone_number)

        if email_confirmed is not None:
            account.set_email_confirmed(email_confirmed)

        await self._account_repo.save(account)
        return account
