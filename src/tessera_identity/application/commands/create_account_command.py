from tessera_identity.application.context import IdentityContext
from tessera_identity.domain.account import (
    Account,
    AccountRepository,
    AccountRole,
    Email,
    EmailAlreadyRegisteredError,
)
from tessera_identity.exceptions import ForbiddenError
from tessera_identity.repositories import AccountCredentialRepository
from tessera_identity.services import PasswordHashingService


class CreateAccountCommand:
    """Command for administrators to create an account directly."""

    def __init__(
        self,
        account_repository: AccountRepository,
        credential_repository: AccountCredentialRepository,
        password_service: PasswordHashingService,
    ):
        self._account_repo = account_repository
        self._credential_repo = credential_repository
        self._password_service = password_service

    async def execute(  # noqa: PLR0913
        self,
        requester: IdentityContext,
        email: str,
        password: str,
        name: str,
        phone_number: str,
        role: AccountRole = AccountRole.USER,
        email_confirmed: bool = True,
    ) -> Account:
        # Only a superadmin may hand out privileged roles
        if role.is_privileged and not requester.is_superadmin:
            raise ForbiddenError("Only a superadmin can create privileged accounts")

        normalized_email = Email(email)
        if await self._account_repo.exists_by_email(normalized_email):
            raise EmailAlreadyRegisteredError(normalized_email.value)

        password_hash = self._password_service.hash(password)
        account = Account.create(
            email=normalized_email,
            name=name,
            phone_number=phone_number,
            role=role,
            email_confirmed=email_confirmed,
        )

        await self._account_repo.save(account)
        await self._credential_repo.save(
            account_id=account.id,
            password_hash=password_hash,
        )
        return account
