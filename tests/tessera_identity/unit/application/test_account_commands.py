"""Unit tests for account administration commands and queries."""

from unittest.mock import AsyncMock, Mock

import pytest

from tessera_identity import (
    AccountNotFoundError,
    AccountRole,
    CannotDeleteSelfError,
    CannotDemoteSelfError,
    EmailAlreadyRegisteredError,
    ForbiddenError,
    IdentityContext,
    InvalidProfilePictureError,
    PasswordHashingService,
)
from tessera_identity.application.commands import (
    MAX_PROFILE_PICTURE_BYTES,
    CreateAccountCommand,
    DeleteAccountCommand,
    UpdateAccountCommand,
    UpdateProfileCommand,
    UpdateProfilePictureCommand,
)
from tessera_identity.application.ports import ProfilePictureStorage
from tessera_identity.application.queries import GetAccountQuery, ListAccountsQuery
from tests.shared.fixtures.factories import make_account

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _identity(role: AccountRole) -> IdentityContext:
    account = make_account(f"{role.value.lower()}@example.com", role=role)
    return IdentityContext.from_account(account)


class TestCreateAccountCommand:
    def setup_method(self):
        self.account_repo = AsyncMock()
        self.account_repo.exists_by_email.return_value = False
        self.credential_repo = AsyncMock()
        self.command = CreateAccountCommand(
            account_repository=self.account_repo,
            credential_repository=self.credential_repo,
            password_service=PasswordHashingService(rounds=4),
        )

    async def _create(self, requester: IdentityContext, role: AccountRole, **kwargs):
        return await self.command.execute(
            requester,
            email="new@example.com",
            password="secret1",
            name="New",
            phone_number="+15551234567",
            role=role,
            **kwargs,
        )

    async def test_admin_creates_confirmed_user(self):
        account = await self._create(_identity(AccountRole.ADMIN), AccountRole.USER)

        assert account.role == AccountRole.USER
        assert account.email_confirmed is True
        self.account_repo.save.assert_awaited_once_with(account)
        self.credential_repo.save.assert_awaited_once()

    async def test_can_create_unconfirmed(self):
        account = await self._create(
            _identity(AccountRole.ADMIN),
            AccountRole.USER,
            email_confirmed=False,
        )

        assert account.email_confirmed is False

    @pytest.mark.parametrize("role", [AccountRole.ADMIN, AccountRole.SUPERADMIN])
    async def test_admin_cannot_create_privileged(self, role):
        with pytest.raises(ForbiddenError):
            await self._create(_identity(AccountRole.ADMIN), role)

        self.account_repo.save.assert_not_called()

    @pytest.mark.parametrize("role", list(AccountRole))
    async def test_superadmin_creates_any_role(self, role):
        account = await self._create(_identity(AccountRole.SUPERADMIN), role)

        assert account.role == role

    async def test_duplicate_email(self):
        self.account_repo.exists_by_email.return_value = True

        with pytest.raises(EmailAlreadyRegisteredError):
            await self._create(_identity(AccountRole.ADMIN), AccountRole.USER)


class TestUpdateProfileCommand:
    async def test_partial_update(self):
        account = make_account()
        repo = AsyncMock()
        repo.find_by_id.return_value = account

        updated = await UpdateProfileCommand(repo).execute(
            IdentityContext.from_account(account),
            phone_number="+15559876543",
        )

        assert updated.phone_number == "+15559876543"
        assert updated.name == "Test Account"
        repo.save.assert_awaited_once_with(account)

    async def test_missing_account(self):
        repo = AsyncMock()
        repo.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await UpdateProfileCommand(repo).execute(
                _identity(AccountRole.USER),
                name="X",
            )


class TestUpdateAccountCommand:
    def setup_method(self):
        self.repo = AsyncMock()
        self.repo.exists_by_email.return_value = False
        self.command = UpdateAccountCommand(self.repo)
        self.requester = _identity(AccountRole.SUPERADMIN)
        self.target = make_account("target@example.com")
        self.repo.find_by_id.return_value = self.target

    async def test_updates_all_fields(self):
        account = await self.command.execute(
            self.requester,
            self.target.id,
            email="Renamed@example.com",
            name="Renamed",
            role=AccountRole.ADMIN,
            email_confirmed=False,
        )

        assert account.email == "renamed@example.com"
        assert account.name == "Renamed"
        assert account.role == AccountRole.ADMIN
        assert account.email_confirmed is False

    async def test_email_must_stay_unique(self):
        self.repo.exists_by_email.return_value = True

        with pytest.raises(EmailAlreadyRegisteredError):
            await self.command.execute(
                self.requester,
                self.target.id,
                email="taken@example.com",
            )

        self.repo.save.assert_not_called()

    async def test_same_email_skips_uniqueness_check(self):
        await self.command.execute(
            self.requester,
            self.target.id,
            email="TARGET@example.com",
        )

        self.repo.exists_by_email.assert_not_called()

    async def test_cannot_change_own_role(self):
        self_account = make_account("root@example.com", role=AccountRole.SUPERADMIN)
        self.repo.find_by_id.return_value = self_account

        with pytest.raises(CannotDemoteSelfError):
            await self.command.execute(
                IdentityContext.from_account(self_account),
                self_account.id,
                role=AccountRole.USER,
            )

    async def test_missing_account(self):
        self.repo.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.command.execute(self.requester, self.target.id, name="X")


class TestDeleteAccountCommand:
    def setup_method(self):
        self.account_repo = AsyncMock()
        self.credential_repo = AsyncMock()
        self.token_repo = AsyncMock()
        self.code_repo = AsyncMock()
        self.command = DeleteAccountCommand(
            account_repository=self.account_repo,
            credential_repository=self.credential_repo,
            token_repository=self.token_repo,
            code_repository=self.code_repo,
        )

    async def test_removes_everything(self):
        target = make_account("target@example.com")
        target.set_profile_picture("/media/abc.png")
        self.account_repo.find_by_id.return_value = target

        picture = await self.command.execute(_identity(AccountRole.SUPERADMIN), target.id)

        self.token_repo.delete_for_account.assert_awaited_once_with(target.id)
        self.code_repo.delete_for_account.assert_awaited_once_with(target.id)
        self.credential_repo.delete.assert_awaited_once_with(target.id)
        self.account_repo.delete.assert_awaited_once_with(target.id)
        # The file outlives the transaction; the caller removes it after commit
        assert picture == "/media/abc.png"

    async def test_account_without_picture_returns_none(self):
        target = make_account("target@example.com")
        self.account_repo.find_by_id.return_value = target

        assert await self.command.execute(_identity(AccountRole.SUPERADMIN), target.id) is None

    async def test_cannot_delete_self(self):
        requester = _identity(AccountRole.SUPERADMIN)

        with pytest.raises(CannotDeleteSelfError):
            await self.command.execute(requester, requester.account_id)

        self.account_repo.delete.assert_not_called()

    async def test_missing_account(self):
        self.account_repo.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.command.execute(
                _identity(AccountRole.SUPERADMIN),
                make_account().id,
            )


class TestUpdateProfilePictureCommand:
    def setup_method(self):
        self.repo = AsyncMock()
        self.storage = Mock(spec=ProfilePictureStorage)
        self.storage.save.return_value = "/media/new.png"
        self.command = UpdateProfilePictureCommand(self.repo, self.storage)
        self.account = make_account()
        self.repo.find_by_id.return_value = self.account
        self.identity = IdentityContext.from_account(self.account)

    async def test_stores_and_reports_previous(self):
        self.account.set_profile_picture("/media/old.png")

        update = await self.command.execute(
            self.identity,
            PNG_BYTES,
            "Me.PNG",
            "image/png",
        )

        self.storage.save.assert_called_once_with(PNG_BYTES, "png")
        # The old file stays until the caller has committed
        self.storage.delete.assert_not_called()
        assert update.account.profile_picture_url == "/media/new.png"
        assert update.reference == "/media/new.png"
        assert update.previous_reference == "/media/old.png"

    async def test_first_upload_has_no_previous(self):
        update = await self.command.execute(self.identity, PNG_BYTES, "me.png", "image/png")

        assert update.previous_reference is None

    async def test_failed_save_removes_new_file(self):
        self.account.set_profile_picture("/media/old.png")
        self.repo.save.side_effect = RuntimeError("database unavailable")

        with pytest.raises(RuntimeError):
            await self.command.execute(self.identity, PNG_BYTES, "me.png", "image/png")

        self.storage.delete.assert_called_once_with("/media/new.png")

    @pytest.mark.parametrize(
        ("content", "filename", "content_type"),
        [
            (b"", "me.png", "image/png"),
            (b"x" * (MAX_PROFILE_PICTURE_BYTES + 1), "me.png", "image/png"),
            (PNG_BYTES, "me.svg", "image/svg+xml"),
            (PNG_BYTES, "me", "image/png"),
            (PNG_BYTES, "me.png", "application/pdf"),
            (PNG_BYTES, None, None),
        ],
    )
    async def test_rejects_invalid_uploads(self, content, filename, content_type):
        with pytest.raises(InvalidProfilePictureError):
            await self.command.execute(self.identity, content, filename, content_type)

        self.storage.save.assert_not_called()

    def test_exactly_max_size_is_allowed(self):
        content = b"x" * MAX_PROFILE_PICTURE_BYTES

        extension = UpdateProfilePictureCommand.validate(content, "a.webp", "image/webp")

        assert extension == "webp"


class TestAccountQueries:
    async def test_list(self):
        repo = AsyncMock()
        accounts = [make_account("a@example.com"), make_account("b@example.com")]
        repo.list_all.return_value = accounts

        assert await ListAccountsQuery(repo).execute() == accounts

    async def test_get_missing(self):
        repo = AsyncMock()
        repo.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await GetAccountQuery(repo).execute(make_account().id)
