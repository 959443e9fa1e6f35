"""Repository tests against in-memory SQLite.

Covers persistence mapping and the single-use semantics of tokens and codes.
"""

from datetime import timedelta

import pytest

from tessera_identity import AccountRole, EmailAlreadyRegisteredError
from tessera_identity.domain.shared.time import utc_now
from tessera_identity.infrastructure.persistence.sqlalchemy import (
    AccountCredentialRepositorySQLAlchemy,
    AccountRepositorySQLAlchemy,
    ConfirmationTokenRepositorySQLAlchemy,
    PasswordResetCodeRepositorySQLAlchemy,
)
from tessera_identity.services.one_time_secrets import hash_secret
from tests.shared.fixtures.factories import make_account


class TestAccountRepository:
    async def test_save_and_find(self, sqlite_session):
        repo = AccountRepositorySQLAlchemy(sqlite_session)
        account = make_account("Jane@Example.com", role=AccountRole.ADMIN)

        await repo.save(account)
        found = await repo.find_by_email("JANE@example.com")

        assert found == account
        assert found.role == AccountRole.ADMIN
        assert found.created_at.tzinfo is not None
        assert await repo.exists_by_email("jane@example.com")
        assert await repo.count() == 1

    async def test_save_updates_existing(self, sqlite_session):
        repo = AccountRepositorySQLAlchemy(sqlite_session)
        account = make_account()
        await repo.save(account)

        account.update_profile(name="Renamed")
        account.set_profile_picture("/media/a.png")
        await repo.save(account)

        found = await repo.find_by_id(account.id)
        assert found.name == "Renamed"
        assert found.profile_picture_url == "/media/a.png"

    async def test_duplicate_email_maps_to_domain_error(self, sqlite_session):
        repo = AccountRepositorySQLAlchemy(sqlite_session)
        await repo.save(make_account("dup@example.com"))

        with pytest.raises(EmailAlreadyRegisteredError):
            await repo.save(make_account("dup@example.com"))

    async def test_list_and_delete(self, sqlite_session):
        repo = AccountRepositorySQLAlchemy(sqlite_session)
        first = make_account("first@example.com")
        second = make_account("second@example.com")
        await repo.save(first)
        await repo.save(second)

        assert [a.id for a in await repo.list_all()] == [first.id, second.id]

        await repo.delete(first.id)
        assert await repo.find_by_id(first.id) is None


class TestCredentialRepository:
    async def test_save_replaces_hash(self, sqlite_session):
        account = make_account()
        await AccountRepositorySQLAlchemy(sqlite_session).save(account)
        repo = AccountCredentialRepositorySQLAlchemy(sqlite_session)

        await repo.save(account_id=account.id, password_hash="first")
        await repo.save(account_id=account.id, password_hash="second")
        await repo.record_login(account.id)

        credential = await repo.find_by_account_id(account.id)
        assert credential.password_hash == "second"
        assert credential.last_login_at is not None

    async def test_delete(self, sqlite_session):
        account = make_account()
        repo = AccountCredentialRepositorySQLAlchemy(sqlite_session)
        await repo.save(account_id=account.id, password_hash="hash")

        await repo.delete(account.id)

        assert await repo.find_by_account_id(account.id) is None


class TestConfirmationTokenRepository:
    async def test_consume_is_single_use(self, sqlite_session):
        account = make_account()
        repo = ConfirmationTokenRepositorySQLAlchemy(sqlite_session)
        token_id = await repo.create(
            account.id,
            hash_secret("raw"),
            utc_now() + timedelta(hours=1),
        )

        found = await repo.find_active_by_hash(hash_secret("raw"))
        assert found.id == token_id

        assert await repo.consume(token_id) is True
        assert await repo.consume(token_id) is False
        assert await repo.find_active_by_hash(hash_secret("raw")) is None

    async def test_expired_token_cannot_be_consumed(self, sqlite_session):
        account = make_account()
        repo = ConfirmationTokenRepositorySQLAlchemy(sqlite_session)
        token_id = await repo.create(
            account.id,
            hash_secret("raw"),
            utc_now() - timedelta(seconds=1),
        )

        assert await repo.find_active_by_hash(hash_secret("raw")) is None
        assert await repo.consume(token_id) is False

    async def test_invalidate_and_cleanup(self, sqlite_session):
        account = make_account()
        repo = ConfirmationTokenRepositorySQLAlchemy(sqlite_session)
        await repo.create(account.id, hash_secret("a"), utc_now() + timedelta(hours=1))
        await repo.create(account.id, hash_secret("b"), utc_now() - timedelta(hours=1))

        assert await repo.invalidate_all_for_account(account.id) == 2
        assert await repo.find_active_by_hash(hash_secret("a")) is None
        assert await repo.cleanup_expired() == 2

    async def test_replace_leaves_single_active_token(self, sqlite_session):
        account = make_account()
        await AccountRepositorySQLAlchemy(sqlite_session).save(account)
        repo = ConfirmationTokenRepositorySQLAlchemy(sqlite_session)
        expires_at = utc_now() + timedelta(hours=1)
        await repo.create(account.id, hash_secret("old"), expires_at)

        new_id = await repo.replace_for_account(account.id, hash_secret("new"), expires_at)

        assert await repo.find_active_by_hash(hash_secret("old")) is None
        assert (await repo.find_active_by_hash(hash_secret("new"))).id == new_id
        assert await repo.invalidate_all_for_account(account.id) == 1


class TestPasswordResetCodeRepository:
    async def test_newest_code_supersedes(self, sqlite_session):
        account = make_account()
        repo = PasswordResetCodeRepositorySQLAlchemy(sqlite_session)
        expires_at = utc_now() + timedelta(minutes=15)

        await repo.create(account.id, hash_secret("111111"), expires_at)
        await repo.invalidate_all_for_account(account.id)
        newest_id = await repo.create(account.id, hash_secret("222222"), expires_at)

        active = await repo.find_active_for_account(account.id)
        assert active.id == newest_id
        assert active.code_hash == hash_secret("222222")

    async def test_consume_is_single_use(self, sqlite_session):
        account = make_account()
        repo = PasswordResetCodeRepositorySQLAlchemy(sqlite_session)
        code_id = await repo.create(
            account.id,
            hash_secret("123456"),
            utc_now() + timedelta(minutes=15),
        )

        assert await repo.consume(code_id) is True
        assert await repo.consume(code_id) is False
        assert await repo.find_active_for_account(account.id) is None

    async def test_delete_for_account(self, sqlite_session):
        account = make_account()
        repo = PasswordResetCodeRepositorySQLAlchemy(sqlite_session)
        await repo.create(
            account.id,
            hash_secret("123456"),
            utc_now() + timedelta(minutes=15),
        )

        await repo.delete_for_account(account.id)

        assert await repo.find_active_for_account(account.id) is None

    async def test_replace_leaves_single_active_code(self, sqlite_session):
        account = make_account()
        await AccountRepositorySQLAlchemy(sqlite_session).save(account)
        repo = PasswordResetCodeRepositorySQLAlchemy(sqlite_session)
        expires_at = utc_now() + timedelta(minutes=15)
        await repo.create(account.id, hash_secret("111111"), expires_at)

        new_id = await repo.replace_for_account(account.id, hash_secret("222222"), expires_at)

        active = await repo.find_active_for_account(account.id)
        assert active.id == new_id
        assert await repo.invalidate_all_for_account(account.id) == 1

    async def test_count_recent_includes_used_codes(self, sqlite_session):
        account = make_account()
        other = make_account("other@example.com")
        repo = PasswordResetCodeRepositorySQLAlchemy(sqlite_session)
        expires_at = utc_now() + timedelta(minutes=15)
        await repo.create(account.id, hash_secret("111111"), expires_at)
        await repo.invalidate_all_for_account(account.id)
        await repo.create(account.id, hash_secret("222222"), expires_at)
        await repo.create(other.id, hash_secret("333333"), expires_at)

        day_ago = utc_now() - timedelta(days=1)
        assert await repo.count_recent_for_account(account.id, day_ago) == 2
        assert await repo.count_recent_for_account(
            account.id,
            utc_now() + timedelta(minutes=1),
        ) == 0

    async def test_code_burned_after_max_failed_attempts(self, sqlite_session):
        account = make_account()
        repo = PasswordResetCodeRepositorySQLAlchemy(sqlite_session)
        code_id = await repo.create(
            account.id,
            hash_secret("123456"),
            utc_now() + timedelta(minutes=15),
        )

        assert await repo.record_failed_attempt(code_id, 3) is False
        assert await repo.record_failed_attempt(code_id, 3) is False
        assert await repo.find_active_for_account(account.id) is not None

        assert await repo.record_failed_attempt(code_id, 3) is True
        assert await repo.find_active_for_account(account.id) is None
        assert await repo.consume(code_id) is False
        # Already burned: later guesses change nothing
        assert await repo.record_failed_attempt(code_id, 3) is False

    async def test_new_code_starts_without_failed_attempts(self, sqlite_session):
        account = make_account()
        repo = PasswordResetCodeRepositorySQLAlchemy(sqlite_session)
        await repo.create(account.id, hash_secret("123456"), utc_now() + timedelta(minutes=15))

        active = await repo.find_active_for_account(account.id)

        assert active.failed_attempts == 0
