"""Concurrency tests for one-time secrets on PostgreSQL.

Several sessions race to consume the same token or code; the conditional
update must let exactly one of them win. Racing issuers for one account must
leave exactly one active token or code behind.
"""

import asyncio
from datetime import timedelta
from unittest.mock import Mock

import pytest
from sqlalchemy import func, select

from tessera_identity import PasswordHashingService, PasswordResetService
from tessera_identity.application.ports import EmailSender
from tessera_identity.domain.shared.time import utc_now
from tessera_identity.infrastructure.persistence.sqlalchemy import (
    AccountCredentialRepositorySQLAlchemy,
    AccountRepositorySQLAlchemy,
    ConfirmationTokenRepositorySQLAlchemy,
    PasswordResetCodeRepositorySQLAlchemy,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.models import (
    ConfirmationTokenModel,
    PasswordResetCodeModel,
)
from tessera_identity.services.one_time_secrets import hash_secret
from tests.shared.fixtures.factories import make_account

RACERS = 8


async def _race(session_maker, repository_cls, secret_id) -> list[bool]:
    async def consume_once() -> bool:
        async with session_maker() as session:
            won = await repository_cls(session).consume(secret_id)
            await session.commit()
            return won

    return await asyncio.gather(*(consume_once() for _ in range(RACERS)))


async def _active_count(session_maker, model, account_id) -> int:
    async with session_maker() as session:
        stmt = select(func.count()).where(
            model.account_id == account_id,
            model.used_at.is_(None),
        )
        return (await session.execute(stmt)).scalar_one()


@pytest.mark.integration
class TestConcurrentConsume:
    async def test_reset_code_consumed_exactly_once(self, db_session, session_maker):
        account = make_account()
        await AccountRepositorySQLAlchemy(db_session).save(account)
        code_id = await PasswordResetCodeRepositorySQLAlchemy(db_session).create(
            account.id,
            hash_secret("123456"),
            utc_now() + timedelta(minutes=15),
        )
        await db_session.commit()

        results = await _race(
            session_maker,
            PasswordResetCodeRepositorySQLAlchemy,
            code_id,
        )

        assert results.count(True) == 1

    async def test_confirmation_token_consumed_exactly_once(
        self,
        db_session,
        session_maker,
    ):
        account = make_account(email_confirmed=False)
        await AccountRepositorySQLAlchemy(db_session).save(account)
        token_id = await ConfirmationTokenRepositorySQLAlchemy(db_session).create(
            account.id,
            hash_secret("raw-token"),
            utc_now() + timedelta(hours=24),
        )
        await db_session.commit()

        results = await _race(
            session_maker,
            ConfirmationTokenRepositorySQLAlchemy,
            token_id,
        )

        assert results.count(True) == 1

    async def test_account_round_trip_keeps_timezone(self, db_session):
        account = make_account("Jane@Example.com")
        repo = AccountRepositorySQLAlchemy(db_session)
        await repo.save(account)
        await db_session.commit()

        found = await repo.find_by_email("jane@example.com")

        assert found == account
        assert found.created_at.tzinfo is not None


@pytest.mark.integration
class TestConcurrentIssuance:
    async def test_racing_reset_requests_leave_one_active_code(
        self,
        db_session,
        session_maker,
    ):
        account = make_account()
        await AccountRepositorySQLAlchemy(db_session).save(account)
        await db_session.commit()

        async def request_once() -> None:
            async with session_maker() as session:
                service = PasswordResetService(
                    account_repository=AccountRepositorySQLAlchemy(session),
                    code_repository=PasswordResetCodeRepositorySQLAlchemy(session),
                    credential_repository=AccountCredentialRepositorySQLAlchemy(session),
                    password_service=Mock(spec=PasswordHashingService),
                    email_sender=Mock(spec=EmailSender),
                    max_resets_per_day=RACERS,
                )
                await service.request_reset(account.email)
                await session.commit()

        await asyncio.gather(*(request_once() for _ in range(RACERS)))

        assert await _active_count(session_maker, PasswordResetCodeModel, account.id) == 1

    async def test_racing_confirmation_tokens_leave_one_active(
        self,
        db_session,
        session_maker,
    ):
        account = make_account(email_confirmed=False)
        await AccountRepositorySQLAlchemy(db_session).save(account)
        await db_session.commit()

        async def replace_once(index: int) -> None:
            async with session_maker() as session:
                await ConfirmationTokenRepositorySQLAlchemy(session).replace_for_account(
                    account.id,
                    hash_secret(f"raw-token-{index}"),
                    utc_now() + timedelta(hours=24),
                )
                await session.commit()

        await asyncio.gather(*(replace_once(i) for i in range(RACERS)))

        assert await _active_count(session_maker, ConfirmationTokenModel, account.id) == 1

    async def test_racing_wrong_guesses_burn_code_once(self, db_session, session_maker):
        account = make_account()
        await AccountRepositorySQLAlchemy(db_session).save(account)
        code_id = await PasswordResetCodeRepositorySQLAlchemy(db_session).create(
            account.id,
            hash_secret("123456"),
            utc_now() + timedelta(minutes=15),
        )
        await db_session.commit()

        async def guess_once() -> bool:
            async with session_maker() as session:
                burned = await PasswordResetCodeRepositorySQLAlchemy(
                    session,
                ).record_failed_attempt(code_id, 5)
                await session.commit()
                return burned

        results = await asyncio.gather(*(guess_once() for _ in range(RACERS)))

        assert results.count(True) == 1
        assert await _active_count(session_maker, PasswordResetCodeModel, account.id) == 0
