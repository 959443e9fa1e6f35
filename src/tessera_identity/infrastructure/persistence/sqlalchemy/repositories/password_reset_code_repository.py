"""SQLAlchemy implementation of PasswordResetCodeRepository."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.domain.shared.time import ensure_tz_aware, utc_now
from tessera_identity.infrastructure.persistence.sqlalchemy.models import (
    PasswordResetCodeModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.account_lock import (
    lock_account_row,
)
from tessera_identity.repositories import (
    PasswordResetCodeData,
    PasswordResetCodeRepository,
)


class PasswordResetCodeRepositorySQLAlchemy(PasswordResetCodeRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self,
        account_id: UUID,
        code_hash: str,
        expires_at: datetime,
    ) -> UUID:
        code_id = uuid4()
        model = PasswordResetCodeModel(
            id=code_id,
            account_id=account_id,
            code_hash=code_hash,
            expires_at=expires_at,
            created_at=utc_now(),
        )
        self._session.add(model)
        await self._session.flush()
        return code_id

    async def replace_for_account(
        self,
        account_id: UUID,
        code_hash: str,
        expires_at: datetime,
    ) -> UUID:
        await lock_account_row(self._session, account_id)
        await self.invalidate_all_for_account(account_id)
        return await self.create(account_id, code_hash, expires_at)

    async def count_recent_for_account(self, account_id: UUID, since: datetime) -> int:
        stmt = select(func.count()).where(
            PasswordResetCodeModel.account_id == account_id,
            PasswordResetCodeModel.created_at >= since,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()  # type: ignore[no-any-return]

    async def find_active_for_account(
        self,
        account_id: UUID,
    ) -> PasswordResetCodeData | None:
        stmt = (
            select(PasswordResetCodeModel)
            .where(
                PasswordResetCodeModel.account_id == account_id,
                PasswordResetCodeModel.used_at.is_(None),
                PasswordResetCodeModel.expires_at > utc_now(),
            )
            .order_by(PasswordResetCodeModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return PasswordResetCodeData(
            id=model.id,
            account_id=model.account_id,
            code_hash=model.code_hash,
            failed_attempts=model.failed_attempts,
            expires_at=ensure_tz_aware(model.expires_at),
            used_at=model.used_at,
            created_at=ensure_tz_aware(model.created_at),
        )

    async def consume(self, code_id: UUID) -> bool:
        now = utc_now()
        # Conditional update: only one concurrent caller can see rowcount == 1
        stmt = (
            update(PasswordResetCodeModel)
            .where(
                PasswordResetCodeModel.id == code_id,
                PasswordResetCodeModel.used_at.is_(None),
                PasswordResetCodeModel.expires_at > now,
            )
            .values(used_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def record_failed_attempt(self, code_id: UUID, max_attempts: int) -> bool:
        # Increment in SQL so concurrent wrong guesses are all counted
        increment = (
            update(PasswordResetCodeModel)
            .where(
                PasswordResetCodeModel.id == code_id,
                PasswordResetCodeModel.used_at.is_(None),
            )
            .values(failed_attempts=PasswordResetCodeModel.failed_attempts + 1)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(increment)

        burn = (
            update(PasswordResetCodeModel)
            .where(
                PasswordResetCodeModel.id == code_id,
                PasswordResetCodeModel.used_at.is_(None),
                PasswordResetCodeModel.failed_attempts >= max_attempts,
            )
            .values(used_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(burn)
        return result.rowcount == 1

    async def invalidate_all_for_account(self, account_id: UUID) -> int:
        stmt = (
            update(PasswordResetCodeModel)
            .where(
                PasswordResetCodeModel.account_id == account_id,
                PasswordResetCodeModel.used_at.is_(None),
            )
            .values(used_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[no-any-return]

    async def delete_for_account(self, account_id: UUID) -> None:
        stmt = (
            delete(PasswordResetCodeModel)
            .where(PasswordResetCodeModel.account_id == account_id)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def cleanup_expired(self) -> int:
        stmt = (
            delete(PasswordResetCodeModel)
            .where(
                or_(
                    PasswordResetCodeModel.expires_at < utc_now(),
                    PasswordResetCodeModel.used_at.is_not(None),
                ),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[no-any-return]
