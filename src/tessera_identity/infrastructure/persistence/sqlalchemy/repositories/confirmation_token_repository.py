"""SQLAlchemy implementation of ConfirmationTokenRepository."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.domain.shared.time import ensure_tz_aware, utc_now
from tessera_identity.infrastructure.persistence.sqlalchemy.models import (
    ConfirmationTokenModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.account_lock import (
    lock_account_row,
)
from tessera_identity.repositories import (
    ConfirmationTokenData,
    ConfirmationTokenRepository,
)


class ConfirmationTokenRepositorySQLAlchemy(ConfirmationTokenRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self,
        account_id: UUID,
        token_hash: str,
        expires_at: datetime,
    ) -> UUID:
        token_id = uuid4()
        model = ConfirmationTokenModel(
            id=token_id,
            account_id=account_id,
            token_hash=token_hash,
            expires_at=expires_at,
            created_at=utc_now(),
        )
        self._session.add(model)
        await self._session.flush()
        return token_id

    async def replace_for_account(
        self,
        account_id: UUID,
        token_hash: str,
        expires_at: datetime,
    ) -> UUID:
        await lock_account_row(self._session, account_id)
        await self.invalidate_all_for_account(account_id)
        return await self.create(account_id, token_hash, expires_at)

    async def find_active_by_hash(
        self,
        token_hash: str,
    ) -> ConfirmationTokenData | None:
        stmt = select(ConfirmationTokenModel).where(
            ConfirmationTokenModel.token_hash == token_hash,
            ConfirmationTokenModel.used_at.is_(None),
            ConfirmationTokenModel.expires_at > utc_now(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return ConfirmationTokenData(
            id=model.id,
            account_id=model.account_id,
            token_hash=model.token_hash,
            expires_at=ensure_tz_aware(model.expires_at),
            used_at=model.used_at,
            created_at=ensure_tz_aware(model.created_at),
        )

    async def consume(self, token_id: UUID) -> bool:
        now = utc_now()
        # Conditional update: only one concurrent caller can see rowcount == 1
        stmt = (
            update(ConfirmationTokenModel)
            .where(
                ConfirmationTokenModel.id == token_id,
                ConfirmationTokenModel.used_at.is_(None),
                ConfirmationTokenModel.expires_at > now,
            )
            .values(used_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def invalidate_all_for_account(self, account_id: UUID) -> int:
        stmt = (
            update(ConfirmationTokenModel)
            .where(
                ConfirmationTokenModel.account_id == account_id,
                ConfirmationTokenModel.used_at.is_(None),
            )
            .values(used_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[no-any-return]

    async def delete_for_account(self, account_id: UUID) -> None:
        stmt = (
            delete(ConfirmationTokenModel)
            .where(ConfirmationTokenModel.account_id == account_id)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def cleanup_expired(self) -> int:
        stmt = (
            delete(ConfirmationTokenModel)
            .where(
                or_(
                    ConfirmationTokenModel.expires_at < utc_now(),
                    ConfirmationTokenModel.used_at.is_not(None),
                ),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[no-any-return]
