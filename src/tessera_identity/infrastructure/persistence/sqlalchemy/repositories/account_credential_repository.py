"""SQLAlchemy implementation of AccountCredentialRepository."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.domain.shared.time import utc_now
from tessera_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountCredentialModel,
)
from tessera_identity.repositories import (
    AccountCredentialData,
    AccountCredentialRepository,
)

logger = logging.getLogger(__name__)


class AccountCredentialRepositorySQLAlchemy(AccountCredentialRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_data(self, model: AccountCredentialModel) -> AccountCredentialData:
        return AccountCredentialData(
            account_id=model.account_id,
            password_hash=model.password_hash,
            last_login_at=model.last_login_at,
        )

    async def _find_model(self, account_id: UUID) -> AccountCredentialModel | None:
        stmt = select(AccountCredentialModel).where(
            AccountCredentialModel.account_id == account_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(
        self,
        account_id: UUID,
        password_hash: str,
    ) -> AccountCredentialData:
        existing = await self._find_model(account_id)

        if existing:
            existing.password_hash = password_hash
            existing.updated_at = utc_now()
            await self._session.flush()
            logger.debug("Updated credentials for account: %s", account_id)
            return self._to_data(existing)

        model = AccountCredentialModel(
            account_id=account_id,
            password_hash=password_hash,
        )
        self._session.add(model)
        await self._session.flush()
        logger.info("Created credentials for account: %s", account_id)
        return self._to_data(model)

    async def find_by_account_id(self, account_id: UUID) -> AccountCredentialData | None:
        model = await self._find_model(account_id)
        return self._to_data(model) if model else None

    async def record_login(self, account_id: UUID) -> None:
        model = await self._find_model(account_id)
        if model:
            model.last_login_at = utc_now()
            await self._session.flush()

    async def delete(self, account_id: UUID) -> None:
        stmt = delete(AccountCredentialModel).where(
            AccountCredentialModel.account_id == account_id,
        )
        await self._session.execute(stmt)
        await self._session.flush()
