"""SQLAlchemy implementation of AccountRepository."""

import logging
from typing import Union
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.domain.account import (
    Account,
    AccountRepository,
    Email,
    EmailAlreadyRegisteredError,
)
from tessera_identity.domain.shared.time import ensure_tz_aware
from tessera_identity.infrastructure.persistence.sqlalchemy.models import AccountModel

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, account_id: UUID) -> Account | None:
        model = await self._find_model_by_id(account_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> Account | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = select(AccountModel).where(AccountModel.email == email_value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        account = await self.find_by_email(email)
        return account is not None

    async def save(self, account: Account) -> None:
        existing = await self._find_model_by_id(account.id)

        try:
            if existing:
                self._update_model(existing, account)
                logger.debug("Updated account: %s", account.id)
            else:
                self._session.add(self._map_to_model(account))
                logger.info("Created account: %s", account.id)

            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyRegisteredError(account.email) from e
            raise

    async def delete(self, account_id: UUID) -> None:
        model = await self._find_model_by_id(account_id)

        if model:
            await self._session.delete(model)
            await self._session.flush()
            logger.info("Deleted account: %s", account_id)

    async def count(self) -> int:
        stmt = select(func.count()).select_from(AccountModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_all(self) -> list[Account]:
        stmt = select(AccountModel).order_by(AccountModel.created_at)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _find_model_by_id(self, account_id: UUID) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: AccountModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            email=model.email,
            name=model.name,
            phone_number=model.phone_number,
            role=model.role,
            email_confirmed=model.email_confirmed,
            profile_picture_url=model.profile_picture_url,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        return AccountModel(
            id=account.id,
            email=account.email,
            name=account.name,
            phone_number=account.phone_number,
            role=account.role.value,
            email_confirmed=account.email_confirmed,
            profile_picture_url=account.profile_picture_url,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    def _update_model(self, model: AccountModel, account: Account) -> None:
        model.email = account.email
        model.name = account.name
        model.phone_number = account.phone_number
        model.role = account.role.value
        model.email_confirmed = account.email_confirmed
        model.profile_picture_url = account.profile_picture_url
        model.updated_at = account.updated_at
