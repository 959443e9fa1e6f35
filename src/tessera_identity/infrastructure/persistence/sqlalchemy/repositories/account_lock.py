"""Per-account row lock used to serialize one-time secret issuance."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.infrastructure.persistence.sqlalchemy.models import AccountModel


async def lock_account_row(session: AsyncSession, account_id: UUID) -> None:
    """Hold ``SELECT ... FOR UPDATE`` on the account until the transaction ends.

    A second issuer for the same account blocks here until the first commits,
    and its following UPDATE then sees the committed row. SQLite has no row
    locks; it serializes writers on the whole database instead.
    """
    stmt = select(AccountModel.id).where(AccountModel.id == account_id).with_for_update()
    await session.execute(stmt)
