"""Abstract repository interface for account credentials."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class AccountCredentialData:
    """Immutable credential data for one account."""

    account_id: UUID
    password_hash: str
    last_login_at: datetime | None = None


class AccountCredentialRepository(ABC):
    """Abstract repository for password hashes, kept apart from profiles."""

    @abstractmethod
    async def save(
        self,
        account_id: UUID,
        password_hash: str,
    ) -> AccountCredentialData:
        """Create or replace the password hash of an account."""

    @abstractmethod
    async def find_by_account_id(
        self,
        account_id: UUID,
    ) -> AccountCredentialData | None:
        """Find the credential record of an account."""

    @abstractmethod
    async def record_login(self, account_id: UUID) -> None:
        """Stamp the time of a successful login."""

    @abstractmethod
    async def delete(self, account_id: UUID) -> None:
        """Remove the credential record of an account."""
