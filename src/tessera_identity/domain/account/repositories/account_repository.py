"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from tessera_identity.domain.account.aggregates.account import Account
from tessera_identity.domain.account.value_objects.email import Email


class AccountRepository(ABC):
    """Repository interface for Account aggregates."""

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> Optional[Account]:
        """Find an account by its ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[Account]:
        """Find an account by its normalized email address."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if an account exists with the given email."""

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Insert or update an account."""

    @abstractmethod
    async def delete(self, account_id: UUID) -> None:
        """Delete an account by ID."""

    @abstractmethod
    async def count(self) -> int:
        """Count total accounts."""

    @abstractmethod
    async def list_all(self) -> list[Account]:
        """List all accounts, oldest first."""
