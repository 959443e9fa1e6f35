"""Abstract repository interface for email confirmation tokens."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from tessera_identity.domain.shared.time import ensure_tz_aware


@dataclass(frozen=True)
class ConfirmationTokenData:
    """Immutable confirmation token data. Only the SHA-256 hash is stored."""

    id: UUID
    account_id: UUID
    token_hash: str
    expires_at: datetime
    used_at: datetime | None
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= ensure_tz_aware(self.expires_at)

    def is_used(self) -> bool:
        return self.used_at is not None

    def is_active(self, now: datetime) -> bool:
        return not self.is_used() and not self.is_expired(now)


class ConfirmationTokenRepository(ABC):
    """Abstract repository for single-use email confirmation tokens."""

    @abstractmethod
    async def create(
        self,
        account_id: UUID,
        token_hash: str,
        expires_at: datetime,
    ) -> UUID:
        """Store a new token and return its identifier."""

    @abstractmethod
    async def replace_for_account(
        self,
        account_id: UUID,
        token_hash: str,
        expires_at: datetime,
    ) -> UUID:
        """Invalidate the account's active tokens and store a new one.

        Issuance is serialized per account, so concurrent callers never leave
        more than one active token behind.
        """

    @abstractmethod
    async def find_active_by_hash(
        self,
        token_hash: str,
    ) -> ConfirmationTokenData | None:
        """Find an unused, unexpired token by its hash."""

    @abstractmethod
    async def consume(self, token_id: UUID) -> bool:
        """Atomically mark a token as used.

        Returns
        -------
        True if this call transitioned the token from active to used, False
        if it was already used or expired (for example by a concurrent request).
        """

    @abstractmethod
    async def invalidate_all_for_account(self, account_id: UUID) -> int:
        """Mark every active token of an account as used.

        Returns
        -------
        Number of tokens invalidated
        """

    @abstractmethod
    async def delete_for_account(self, account_id: UUID) -> None:
        """Remove all tokens belonging to an account."""

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired or used tokens.

        Returns
        -------
        Number of tokens deleted
        """
