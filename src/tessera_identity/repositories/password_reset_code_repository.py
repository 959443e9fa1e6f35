"""Abstract repository interface for password reset codes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from tessera_identity.domain.shared.time import ensure_tz_aware


@dataclass(frozen=True)
class PasswordResetCodeData:
    """Immutable reset code data. Only the SHA-256 hash of the code is stored."""

    id: UUID
    account_id: UUID
    code_hash: str
    expires_at: datetime
    used_at: datetime | None
    created_at: datetime
    failed_attempts: int = 0

    def is_expired(self, now: datetime) -> bool:
        return now >= ensure_tz_aware(self.expires_at)

    def is_used(self) -> bool:
        return self.used_at is not None

    def is_active(self, now: datetime) -> bool:
        return not self.is_used() and not self.is_expired(now)


class PasswordResetCodeRepository(ABC):
    """Abstract repository for six-digit password reset codes."""

    @abstractmethod
    async def create(
        self,
        account_id: UUID,
        code_hash: str,
        expires_at: datetime,
    ) -> UUID:
        """Store a new code and return its identifier."""

    @abstractmethod
    async def replace_for_account(
        self,
        account_id: UUID,
        code_hash: str,
        expires_at: datetime,
    ) -> UUID:
        """Invalidate the account's active codes and store a new one.

        Issuance is serialized per account, so concurrent callers never leave
        more than one active code behind.
        """

    @abstractmethod
    async def count_recent_for_account(
        self,
        account_id: UUID,
        since: datetime,
    ) -> int:
        """Count codes issued to an account since ``since``."""

    @abstractmethod
    async def find_active_for_account(
        self,
        account_id: UUID,
    ) -> PasswordResetCodeData | None:
        """Return the newest unused, unexpired code of an account."""

    @abstractmethod
    async def consume(self, code_id: UUID) -> bool:
        """Atomically mark a code as used.

        Returns
        -------
        True only for the single caller that moved the code from active to used.
        """

    @abstractmethod
    async def record_failed_attempt(self, code_id: UUID, max_attempts: int) -> bool:
        """Count a wrong guess against a code.

        Returns
        -------
        True if this guess reached ``max_attempts`` and the code was burned
        """

    @abstractmethod
    async def invalidate_all_for_account(self, account_id: UUID) -> int:
        """Mark every active code of an account as used.

        Returns
        -------
        Number of codes invalidated
        """

    @abstractmethod
    async def delete_for_account(self, account_id: UUID) -> None:
        """Remove all codes belonging to an account."""

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired or used codes.

        Returns
        -------
        Number of codes deleted
        """
