"""Identity context for the authenticated caller of a request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from tessera_identity.domain.account import AccountRole

if TYPE_CHECKING:
    from tessera_identity.domain.account import Account
    from tessera_identity.schemas import TokenPayload


@dataclass(frozen=True)
class IdentityContext:
    """Immutable identity produced by the token validator.

    Handlers receive it as an explicit argument; nothing is stashed on the
    request object.
    """

    account_id: UUID
    email: str
    role: AccountRole = AccountRole.USER

    @classmethod
    def from_token(cls, payload: TokenPayload) -> IdentityContext:
        return cls(
            account_id=payload.account_id,
            email=payload.email,
            role=payload.role,
        )

    @classmethod
    def from_account(cls, account: Account) -> IdentityContext:
        return cls(account_id=account.id, email=account.email, role=account.role)

    @property
    def is_superadmin(self) -> bool:
        return self.role == AccountRole.SUPERADMIN

    def __str__(self) -> str:
        return f"IdentityContext({self.email})"
