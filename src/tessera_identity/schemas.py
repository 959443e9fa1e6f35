"""Identity schemas and data structures.

Simple data classes used for transferring identity data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from tessera_identity.domain.account import AccountRole


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session token payload.

    Attributes
    ----------
    account_id
        The unique identifier of the account
    email
        The account's email address at issuance
    role
        The account's role at issuance
    exp
        Token expiration timestamp
    token_type
        Always "access" for session tokens
    """

    account_id: UUID
    email: str
    role: AccountRole
    exp: datetime
    token_type: str

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp

    def is_access_token(self) -> bool:
        """Check if this is an access token."""
        return self.token_type == "access"
