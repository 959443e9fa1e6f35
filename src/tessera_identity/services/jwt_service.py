"""Session token service.

Signs and verifies the stateless bearer tokens that carry an account's id,
email and role.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from tessera_identity.domain.account import AccountRole
from tessera_identity.exceptions import InvalidTokenError
from tessera_identity.schemas import TokenPayload


class JWTService:
    """Service for session token creation and verification.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(account_id, "a@example.com", AccountRole.USER)
    >>> payload = service.verify_token(token)
    >>> print(payload.role)
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 24
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ["sub", "exp", "iat"]

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_hours
            Hours until a session token expires (default 24)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(hours=access_token_expire_hours)

    @property
    def access_token_expire_seconds(self) -> int:
        return int(self._access_expire.total_seconds())

    def create_access_token(
        self,
        account_id: UUID,
        email: str,
        role: AccountRole,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a session token.

        Parameters
        ----------
        account_id
            The account's unique identifier
        email
            The account's email address
        role
            The account's role at issuance
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)

        payload = {
            "sub": str(account_id),
            "email": email,
            "role": role.value,
            "type": "access",
            "iat": now,
            "exp": now + (expires_delta or self._access_expire),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify signature and expiry of a token and decode it.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": self.REQUIRED_CLAIMS},
            )

            return TokenPayload(
                account_id=UUID(payload["sub"]),
                email=payload["email"],
                role=AccountRole(payload["role"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_type=payload.get("type", "access"),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
