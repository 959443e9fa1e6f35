"""Account role value object."""

from enum import Enum


class AccountRole(str, Enum):
    """Roles an account can hold, from least to most privileged."""

    USER = "USER"
    ADMIN = "ADMIN"
    SUPERADMIN = "SUPERADMIN"

    @property
    def is_privileged(self) -> bool:
        return self in (AccountRole.ADMIN, AccountRole.SUPERADMIN)
