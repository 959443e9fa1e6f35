"""Per-route access metadata."""

from __future__ import annotations

from dataclasses import dataclass, field

from tessera_identity.domain.account import AccountRole


@dataclass(frozen=True)
class RouteAccess:
    """What a route requires of its caller.

    Attributes
    ----------
    public
        Skip the whole access pipeline (no token needed).
    roles
        Roles allowed to call the route. Empty means any authenticated identity.
    """

    public: bool = False
    roles: frozenset[AccountRole] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.public and self.roles:
            msg = "A public route cannot declare required roles"
            raise ValueError(msg)

    @classmethod
    def public_route(cls) -> RouteAccess:
        return cls(public=True)

    @classmethod
    def authenticated(cls) -> RouteAccess:
        return cls()

    @classmethod
    def restricted(cls, *roles: AccountRole) -> RouteAccess:
        if not roles:
            msg = "At least one role is required for a restricted route"
            raise ValueError(msg)
        return cls(roles=frozenset(roles))

    @property
    def requires_roles(self) -> bool:
        return bool(self.roles)
