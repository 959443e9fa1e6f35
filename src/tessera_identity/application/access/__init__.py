"""Access control for routes: metadata plus the stages that enforce it."""

from tessera_identity.application.access.pipeline import (
    AccessPipeline,
    AccessRequest,
    AccessStage,
    RoleAuthorizer,
    TokenValidator,
)
from tessera_identity.application.access.route_access import RouteAccess

__all__ = [
    "AccessPipeline",
    "AccessRequest",
    "AccessStage",
    "RoleAuthorizer",
    "RouteAccess",
    "TokenValidator",
]
