"""Request access pipeline: token validation followed by role authorization.

Each stage takes an ``AccessRequest`` and returns the (possibly enriched)
request or raises. Both stages are pure in-process checks: a signature and
clock comparison, then a set membership test.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, replace

from tessera_identity.application.access.route_access import RouteAccess
from tessera_identity.application.context import IdentityContext
from tessera_identity.exceptions import (
    ForbiddenError,
    InvalidTokenError,
    UnauthorizedError,
)
from tessera_identity.services import JWTService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class AccessRequest:
    """State threaded through the pipeline stages."""

    access: RouteAccess
    authorization: str | None
    identity: IdentityContext | None = None


class AccessStage(ABC):
    """A single step of the access pipeline."""

    @abstractmethod
    def process(self, request: AccessRequest) -> AccessRequest:
        """Check the request and return it, or raise to stop the pipeline."""


class TokenValidator(AccessStage):
    """Turns an ``Authorization`` header into an ``IdentityContext``.

    Every failure (missing header, wrong scheme, bad signature, expiry,
    malformed claims) raises the same ``UnauthorizedError``.
    """

    def __init__(self, jwt_service: JWTService):
        self._jwt_service = jwt_service

    def authenticate(self, authorization: str | None) -> IdentityContext:
        if not authorization:
            raise UnauthorizedError("missing authorization header")

        scheme, _, token = authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != BEARER_SCHEME or not token:
            raise UnauthorizedError("malformed authorization header")

        try:
            payload = self._jwt_service.verify_token(token)
        except InvalidTokenError as e:
            logger.debug("Rejected session token: %s", e.message)
            raise UnauthorizedError(e.message) from e

        if not payload.is_access_token():
            raise UnauthorizedError("unexpected token type")

        return IdentityContext.from_token(payload)

    def process(self, request: AccessRequest) -> AccessRequest:
        return replace(request, identity=self.authenticate(request.authorization))


class RoleAuthorizer(AccessStage):
    """Admits an identity only if its role is in the route's role set."""

    def authorize(self, identity: IdentityContext, access: RouteAccess) -> None:
        if not access.requires_roles:
            return
        if identity.role not in access.roles:
            logger.info(
                "Access denied for account %s (role=%s)",
                identity.account_id,
                identity.role.value,
            )
            raise ForbiddenError

    def process(self, request: AccessRequest) -> AccessRequest:
        if request.identity is None:
            raise UnauthorizedError("no identity before role check")
        self.authorize(request.identity, request.access)
        return request


class AccessPipeline:
    """Ordered chain of access stages applied to non-public routes."""

    def __init__(self, stages: Sequence[AccessStage]):
        self._stages = tuple(stages)

    @classmethod
    def default(cls, jwt_service: JWTService) -> AccessPipeline:
        return cls([TokenValidator(jwt_service), RoleAuthorizer()])

    @property
    def stages(self) -> tuple[AccessStage, ...]:
        return self._stages

    def run(
        self,
        access: RouteAccess,
        authorization: str | None,
    ) -> IdentityContext | None:
        """Run all stages for a route.

        Returns
        -------
        The caller's identity, or None for public routes (no stage runs).
        """
        if access.public:
            return None

        request = AccessRequest(access=access, authorization=authorization)
        for stage in self._stages:
            request = stage.process(request)

        if request.identity is None:
            raise UnauthorizedError("pipeline produced no identity")
        return request.identity
