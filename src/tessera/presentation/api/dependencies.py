"""FastAPI dependency injection for the Tessera API.

Provides dependencies for:
- Database sessions
- Route access (token validation and role authorization per route)
- Service, command and collaborator instances
"""

import logging
from collections.abc import Awaitable, Callable
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import BackgroundTasks, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tessera.presentation.api.background_email import BackgroundEmailSender
from tessera.presentation.api.config import get_api_settings
from tessera_config.settings import Settings
from tessera_identity import (
    AccessPipeline,
    AccountRole,
    AuthenticationService,
    IdentityContext,
    JWTService,
    PasswordHashingService,
    PasswordResetService,
    RegistrationService,
    RouteAccess,
)
from tessera_identity.application.ports import EmailSender, ProfilePictureStorage
from tessera_identity.infrastructure.email import SmtpEmailService
from tessera_identity.infrastructure.persistence.sqlalchemy import (
    AccountCredentialRepositorySQLAlchemy,
    AccountRepositorySQLAlchemy,
    Base,
    ConfirmationTokenRepositorySQLAlchemy,
    PasswordResetCodeRepositorySQLAlchemy,
)
from tessera_identity.infrastructure.storage import LocalFileStorage

logger = logging.getLogger(__name__)

# Security scheme for the OpenAPI docs; the header itself is parsed by the
# access pipeline.
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache()
def get_database_url() -> str:
    """Get database URL from application settings."""
    url = get_api_settings().database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite"):
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Uncommitted work is rolled back when the session closes, so routers
    only commit on success.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create all identity tables (idempotent)."""
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date")


# -----------------------------------------------------------------------------
# Security Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.password_hash_rounds)


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


# -----------------------------------------------------------------------------
# Route Access
# -----------------------------------------------------------------------------

PUBLIC = RouteAccess.public_route()
AUTHENTICATED = RouteAccess.authenticated()
PRIVILEGED = RouteAccess.restricted(AccountRole.ADMIN, AccountRole.SUPERADMIN)
SUPERADMIN_ONLY = RouteAccess.restricted(AccountRole.SUPERADMIN)


def get_access_pipeline(jwt_service: JWTServiceDep) -> AccessPipeline:
    return AccessPipeline.default(jwt_service)


def require_access(
    access: RouteAccess,
) -> Callable[..., Awaitable[IdentityContext | None]]:
    """Build the dependency that enforces ``access`` for one route.

    Public routes get a no-op dependency. All others run the access
    pipeline and receive the caller's ``IdentityContext``.
    """
    if access.public:

        async def allow_anonymous() -> None:
            return None

        return allow_anonymous

    async def enforce_access(
        request: Request,
        pipeline: AccessPipeline = Depends(get_access_pipeline),
        _credentials: HTTPAuthorizationCredentials | None = Depends(security),
    ) -> IdentityContext | None:
        return pipeline.run(access, request.headers.get("Authorization"))

    return enforce_access


CurrentIdentity = Annotated[IdentityContext, Depends(require_access(AUTHENTICATED))]
PrivilegedIdentity = Annotated[IdentityContext, Depends(require_access(PRIVILEGED))]
SuperadminIdentity = Annotated[
    IdentityContext,
    Depends(require_access(SUPERADMIN_ONLY)),
]


# -----------------------------------------------------------------------------
# Collaborators
# -----------------------------------------------------------------------------


def get_email_service(settings: SettingsDep) -> EmailSender:
    """Get the SMTP-backed email sender."""
    return SmtpEmailService(settings)


def get_email_sender(
    background_tasks: BackgroundTasks,
    email_service: EmailSender = Depends(get_email_service),
) -> EmailSender:
    """Get an email sender that delivers after the response is sent."""
    return BackgroundEmailSender(background_tasks, email_service)


def get_picture_storage(settings: SettingsDep) -> ProfilePictureStorage:
    return LocalFileStorage(settings.media_root, settings.media_url)


EmailSenderDep = Annotated[EmailSender, Depends(get_email_sender)]
PictureStorageDep = Annotated[ProfilePictureStorage, Depends(get_picture_storage)]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


def get_authentication_service(
    session: DBSession,
    jwt_service: JWTServiceDep,
    password_service: PasswordServiceDep,
) -> AuthenticationService:
    return AuthenticationService(
        account_repository=AccountRepositorySQLAlchemy(session),
        credential_repository=AccountCredentialRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
    )


def get_registration_service(  # noqa: PLR0913
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTServiceDep,
    password_service: PasswordServiceDep,
    email_sender: EmailSenderDep,
) -> RegistrationService:
    return RegistrationService(
        account_repository=AccountRepositorySQLAlchemy(session),
        credential_repository=AccountCredentialRepositorySQLAlchemy(session),
        token_repository=ConfirmationTokenRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
        email_sender=email_sender,
        frontend_base_url=settings.frontend_base_url,
        token_expiry_hours=settings.confirmation_token_expire_hours,
    )


def get_password_reset_service(
    session: DBSession,
    settings: SettingsDep,
    password_service: PasswordServiceDep,
    email_sender: EmailSenderDep,
) -> PasswordResetService:
    return PasswordResetService(
        account_repository=AccountRepositorySQLAlchemy(session),
        code_repository=PasswordResetCodeRepositorySQLAlchemy(session),
        credential_repository=AccountCredentialRepositorySQLAlchemy(session),
        password_service=password_service,
        email_sender=email_sender,
        code_expiry_minutes=settings.password_reset_code_expire_minutes,
        max_resets_per_day=settings.password_reset_max_requests_per_day,
        max_failed_attempts=settings.password_reset_max_attempts,
    )


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
RegistrationServiceDep = Annotated[
    RegistrationService,
    Depends(get_registration_service),
]
PasswordResetServiceDep = Annotated[
    PasswordResetService,
    Depends(get_password_reset_service),
]
