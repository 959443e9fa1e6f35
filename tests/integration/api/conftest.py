"""Pytest fixtures for API tests.

The app runs against an in-memory SQLite database and a mocked SMTP service,
so confirmation tokens and reset codes can be read from the mock's calls.
"""

from collections.abc import Callable
from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tessera.presentation.api.app import create_app
from tessera.presentation.api.config import get_api_settings
from tessera.presentation.api.dependencies import get_db_session, get_email_service
from tessera_config.settings import Settings
from tessera_identity import Account, AccountRole, PasswordHashingService
from tessera_identity.infrastructure.email import SmtpEmailService
from tessera_identity.infrastructure.persistence.sqlalchemy import (
    AccountCredentialRepositorySQLAlchemy,
    AccountRepositorySQLAlchemy,
    Base,
)

TEST_PASSWORD = "secret123"
SEEDED = {
    AccountRole.SUPERADMIN: "root@example.com",
    AccountRole.ADMIN: "admin@example.com",
    AccountRole.USER: "user@example.com",
}


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only-0123456789"),
        database_driver="sqlite",
        sqlite_path=str(tmp_path / "unused.db"),
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        password_hash_rounds=4,
        frontend_base_url="https://app.example.com",
        media_root=str(tmp_path / "media"),
        media_url="/media",
        smtp_enabled=False,
    )


@pytest.fixture
async def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def test_session_maker(test_db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def email_service() -> Mock:
    """SMTP service double recording every email the API sends."""
    return Mock(spec=SmtpEmailService)


@pytest.fixture
def test_client(api_settings, test_session_maker, email_service) -> TestClient:
    """Create a test client with an in-memory database."""
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_email_service] = lambda: email_service

    return TestClient(app)


@pytest.fixture
async def seeded_accounts(test_session_maker) -> dict[AccountRole, Account]:
    """One confirmed account per role, all with TEST_PASSWORD."""
    password_hash = PasswordHashingService(rounds=4).hash(TEST_PASSWORD)
    accounts = {}

    async with test_session_maker() as session:
        account_repo = AccountRepositorySQLAlchemy(session)
        credential_repo = AccountCredentialRepositorySQLAlchemy(session)
        for role, email in SEEDED.items():
            account = Account.create(
                email=email,
                name=role.value.title(),
                phone_number="+15551234567",
                role=role,
                email_confirmed=True,
            )
            await account_repo.save(account)
            await credential_repo.save(
                account_id=account.id,
                password_hash=password_hash,
            )
            accounts[role] = account
        await session.commit()

    return accounts


@pytest.fixture
def auth_headers(
    test_client,
    seeded_accounts,
) -> Callable[[AccountRole], dict[str, str]]:
    """Log in as the seeded account of a role and return bearer headers."""

    def _headers(role: AccountRole) -> dict[str, str]:
        response = test_client.post(
            "/auth/login",
            json={"email": SEEDED[role], "password": TEST_PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _headers


@pytest.fixture
def sent_confirmation_token(email_service) -> Callable[[], str]:
    """Return the token from the most recent confirmation email."""

    def _token() -> str:
        call = email_service.send_confirmation_email.call_args
        link = call.kwargs["confirmation_link"]
        return parse_qs(urlparse(link).query)["token"][0]

    return _token


@pytest.fixture
def sent_reset_code(email_service) -> Callable[[], str]:
    """Return the code from the most recent password reset email."""

    def _code() -> str:
        return email_service.send_password_reset_code.call_args.kwargs["code"]

    return _code


@pytest.fixture
def registration_data() -> dict[str, str]:
    return {
        "email": "a@example.com",
        "password": "secret1",
        "name": "A",
        "phoneNumber": "+15551234567",
    }
