"""
Pytest configuration for tessera_identity tests.

Provides account fixtures and the database fixtures shared with the API tests.
"""

import pytest

from tessera_identity import Account, AccountRole, IdentityContext
from tests.shared.fixtures.database import sqlite_engine, sqlite_session
from tests.shared.fixtures.factories import make_account

__all__ = ["sqlite_engine", "sqlite_session"]


@pytest.fixture
def test_account() -> Account:
    """Create a confirmed standard account."""
    return make_account()


@pytest.fixture
def superadmin_account() -> Account:
    return make_account("root@example.com", role=AccountRole.SUPERADMIN)


@pytest.fixture
def superadmin_identity(superadmin_account) -> IdentityContext:
    return IdentityContext.from_account(superadmin_account)
