"""Tests for the tessera CLI commands."""

import pytest
from typer.testing import CliRunner

from tessera.presentation.api import dependencies
from tessera.presentation.api.config import get_api_settings
from tessera.presentation.cli import app
from tessera_config import clear_settings_cache

runner = CliRunner()

SUPERADMIN_ARGS = [
    "accounts",
    "create-superadmin",
    "--email",
    "Root@Example.com",
    "--name",
    "Root",
    "--phone",
    "+15551234567",
]


def _clear_caches() -> None:
    clear_settings_cache()
    get_api_settings.cache_clear()
    dependencies.get_database_url.cache_clear()
    dependencies.get_engine.cache_clear()
    dependencies.get_session_maker.cache_clear()


@pytest.fixture
def cli_database(tmp_path, monkeypatch):
    """Point the CLI at a throwaway SQLite file."""
    db_path = tmp_path / "cli.db"
    monkeypatch.setenv("DATABASE_DRIVER", "sqlite")
    monkeypatch.setenv("SQLITE_PATH", str(db_path))
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "4")
    _clear_caches()
    yield db_path
    _clear_caches()


class TestSecretsCommand:
    def test_generate_prints_both_secrets(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert "JWT_SECRET_KEY=" in result.output
        assert "POSTGRES_PASSWORD=" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])

        assert "secrets" in result.output
        assert "accounts" in result.output


class TestCreateSuperadmin:
    def test_creates_account(self, cli_database):
        result = runner.invoke(app, [*SUPERADMIN_ARGS, "--password", "secret123"])

        assert result.exit_code == 0, result.output
        assert "Superadmin created" in result.output
        assert "Root@Example.com" in result.output
        assert cli_database.exists()

    def test_prompts_for_password(self, cli_database):
        result = runner.invoke(app, SUPERADMIN_ARGS, input="secret123\nsecret123\n")

        assert result.exit_code == 0, result.output
        assert "Superadmin created" in result.output

    def test_duplicate_email_fails(self, cli_database):
        runner.invoke(app, [*SUPERADMIN_ARGS, "--password", "secret123"])

        result = runner.invoke(app, [*SUPERADMIN_ARGS, "--password", "other-pw"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_weak_password_fails(self, cli_database):
        result = runner.invoke(app, [*SUPERADMIN_ARGS, "--password", "123"])

        assert result.exit_code == 1
        assert "Password must be at least" in result.output

    def test_invalid_phone_fails(self, cli_database):
        args = [*SUPERADMIN_ARGS[:-1], "not-a-phone", "--password", "secret123"]

        result = runner.invoke(app, args)

        assert result.exit_code == 1


class TestDatabaseCommands:
    def test_init_creates_schema(self, cli_database):
        result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 0, result.output
        assert "up to date" in result.output
        assert cli_database.exists()

    def test_cleanup_on_empty_database(self, cli_database):
        runner.invoke(app, ["db", "init"])

        result = runner.invoke(app, ["db", "cleanup"])

        assert result.exit_code == 0, result.output
        assert "Removed 0 confirmation tokens and 0 reset codes" in result.output
