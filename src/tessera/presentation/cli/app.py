"""Tessera CLI application using Typer.

Operational commands for deployments: secret generation, bootstrapping the
first superadmin, schema creation, purging spent one-time secrets and running
the API server.
"""

import asyncio
import secrets
from typing import Optional

import typer
from rich.console import Console

app = typer.Typer(
    name="tessera",
    help="Tessera - authentication and account management CLI",
    no_args_is_help=True,
)
console = Console()

secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
accounts_app = typer.Typer(
    name="accounts",
    help="Account bootstrapping",
    no_args_is_help=True,
)
db_app = typer.Typer(
    name="db",
    help="Database maintenance",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(accounts_app)
app.add_typer(db_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Tessera configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Tessera Secret Generation[/bold green]")
    console.print("=" * 60)

    # 64 bytes is plenty for HS256
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={secrets.token_urlsafe(64)}")
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={secrets.token_urlsafe(32)}")

    console.print("=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]\n"
    )


async def _create_superadmin(
    email: str,
    name: str,
    phone: str,
    password: str,
) -> str:
    # Imported lazily so `secrets generate` works without a configured secret
    from tessera.presentation.api.dependencies import (
        create_tables,
        get_engine,
        get_session_maker,
    )
    from tessera_config.settings import get_settings
    from tessera_identity import (
        Account,
        AccountRole,
        Email,
        EmailAlreadyRegisteredError,
        PasswordHashingService,
        PhoneNumber,
    )
    from tessera_identity.infrastructure.persistence.sqlalchemy import (
        AccountCredentialRepositorySQLAlchemy,
        AccountRepositorySQLAlchemy,
    )

    settings = get_settings()
    password_service = PasswordHashingService(rounds=settings.password_hash_rounds)
    normalized_email = Email(email)

    await create_tables()
    try:
        async with get_session_maker()() as session:
            account_repo = AccountRepositorySQLAlchemy(session)
            if await account_repo.exists_by_email(normalized_email):
                raise EmailAlreadyRegisteredError(normalized_email.value)

            account = Account.create(
                email=normalized_email,
                name=name,
                phone_number=PhoneNumber(phone),
                role=AccountRole.SUPERADMIN,
                email_confirmed=True,
            )
            await account_repo.save(account)
            await AccountCredentialRepositorySQLAlchemy(session).save(
                account_id=account.id,
                password_hash=password_service.hash(password),
            )
            await session.commit()
            return str(account.id)
    finally:
        await get_engine().dispose()


@accounts_app.command("create-superadmin")
def create_superadmin(
    email: str = typer.Option(..., help="Login email of the new superadmin"),
    name: str = typer.Option(..., help="Display name"),
    phone: str = typer.Option(..., help="Phone number, e.g. +15551234567"),
    password: Optional[str] = typer.Option(
        None,
        help="Password (prompted for when omitted)",
    ),
) -> None:
    """Create a confirmed SUPERADMIN account."""
    from tessera_identity import DomainException

    if password is None:
        password = typer.prompt("Password", hide_input=True, confirmation_prompt=True)

    try:
        account_id = asyncio.run(_create_superadmin(email, name, phone, password))
    except DomainException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Superadmin created:[/green] {email} ({account_id})")


@db_app.command("init")
def init_db() -> None:
    """Create all database tables (safe to run repeatedly)."""
    from tessera.presentation.api.dependencies import create_tables, get_engine

    async def _run() -> None:
        try:
            await create_tables()
        finally:
            await get_engine().dispose()

    asyncio.run(_run())
    console.print("[green]Database schema is up to date[/green]")


@db_app.command("cleanup")
def cleanup_db() -> None:
    """Delete expired or used confirmation tokens and reset codes."""
    from tessera.presentation.api.dependencies import get_engine, get_session_maker
    from tessera_identity.infrastructure.persistence.sqlalchemy import (
        ConfirmationTokenRepositorySQLAlchemy,
        PasswordResetCodeRepositorySQLAlchemy,
    )

    async def _run() -> tuple[int, int]:
        try:
            async with get_session_maker()() as session:
                tokens = await ConfirmationTokenRepositorySQLAlchemy(
                    session,
                ).cleanup_expired()
                codes = await PasswordResetCodeRepositorySQLAlchemy(
                    session,
                ).cleanup_expired()
                await session.commit()
                return tokens, codes
        finally:
            await get_engine().dispose()

    tokens, codes = asyncio.run(_run())
    console.print(
        f"Removed [cyan]{tokens}[/cyan] confirmation tokens "
        f"and [cyan]{codes}[/cyan] reset codes"
    )


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    from tessera_config.settings import get_settings

    settings = get_settings()
    uvicorn.run(
        "tessera.presentation.api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
