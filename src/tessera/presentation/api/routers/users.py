"""Account administration and self-service profile endpoints."""

import asyncio
import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, File, UploadFile

from tessera.presentation.api.dependencies import (
    CurrentIdentity,
    DBSession,
    PasswordServiceDep,
    PictureStorageDep,
    PrivilegedIdentity,
    SuperadminIdentity,
)
from tessera.presentation.api.schemas import (
    AccountResponse,
    CreateAccountRequest,
    DeleteAccountResponse,
    UpdateAccountRequest,
    UpdateProfileRequest,
)
from tessera_identity.application.commands import (
    MAX_PROFILE_PICTURE_BYTES,
    CreateAccountCommand,
    DeleteAccountCommand,
    UpdateAccountCommand,
    UpdateProfileCommand,
    UpdateProfilePictureCommand,
)
from tessera_identity.application.queries import GetAccountQuery, ListAccountsQuery
from tessera_identity.infrastructure.persistence.sqlalchemy import (
    AccountCredentialRepositorySQLAlchemy,
    AccountRepositorySQLAlchemy,
    ConfirmationTokenRepositorySQLAlchemy,
    PasswordResetCodeRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/create",
    summary="Create an account",
    responses={
        200: {"description": "Account created"},
        403: {"description": "Caller may not create accounts with this role"},
        409: {"description": "Email already registered"},
    },
)
async def create_account(
    request: CreateAccountRequest,
    identity: PrivilegedIdentity,
    session: DBSession,
    password_service: PasswordServiceDep,
) -> AccountResponse:
    """
    Create an account directly, bypassing self-registration.

    Admins may create USER accounts; only a superadmin may create ADMIN or
    SUPERADMIN accounts. Accounts are confirmed unless `emailConfirmed` is false.
    """
    command = CreateAccountCommand(
        account_repository=AccountRepositorySQLAlchemy(session),
        credential_repository=AccountCredentialRepositorySQLAlchemy(session),
        password_service=password_service,
    )
    account = await command.execute(
        identity,
        email=request.email,
        password=request.password,
        name=request.name,
        phone_number=request.phone_number,
        role=request.role,
        email_confirmed=request.email_confirmed,
    )
    await session.commit()
    logger.info("Account %s created by %s", account.id, identity.account_id)
    return AccountResponse.from_account(account)


@router.put(
    "/me/picture",
    summary="Upload a profile picture",
    responses={
        200: {"description": "Picture stored"},
        400: {"description": "Empty, too large or unsupported file"},
    },
)
async def upload_profile_picture(
    identity: CurrentIdentity,
    session: DBSession,
    storage: PictureStorageDep,
    background_tasks: BackgroundTasks,
    profile_image: Annotated[UploadFile, File(alias="profileImage")],
) -> AccountResponse:
    """
    Store a new profile picture for the caller.

    The previous file is removed only after the new reference is committed.
    """
    # One byte past the limit is enough to reject oversized uploads
    content = await profile_image.read(MAX_PROFILE_PICTURE_BYTES + 1)
    command = UpdateProfilePictureCommand(
        account_repository=AccountRepositorySQLAlchemy(session),
        picture_storage=storage,
    )
    update = await command.execute(
        identity,
        content=content,
        filename=profile_image.filename,
        content_type=profile_image.content_type,
    )
    try:
        await session.commit()
    except Exception:
        await asyncio.to_thread(storage.delete, update.reference)
        raise

    if update.previous_reference:
        background_tasks.add_task(storage.delete, update.previous_reference)
    return AccountResponse.from_account(update.account)


@router.get("", summary="List all accounts")
async def list_accounts(
    _identity: PrivilegedIdentity,
    session: DBSession,
) -> list[AccountResponse]:
    accounts = await ListAccountsQuery(AccountRepositorySQLAlchemy(session)).execute()
    return [AccountResponse.from_account(account) for account in accounts]


@router.get(
    "/{account_id}",
    summary="Get an account",
    responses={404: {"description": "Account not found"}},
)
async def get_account(
    account_id: UUID,
    _identity: PrivilegedIdentity,
    session: DBSession,
) -> AccountResponse:
    query = GetAccountQuery(AccountRepositorySQLAlchemy(session))
    return AccountResponse.from_account(await query.execute(account_id))


@router.patch("/me", summary="Update own profile")
async def update_profile(
    request: UpdateProfileRequest,
    identity: CurrentIdentity,
    session: DBSession,
) -> AccountResponse:
    command = UpdateProfileCommand(AccountRepositorySQLAlchemy(session))
    account = await command.execute(
        identity,
        name=request.name,
        phone_number=request.phone_number,
    )
    await session.commit()
    return AccountResponse.from_account(account)


@router.patch(
    "/superadmin/{account_id}",
    summary="Update any account",
    responses={
        404: {"description": "Account not found"},
        409: {"description": "Email already registered"},
        422: {"description": "Superadmin tried to change their own role"},
    },
)
async def update_account(
    account_id: UUID,
    request: UpdateAccountRequest,
    identity: SuperadminIdentity,
    session: DBSession,
) -> AccountResponse:
    command = UpdateAccountCommand(AccountRepositorySQLAlchemy(session))
    account = await command.execute(
        identity,
        account_id,
        email=request.email,
        name=request.name,
        phone_number=request.phone_number,
        role=request.role,
        email_confirmed=request.email_confirmed,
    )
    await session.commit()
    return AccountResponse.from_account(account)


@router.delete(
    "/superadmin/{account_id}",
    summary="Delete an account",
    responses={
        404: {"description": "Account not found"},
        422: {"description": "Superadmin tried to delete themselves"},
    },
)
async def delete_account(
    account_id: UUID,
    identity: SuperadminIdentity,
    session: DBSession,
    storage: PictureStorageDep,
    background_tasks: BackgroundTasks,
) -> DeleteAccountResponse:
    command = DeleteAccountCommand(
        account_repository=AccountRepositorySQLAlchemy(session),
        credential_repository=AccountCredentialRepositorySQLAlchemy(session),
        token_repository=ConfirmationTokenRepositorySQLAlchemy(session),
        code_repository=PasswordResetCodeRepositorySQLAlchemy(session),
    )
    picture = await command.execute(identity, account_id)
    await session.commit()

    if picture:
        background_tasks.add_task(storage.delete, picture)
    return DeleteAccountResponse(id=account_id)
