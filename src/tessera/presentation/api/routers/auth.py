"""Authentication router: login, registration, confirmation and password flows.

Domain errors propagate to the central exception handlers; handlers here only
commit the unit of work once the service call succeeded. The reset code
endpoints are the exception: failed guesses are committed before the error is
raised so the attempt limit holds.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tessera.presentation.api.dependencies import (
    PUBLIC,
    AuthService,
    CurrentIdentity,
    DBSession,
    PasswordResetServiceDep,
    RegistrationServiceDep,
    require_access,
)
from tessera.presentation.api.schemas import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    SessionResponse,
    VerifyResetCodeRequest,
    VerifyResetCodeResponse,
)
from tessera_identity.exceptions import InvalidOrExpiredCodeError

logger = logging.getLogger(__name__)

router = APIRouter()

# Public routes skip token validation entirely
_public = [Depends(require_access(PUBLIC))]

REGISTER_MESSAGE = (
    "Registration successful. Please check your email to confirm your account."
)
RESEND_CONFIRMATION_MESSAGE = (
    "If an account with that email exists, a confirmation email has been sent."
)
FORGOT_PASSWORD_MESSAGE = (
    "If an account with that email exists, a password reset code has been sent."
)


@router.post(
    "/login",
    dependencies=_public,
    summary="Authenticate with email and password",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Email address not confirmed"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
) -> SessionResponse:
    auth_session = await auth_service.login(request.email, request.password)
    await session.commit()
    return SessionResponse.from_session(auth_session)


@router.post(
    "/register",
    dependencies=_public,
    summary="Register a new account",
    responses={
        200: {"description": "Account created, confirmation email queued"},
        400: {"description": "Weak password or invalid phone number"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    registration_service: RegistrationServiceDep,
    session: DBSession,
) -> MessageResponse:
    """
    Create an unconfirmed account and email a confirmation link.

    Registering again with an email that was never confirmed replaces the
    pending account details and sends a fresh link.
    """
    await registration_service.register(
        email=request.email,
        password=request.password,
        name=request.name,
        phone_number=request.phone_number,
    )
    await session.commit()
    return MessageResponse(message=REGISTER_MESSAGE)


@router.get(
    "/checkToken",
    summary="Validate the current token and return a fresh one",
    responses={
        200: {"description": "Token valid"},
        401: {"description": "Missing, invalid or expired token"},
        404: {"description": "Account no longer exists"},
    },
)
async def check_token(
    identity: CurrentIdentity,
    auth_service: AuthService,
) -> SessionResponse:
    auth_session = await auth_service.check_token(identity)
    return SessionResponse.from_session(auth_session)


@router.get(
    "/confirm-email",
    dependencies=_public,
    summary="Confirm an email address",
    responses={
        200: {"description": "Email confirmed, session issued"},
        400: {"description": "Invalid or expired token"},
    },
)
async def confirm_email(
    token: Annotated[str, Query(min_length=1)],
    registration_service: RegistrationServiceDep,
    session: DBSession,
) -> SessionResponse:
    auth_session = await registration_service.confirm_email(token)
    await session.commit()
    return SessionResponse.from_session(auth_session)


@router.post(
    "/resend-confirmation",
    dependencies=_public,
    summary="Resend the confirmation email",
)
async def resend_confirmation(
    request: EmailRequest,
    registration_service: RegistrationServiceDep,
    session: DBSession,
) -> MessageResponse:
    """
    Send a new confirmation link to a pending account.

    The response is identical whether or not such an account exists.
    """
    await registration_service.resend_confirmation(request.email)
    await session.commit()
    return MessageResponse(message=RESEND_CONFIRMATION_MESSAGE)


@router.post(
    "/forgot-password",
    dependencies=_public,
    summary="Request a password reset code",
)
async def forgot_password(
    request: EmailRequest,
    reset_service: PasswordResetServiceDep,
    session: DBSession,
) -> MessageResponse:
    """
    Email a six digit reset code.

    The response is identical whether or not the account exists.
    """
    await reset_service.request_reset(request.email)
    await session.commit()
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post(
    "/verify-reset-code",
    dependencies=_public,
    summary="Check a reset code without using it",
)
async def verify_reset_code(
    request: VerifyResetCodeRequest,
    reset_service: PasswordResetServiceDep,
    session: DBSession,
) -> VerifyResetCodeResponse:
    valid = await reset_service.verify_code(request.email, request.code)
    # Persists the failed attempt count of a wrong guess
    await session.commit()
    return VerifyResetCodeResponse(valid=valid)


@router.post(
    "/reset-password",
    dependencies=_public,
    summary="Reset a password with a reset code",
    responses={
        200: {"description": "Password reset"},
        400: {"description": "Invalid or expired code, or weak password"},
    },
)
async def reset_password(
    request: ResetPasswordRequest,
    reset_service: PasswordResetServiceDep,
    session: DBSession,
) -> MessageResponse:
    try:
        await reset_service.reset_password(
            email=request.email,
            code=request.code,
            new_password=request.new_password,
        )
    except InvalidOrExpiredCodeError:
        await session.commit()
        raise
    await session.commit()
    return MessageResponse(message="Password has been reset successfully")


@router.post(
    "/change-password",
    summary="Change the current account's password",
    responses={
        200: {"description": "Password changed"},
        400: {"description": "New password too weak"},
        401: {"description": "Not authenticated or wrong current password"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    identity: CurrentIdentity,
    auth_service: AuthService,
    session: DBSession,
) -> MessageResponse:
    await auth_service.change_password(
        identity,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    await session.commit()
    return MessageResponse(message="Password changed successfully")
