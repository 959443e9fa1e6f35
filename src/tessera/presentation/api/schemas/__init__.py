"""API request/response schemas."""

from tessera.presentation.api.schemas.accounts import (
    AccountResponse,
    CreateAccountRequest,
    DeleteAccountResponse,
    UpdateAccountRequest,
    UpdateProfileRequest,
)
from tessera.presentation.api.schemas.auth import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SessionResponse,
    VerifyResetCodeRequest,
    VerifyResetCodeResponse,
)
from tessera.presentation.api.schemas.common import (
    CamelModel,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)

__all__ = [
    "AccountResponse",
    "CamelModel",
    "ChangePasswordRequest",
    "CreateAccountRequest",
    "DeleteAccountResponse",
    "EmailRequest",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
    "SessionResponse",
    "UpdateAccountRequest",
    "UpdateProfileRequest",
    "VerifyResetCodeRequest",
    "VerifyResetCodeResponse",
]
