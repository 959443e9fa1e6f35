"""Authentication schemas for request/response models."""

from pydantic import ConfigDict, EmailStr, Field, field_validator

from tessera.presentation.api.schemas.accounts import AccountResponse
from tessera.presentation.api.schemas.common import (
    CamelModel,
    normalize_name,
    normalize_phone_number,
)
from tessera_identity import AuthenticatedSession


class LoginRequest(CamelModel):
    """Request schema for login."""

    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane@example.com",
                "password": "secret123",
            },
        },
    )


class RegisterRequest(CamelModel):
    """Request schema for self-registration."""

    email: EmailStr = Field(..., description="Email address, used to log in")
    password: str = Field(..., max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field(..., description="International phone number")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return normalize_name(value)

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, value: str | None) -> str | None:
        return normalize_phone_number(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane@example.com",
                "password": "secret123",
                "name": "Jane Doe",
                "phoneNumber": "+15551234567",
            },
        },
    )


class EmailRequest(CamelModel):
    """Request carrying only an email (resend confirmation, forgot password)."""

    email: EmailStr


class VerifyResetCodeRequest(CamelModel):
    email: EmailStr
    code: str = Field(..., description="Six digit reset code")

    @field_validator("code")
    @classmethod
    def validate_code(cls, value: str) -> str:
        value = value.strip()
        if len(value) != 6 or not value.isdigit():  # NOQA: PLR2004
            raise ValueError("Code must be exactly 6 digits")
        return value


class VerifyResetCodeResponse(CamelModel):
    valid: bool


class ResetPasswordRequest(VerifyResetCodeRequest):
    """Request schema for redeeming a reset code."""

    new_password: str = Field(..., max_length=128)


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(..., max_length=128)


class SessionResponse(CamelModel):
    """A session token together with the account it was issued for."""

    token: str
    expires_in: int = Field(..., description="Token lifetime in seconds")
    account: AccountResponse

    @classmethod
    def from_session(cls, session: AuthenticatedSession) -> "SessionResponse":
        return cls(
            token=session.token,
            expires_in=session.expires_in,
            account=AccountResponse.from_account(session.account),
        )
