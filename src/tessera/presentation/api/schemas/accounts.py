"""Account schemas for request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, EmailStr, Field, field_validator

from tessera.presentation.api.schemas.common import (
    CamelModel,
    normalize_name,
    normalize_phone_number,
)
from tessera_identity import Account, AccountRole


class AccountResponse(CamelModel):
    """Public view of an account."""

    id: UUID
    email: str
    name: str
    phone_number: str
    role: AccountRole
    email_confirmed: bool
    profile_picture_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            email=account.email,
            name=account.name,
            phone_number=account.phone_number,
            role=account.role,
            email_confirmed=account.email_confirmed,
            profile_picture_url=account.profile_picture_url,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class CreateAccountRequest(CamelModel):
    """Request schema for an administrator creating an account."""

    email: EmailStr
    password: str = Field(..., max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    phone_number: str
    role: AccountRole = AccountRole.USER
    email_confirmed: bool = True

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
                "role": "USER",
            },
        },
    )


class UpdateProfileRequest(CamelModel):
    """Partial update of the caller's own profile."""

    name: str | None = Field(None, min_length=1, max_length=255)
    phone_number: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return normalize_name(value)

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, value: str | None) -> str | None:
        return normalize_phone_number(value)


class UpdateAccountRequest(CamelModel):
    """Partial update of any account by a superadmin."""

    email: EmailStr | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    phone_number: str | None = None
    role: AccountRole | None = None
    email_confirmed: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return normalize_name(value)

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, value: str | None) -> str | None:
        return normalize_phone_number(value)


class DeleteAccountResponse(CamelModel):
    message: str = "Account deleted"
    id: UUID
