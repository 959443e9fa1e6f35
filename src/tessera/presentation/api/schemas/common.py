"""Common schemas shared across API endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tessera_identity import InvalidPhoneNumberError, PhoneNumber


def normalize_phone_number(value: str | None) -> str | None:
    """Validate a phone number field, returning its normalized form."""
    if value is None:
        return None
    try:
        return PhoneNumber(value).value
    except InvalidPhoneNumberError as e:
        raise ValueError(e.message) from e


def normalize_name(value: str | None) -> str | None:
    """Strip surrounding whitespace from a display name and reject blank ones."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError("Name cannot be blank")
    return stripped


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire.

    Field names stay snake_case in Python; both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement with a human-readable message."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "Unauthorized", "code": "UNAUTHORIZED"},
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
