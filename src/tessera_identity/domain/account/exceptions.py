"""Account domain exceptions."""

from tessera_identity.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL)


class InvalidPhoneNumberError(ValidationError):
    """Raised when a phone number is not a plausible international number."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_PHONE_NUMBER)


class EmailAlreadyRegisteredError(ConflictError):
    """Email already belongs to a confirmed account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email address is already registered",
            ErrorCode.EMAIL_ALREADY_REGISTERED,
            details={"email": email},
        )


class AccountNotFoundError(EntityNotFoundError):
    """Account not found."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(
            "Account not found",
            ErrorCode.ACCOUNT_NOT_FOUND,
            details={"account_id": account_id},
        )


class CannotDeleteSelfError(BusinessRuleViolation):
    """Cannot delete your own account."""

    def __init__(self) -> None:
        super().__init__("Cannot delete your own account")


class CannotDemoteSelfError(BusinessRuleViolation):
    """Cannot change your own role."""

    def __init__(self) -> None:
        super().__init__("Cannot change your own role")
