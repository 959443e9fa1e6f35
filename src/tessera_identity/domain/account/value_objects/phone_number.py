"""Phone number value object."""

import re
from dataclasses import dataclass

from tessera_identity.domain.account.exceptions import InvalidPhoneNumberError

# Optional "+", then 7-15 digits not starting with 0 (E.164 upper bound)
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{6,14}$")
_SEPARATORS = re.compile(r"[\s\-.()]")


@dataclass(frozen=True)
class PhoneNumber:
    """International phone number with formatting separators removed."""

    value: str

    def __post_init__(self) -> None:
        normalized = _SEPARATORS.sub("", self.value or "")

        if not PHONE_PATTERN.match(normalized):
            msg = f"Invalid phone number: {self.value}"
            raise InvalidPhoneNumberError(msg)

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
