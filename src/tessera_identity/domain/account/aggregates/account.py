"""Account aggregate."""

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from tessera_identity.domain.account.value_objects import (
    AccountRole,
    Email,
    PhoneNumber,
)
from tessera_identity.domain.shared.time import utc_now


class Account:
    """
    Account aggregate root.

    Holds the profile and authorization state of one identity. The password
    hash lives in a separate credential record keyed by the account id.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        name: str,
        phone_number: Union[str, PhoneNumber],
        role: Union[str, AccountRole] = AccountRole.USER,
        email_confirmed: bool = False,
        profile_picture_url: str | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._email = email if isinstance(email, Email) else Email(email)
        self._name = name.strip()
        self._phone_number = (
            phone_number
            if isinstance(phone_number, PhoneNumber)
            else PhoneNumber(phone_number)
        )
        self._role = role if isinstance(role, AccountRole) else AccountRole(role)
        self._email_confirmed = email_confirmed
        self._profile_picture_url = profile_picture_url
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def name(self) -> str:
        return self._name

    @property
    def phone_number(self) -> str:
        return self._phone_number.value

    @property
    def role(self) -> AccountRole:
        return self._role

    @property
    def email_confirmed(self) -> bool:
        return self._email_confirmed

    @property
    def profile_picture_url(self) -> str | None:
        return self._profile_picture_url

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def confirm_email(self) -> None:
        if self._email_confirmed:
            return
        self._email_confirmed = True
        self._touch()

    def set_email_confirmed(self, confirmed: bool) -> None:
        self._email_confirmed = confirmed
        self._touch()

    def update_profile(
        self,
        name: str | None = None,
        phone_number: Union[str, PhoneNumber, None] = None,
    ) -> None:
        """Apply a partial profile update; ``None`` leaves a field unchanged."""
        if name is not None:
            self._name = name.strip()
        if phone_number is not None:
            self._phone_number = (
                phone_number
                if isinstance(phone_number, PhoneNumber)
                else PhoneNumber(phone_number)
            )
        self._touch()

    def change_email(self, email: Union[str, Email]) -> None:
        self._email = email if isinstance(email, Email) else Email(email)
        self._touch()

    def change_role(self, role: AccountRole) -> None:
        self._role = role
        self._touch()

    def set_profile_picture(self, url: str | None) -> None:
        self._profile_picture_url = url
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        name: str,
        phone_number: Union[str, PhoneNumber],
        role: AccountRole = AccountRole.USER,
        email_confirmed: bool = False,
    ) -> "Account":
        return cls(
            email=email,
            name=name,
            phone_number=phone_number,
            role=role,
            email_confirmed=email_confirmed,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        email: str,
        name: str,
        phone_number: str,
        role: Union[str, AccountRole],
        email_confirmed: bool,
        profile_picture_url: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Account":
        return cls(
            id=id,
            email=email,
            name=name,
            phone_number=phone_number,
            role=role,
            email_confirmed=email_confirmed,
            profile_picture_url=profile_picture_url,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Account(id={self._id}, email={self._email.value}, role={self._role.value})"
