from tessera_identity.domain.account.value_objects.account_role import AccountRole
from tessera_identity.domain.account.value_objects.email import Email
from tessera_identity.domain.account.value_objects.phone_number import PhoneNumber

__all__ = ["AccountRole", "Email", "PhoneNumber"]
