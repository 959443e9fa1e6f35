"""Application commands for account administration and self-service."""

from tessera_identity.application.commands.create_account_command import (
    CreateAccountCommand,
)
from tessera_identity.application.commands.delete_account_command import (
    DeleteAccountCommand,
)
from tessera_identity.application.commands.update_account_command import (
    UpdateAccountCommand,
)
from tessera_identity.application.commands.update_profile_command import (
    UpdateProfileCommand,
)
from tessera_identity.application.commands.update_profile_picture_command import (
    ALLOWED_CONTENT_TYPES,
    ALLOWED_EXTENSIONS,
    MAX_PROFILE_PICTURE_BYTES,
    ProfilePictureUpdate,
    UpdateProfilePictureCommand,
)

__all__ = [
    "ALLOWED_CONTENT_TYPES",
    "ALLOWED_EXTENSIONS",
    "MAX_PROFILE_PICTURE_BYTES",
    "CreateAccountCommand",
    "DeleteAccountCommand",
    "ProfilePictureUpdate",
    "UpdateAccountCommand",
    "UpdateProfileCommand",
    "UpdateProfilePictureCommand",
]
