import asyncio
import logging
import re
from dataclasses import dataclass

from tessera_identity.application.context import IdentityContext
from tessera_identity.application.ports import ProfilePictureStorage
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
)
from tessera_identity.exceptions import InvalidProfilePictureError

logger = logging.getLogger(__name__)

MAX_PROFILE_PICTURE_BYTES = 5 * 1024 * 1024
ALLOWED_EXTENSIONS = frozenset({"png", "jpeg", "jpg", "webp", "gif"})
ALLOWED_CONTENT_TYPES = frozenset(
    {"image/png", "image/jpeg", "image/jpg", "image/webp", "image/gif"},
)
_EXTENSION_PATTERN = re.compile(r"\.([A-Za-z0-9]+)$")


@dataclass(frozen=True)
class ProfilePictureUpdate:
    """Outcome of a picture upload.

    Both references point at stored files. Once the transaction commits the
    caller deletes ``previous_reference``; if it rolls back it deletes
    ``reference`` instead.
    """

    account: Account
    reference: str
    previous_reference: str | None


class UpdateProfilePictureCommand:
    """Command to replace the caller's profile picture."""

    def __init__(
        self,
        account_repository: AccountRepository,
        picture_storage: ProfilePictureStorage,
    ):
        self._account_repo = account_repository
        self._picture_storage = picture_storage

    async def execute(
        self,
        identity: IdentityContext,
        content: bytes,
        filename: str | None,
        content_type: str | None,
    ) -> ProfilePictureUpdate:
        extension = self.validate(content, filename, content_type)

        account = await self._account_repo.find_by_id(identity.account_id)
        if not account:
            raise AccountNotFoundError(str(identity.account_id))

        previous = account.profile_picture_url
        reference = await asyncio.to_thread(
            self._picture_storage.save,
            content,
            extension,
        )
        account.set_profile_picture(reference)
        try:
            await self._account_repo.save(account)
        except Exception:
            await asyncio.to_thread(self._picture_storage.delete, reference)
            raise

        logger.info("Profile picture updated for account: %s", account.id)
        return ProfilePictureUpdate(
            account=account,
            reference=reference,
            previous_reference=previous,
        )

    @staticmethod
    def validate(
        content: bytes,
        filename: str | None,
        content_type: str | None,
    ) -> str:
        """Check size and type of an upload and return its file extension.

        Raises
        ------
        InvalidProfilePictureError
            If the file is empty, larger than 5 MiB, or not an allowed image
        """
        if not content:
            raise InvalidProfilePictureError("Profile picture is empty")

        if len(content) > MAX_PROFILE_PICTURE_BYTES:
            raise InvalidProfilePictureError("Profile picture cannot exceed 5 MB")

        match = _EXTENSION_PATTERN.search(filename or "")
        extension = match.group(1).lower() if match else ""
        if extension not in ALLOWED_EXTENSIONS:
            raise InvalidProfilePictureError(
                "Profile picture must be a png, jpeg, jpg, webp or gif file",
            )

        if (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
            raise InvalidProfilePictureError(
                f"Unsupported content type: {content_type}",
            )

        return extension
