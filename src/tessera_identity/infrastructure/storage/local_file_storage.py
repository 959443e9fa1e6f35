"""Local filesystem storage for profile pictures."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from uuid import uuid4

from tessera_identity.application.ports import ProfilePictureStorage

logger = logging.getLogger(__name__)


class LocalFileStorage(ProfilePictureStorage):
    """Write pictures under ``base_directory`` and expose them below ``base_url``.

    Stored names are random (``<uuid>.<ext>``), so client-supplied filenames
    never reach the filesystem.
    """

    def __init__(self, base_directory: str | Path, base_url: str = "/media"):
        self.base_directory = Path(base_directory)
        self.base_url = base_url.rstrip("/")
        os.makedirs(self.base_directory, exist_ok=True)

    def save(self, content: bytes, extension: str) -> str:
        filename = f"{uuid4().hex}.{extension.lower().lstrip('.')}"
        destination = self.base_directory / filename
        with open(destination, "wb") as output:
            output.write(content)

        logger.debug("Stored profile picture %s (%d bytes)", filename, len(content))
        return f"{self.base_url}/{filename}"

    def delete(self, reference: str) -> bool:
        path = self.path_for(reference)
        if path is None or not path.exists():
            return False

        path.unlink()
        logger.debug("Deleted profile picture %s", path.name)
        return True

    def path_for(self, reference: str) -> Path | None:
        """Resolve a reference returned by ``save`` to its file path."""
        prefix = f"{self.base_url}/"
        if not reference.startswith(prefix):
            return None
        # Only bare file names are ours; anything with a path part is ignored
        filename = reference[len(prefix) :]
        if not filename or Path(filename).name != filename:
            return None
        return self.base_directory / filename
