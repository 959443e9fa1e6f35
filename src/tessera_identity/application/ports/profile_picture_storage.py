"""Storage abstraction for profile pictures."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ProfilePictureStorage(ABC):
    """Interface for storage backends holding profile pictures."""

    @abstractmethod
    def save(self, content: bytes, extension: str) -> str:
        """Persist an image and return the reference URL clients can fetch."""

    @abstractmethod
    def delete(self, reference: str) -> bool:
        """Remove a previously stored image.

        Returns
        -------
        True if something was deleted, False if the reference is unknown.
        """
