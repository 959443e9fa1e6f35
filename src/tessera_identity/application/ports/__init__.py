"""Ports to collaborators outside the identity core."""

from tessera_identity.application.ports.email_sender import EmailSender
from tessera_identity.application.ports.profile_picture_storage import (
    ProfilePictureStorage,
)

__all__ = ["EmailSender", "ProfilePictureStorage"]
