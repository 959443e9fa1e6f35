"""Email sender port. Interface for outgoing account emails."""

from typing import Protocol


class EmailSender(Protocol):
    """Port for delivering templated account emails.

    Implementations may deliver synchronously or schedule delivery; callers
    treat every send as fire-and-forget and only log failures.
    """

    def send_confirmation_email(self, to_email: str, confirmation_link: str) -> None:
        """Send the link that confirms control of ``to_email``."""
        ...

    def send_password_reset_code(
        self,
        to_email: str,
        code: str,
        expires_in_minutes: int,
    ) -> None:
        """Send a six digit password reset code."""
        ...
