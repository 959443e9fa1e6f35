"""Email delivery scheduled after the HTTP response has been sent."""

import logging
from collections.abc import Callable
from typing import Any

from fastapi import BackgroundTasks

from tessera_identity.application.ports import EmailSender

logger = logging.getLogger(__name__)


def _deliver(send: Callable[..., None], **kwargs: Any) -> None:
    try:
        send(**kwargs)
    except Exception as e:
        logger.error("Background email delivery failed: %s", e)


class BackgroundEmailSender:
    """EmailSender that queues every message on FastAPI background tasks.

    Delivery runs once the response is out (and therefore after the
    transaction was committed). Failures are logged and never reach the client.
    """

    def __init__(self, background_tasks: BackgroundTasks, delegate: EmailSender):
        self._background_tasks = background_tasks
        self._delegate = delegate

    def send_confirmation_email(self, to_email: str, confirmation_link: str) -> None:
        self._background_tasks.add_task(
            _deliver,
            self._delegate.send_confirmation_email,
            to_email=to_email,
            confirmation_link=confirmation_link,
        )

    def send_password_reset_code(
        self,
        to_email: str,
        code: str,
        expires_in_minutes: int,
    ) -> None:
        self._background_tasks.add_task(
            _deliver,
            self._delegate.send_password_reset_code,
            to_email=to_email,
            code=code,
            expires_in_minutes=expires_in_minutes,
        )
