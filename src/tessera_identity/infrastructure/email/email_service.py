import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from tessera_config.settings import Settings
from tessera_identity.infrastructure.email.templates import (
    CONFIRMATION_HTML,
    CONFIRMATION_SUBJECT,
    CONFIRMATION_TEXT,
    PASSWORD_RESET_HTML,
    PASSWORD_RESET_SUBJECT,
    PASSWORD_RESET_TEXT,
)

logger = logging.getLogger(__name__)


class SmtpEmailService:
    """Delivers account emails over SMTP (implicit TLS or STARTTLS)."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        if not self._settings.smtp_host:
            logger.error("SMTP host not configured")
            return

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        try:
            if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
                # Implicit TLS (port 465)
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    context=context,
                ) as server:
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)
            else:
                # STARTTLS (port 587) or plain
                with smtplib.SMTP(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                ) as server:
                    if self._settings.smtp_starttls:
                        context = ssl.create_default_context()
                        server.starttls(context=context)
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)

            logger.info("Email sent to %s", to_email)

        except Exception as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise

    def send_confirmation_email(self, to_email: str, confirmation_link: str) -> None:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, skipping confirmation email to %s", to_email)
            return

        expires_in_hours = self._settings.confirmation_token_expire_hours
        message = self._create_message(
            to_email=to_email,
            subject=CONFIRMATION_SUBJECT,
            text_body=CONFIRMATION_TEXT.format(
                confirmation_link=confirmation_link,
                expires_in_hours=expires_in_hours,
            ),
            html_body=CONFIRMATION_HTML.format(
                confirmation_link=confirmation_link,
                expires_in_hours=expires_in_hours,
            ),
        )

        self._send_email(to_email, message)

    def send_password_reset_code(
        self,
        to_email: str,
        code: str,
        expires_in_minutes: int,
    ) -> None:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, skipping password reset email to %s", to_email)
            return

        message = self._create_message(
            to_email=to_email,
            subject=PASSWORD_RESET_SUBJECT,
            text_body=PASSWORD_RESET_TEXT.format(
                code=code,
                expires_in_minutes=expires_in_minutes,
            ),
            html_body=PASSWORD_RESET_HTML.format(
                code=code,
                expires_in_minutes=expires_in_minutes,
            ),
        )

        self._send_email(to_email, message)
