"""Registration and email confirmation."""

import logging
from datetime import timedelta

from tessera_identity.application.ports import EmailSender
from tessera_identity.application.services.authentication_service import (
    AuthenticatedSession,
)
from tessera_identity.domain.account import (
    Account,
    AccountRepository,
    Email,
    EmailAlreadyRegisteredError,
    InvalidEmailError,
    PhoneNumber,
)
from tessera_identity.domain.shared.time import utc_now
from tessera_identity.exceptions import InvalidOrExpiredTokenError
from tessera_identity.repositories import (
    AccountCredentialRepository,
    ConfirmationTokenRepository,
)
from tessera_identity.services import JWTService, PasswordHashingService
from tessera_identity.services.one_time_secrets import (
    generate_confirmation_token,
    hash_secret,
)

logger = logging.getLogger(__name__)


class RegistrationService:
    """Creates pending accounts and activates them via confirmation tokens."""

    DEFAULT_TOKEN_EXPIRY_HOURS = 24

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        credential_repository: AccountCredentialRepository,
        token_repository: ConfirmationTokenRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        email_sender: EmailSender,
        frontend_base_url: str,
        token_expiry_hours: int = DEFAULT_TOKEN_EXPIRY_HOURS,
    ):
        self._account_repo = account_repository
        self._credential_repo = credential_repository
        self._token_repo = token_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._email_sender = email_sender
        self._frontend_base_url = frontend_base_url.rstrip("/")
        self._token_expiry = timedelta(hours=token_expiry_hours)

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        phone_number: str,
    ) -> Account:
        """Create an unconfirmed account and send its confirmation link.

        Registering again with the email of an account that is still
        unconfirmed refreshes that account (password, name, phone) and sends
        a new link, superseding the previous one.

        Raises
        ------
        EmailAlreadyRegisteredError
            If a confirmed account already uses this email
        WeakPasswordError
            If the password violates the length policy
        """
        normalized_email = Email(email)
        phone = PhoneNumber(phone_number)
        password_hash = self._password_service.hash(password)

        account = await self._account_repo.find_by_email(normalized_email)
        if account is not None and account.email_confirmed:
            raise EmailAlreadyRegisteredError(normalized_email.value)

        if account is None:
            account = Account.create(
                email=normalized_email,
                name=name,
                phone_number=phone,
            )
            logger.info("Registering new account: %s", account.id)
        else:
            account.update_profile(name=name, phone_number=phone)
            logger.info("Re-registration of unconfirmed account: %s", account.id)

        await self._account_repo.save(account)
        await self._credential_repo.save(
            account_id=account.id,
            password_hash=password_hash,
        )
        await self._issue_confirmation(account)
        return account

    async def confirm_email(self, token: str) -> AuthenticatedSession:
        """Consume a confirmation token, confirm its account and log it in.

        Raises
        ------
        InvalidOrExpiredTokenError
            If the token is unknown, expired, already used, or was consumed
            by a concurrent request first
        """
        token_data = await self._token_repo.find_active_by_hash(hash_secret(token))
        if token_data is None or not token_data.is_active(utc_now()):
            raise InvalidOrExpiredTokenError

        if not await self._token_repo.consume(token_data.id):
            raise InvalidOrExpiredTokenError

        account = await self._account_repo.find_by_id(token_data.account_id)
        if account is None:
            raise InvalidOrExpiredTokenError

        account.confirm_email()
        await self._account_repo.save(account)
        logger.info("Email confirmed for account: %s", account.id)

        return AuthenticatedSession.issue(account, self._jwt_service)

    async def resend_confirmation(self, email: str) -> None:
        """Send a new confirmation link if an unconfirmed account exists.

        Does nothing otherwise. Callers must answer identically in both cases.
        """
        try:
            account = await self._account_repo.find_by_email(email)
        except InvalidEmailError:
            account = None
        if account is None or account.email_confirmed:
            logger.debug("Confirmation resend skipped (no pending account)")
            return

        await self._issue_confirmation(account)

    async def _issue_confirmation(self, account: Account) -> None:
        raw_token = generate_confirmation_token()
        expires_at = utc_now() + self._token_expiry

        # Newest token supersedes any earlier one
        await self._token_repo.replace_for_account(account.id, hash_secret(raw_token), expires_at)

        confirmation_link = f"{self._frontend_base_url}/confirm-email?token={raw_token}"
        try:
            self._email_sender.send_confirmation_email(
                to_email=account.email,
                confirmation_link=confirmation_link,
            )
        except Exception as e:
            logger.error("Failed to send confirmation email: %s", e)
