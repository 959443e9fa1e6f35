import logging
from datetime import timedelta

from tessera_identity.application.ports import EmailSender
from tessera_identity.domain.account import Account, AccountRepository, InvalidEmailError
from tessera_identity.domain.shared.time import utc_now
from tessera_identity.exceptions import InvalidOrExpiredCodeError
from tessera_identity.repositories import (
    AccountCredentialRepository,
    PasswordResetCodeData,
    PasswordResetCodeRepository,
)
from tessera_identity.services import PasswordHashingService
from tessera_identity.services.one_time_secrets import (
    RESET_CODE_DIGITS,
    generate_reset_code,
    hash_secret,
    secret_matches,
)

logger = logging.getLogger(__name__)


class PasswordResetService:
    """Service for issuing, verifying and redeeming password reset codes."""

    DEFAULT_CODE_EXPIRY_MINUTES = 15
    MAX_RESETS_PER_DAY = 3
    MAX_FAILED_ATTEMPTS = 5

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        code_repository: PasswordResetCodeRepository,
        credential_repository: AccountCredentialRepository,
        password_service: PasswordHashingService,
        email_sender: EmailSender,
        code_expiry_minutes: int = DEFAULT_CODE_EXPIRY_MINUTES,
        max_resets_per_day: int = MAX_RESETS_PER_DAY,
        max_failed_attempts: int = MAX_FAILED_ATTEMPTS,
    ):
        self._account_repo = account_repository
        self._code_repo = code_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._email_sender = email_sender
        self._code_expiry_minutes = code_expiry_minutes
        self._max_resets_per_day = max_resets_per_day
        self._max_failed_attempts = max_failed_attempts

    async def request_reset(self, email: str) -> None:
        account = await self._find_account(email)
        if not account:
            # Silent to prevent email enumeration
            logger.debug("Password reset requested for unknown email")
            return

        since = utc_now() - timedelta(days=1)
        count = await self._code_repo.count_recent_for_account(account.id, since)
        if count >= self._max_resets_per_day:
            logger.warning("Rate limit exceeded for password reset: %s", account.id)
            # Still silent for security
            return

        code = generate_reset_code()
        expires_at = utc_now() + timedelta(minutes=self._code_expiry_minutes)

        await self._code_repo.replace_for_account(account.id, hash_secret(code), expires_at)
        logger.info("Password reset code issued for account: %s", account.id)

        try:
            self._email_sender.send_password_reset_code(
                to_email=account.email,
                code=code,
                expires_in_minutes=self._code_expiry_minutes,
            )
        except Exception as e:
            logger.error("Failed to send password reset email: %s", e)
            # Don't raise - the code exists and can be re-requested

    async def verify_code(self, email: str, code: str) -> bool:
        """Tell whether ``code`` is the active reset code for ``email``.

        A correct code stays redeemable until it expires or is used. A wrong
        guess counts against the active code, which is burned after
        ``max_failed_attempts`` misses.
        """
        return await self._find_matching_code(email, code) is not None

    async def reset_password(self, email: str, code: str, new_password: str) -> None:
        """Redeem a reset code and store the new password.

        Raises
        ------
        InvalidOrExpiredCodeError
            If the code does not match, has expired, was already used, was
            burned by too many wrong guesses, or was consumed by a concurrent
            request first
        WeakPasswordError
            If the new password violates the policy (the code stays valid)
        """
        reset_code = await self._find_matching_code(email, code)
        if reset_code is None:
            raise InvalidOrExpiredCodeError

        new_hash = self._password_service.hash(new_password)

        if not await self._code_repo.consume(reset_code.id):
            raise InvalidOrExpiredCodeError

        await self._credential_repo.save(
            account_id=reset_code.account_id,
            password_hash=new_hash,
        )
        logger.info("Password reset completed for account: %s", reset_code.account_id)

    async def _find_account(self, email: str) -> Account | None:
        try:
            return await self._account_repo.find_by_email(email)
        except InvalidEmailError:
            # Unparseable addresses are treated like unknown ones
            return None

    async def _find_matching_code(
        self,
        email: str,
        code: str,
    ) -> PasswordResetCodeData | None:
        account = await self._find_account(email)
        if account is None:
            return None

        reset_code = await self._code_repo.find_active_for_account(account.id)
        if reset_code is None or not reset_code.is_active(utc_now()):
            return None

        well_formed = len(code) == RESET_CODE_DIGITS and code.isdigit()
        if not well_formed or not secret_matches(code, reset_code.code_hash):
            burned = await self._code_repo.record_failed_attempt(
                reset_code.id,
                self._max_failed_attempts,
            )
            if burned:
                logger.warning(
                    "Password reset code burned after %d failed attempts: %s",
                    self._max_failed_attempts,
                    account.id,
                )
            return None
        return reset_code
