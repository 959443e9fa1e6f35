from tessera_identity.infrastructure.email.email_service import SmtpEmailService

__all__ = ["SmtpEmailService"]
