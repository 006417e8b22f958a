"""
Outbound mail: send(to, subject, html).
Resend when RESEND_API_KEY is set; otherwise a log-only service.
"""
import logging

from voidslab.config import Settings
from voidslab.mail.base import MailDeliveryError, MailService
from voidslab.mail.log_impl import LogMailService

logger = logging.getLogger(__name__)


def build_mail_service(settings: Settings) -> MailService:
    """Return the Resend service, or the log-only one if no API key is configured."""
    if not settings.mail_configured:
        logger.debug("RESEND_API_KEY not set; using log-only mail service.")
        return LogMailService()
    from voidslab.mail.resend_impl import ResendMailService
    return ResendMailService(
        api_key=settings.resend_api_key.strip(),
        sender=settings.mail_from,
        api_url=settings.resend_api_url,
        timeout=settings.mail_timeout_seconds,
    )


__all__ = ["MailDeliveryError", "MailService", "LogMailService", "build_mail_service"]
