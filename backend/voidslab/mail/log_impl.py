"""
Log-only mail: used when RESEND_API_KEY is not set. Nothing leaves the process.
"""
import logging

logger = logging.getLogger(__name__)


class LogMailService:
    def __init__(self) -> None:
        self.outbox: list[dict] = []

    def send(self, to: str, subject: str, html: str) -> str | None:
        self.outbox.append({"to": to, "subject": subject, "html": html})
        logger.info("Email sent (simulated): to=%s subject=%r", to, subject)
        return None
