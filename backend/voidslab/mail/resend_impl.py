"""
Resend HTTP API (POST /emails). Requires RESEND_API_KEY.
No retries: a failed send surfaces as MailDeliveryError.
"""
import logging

import httpx

from voidslab.mail.base import MailDeliveryError

logger = logging.getLogger(__name__)


class ResendMailService:
    def __init__(
        self,
        api_key: str,
        sender: str,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.sender = sender
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    def send(self, to: str, subject: str, html: str) -> str | None:
        payload = {"from": self.sender, "to": [to], "subject": subject, "html": html}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                res = client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise MailDeliveryError(f"Resend request failed: {e}") from e
        if res.status_code >= 400:
            raise MailDeliveryError(f"Resend returned {res.status_code}: {res.text[:200]}")
        message_id = None
        try:
            message_id = res.json().get("id")
        except ValueError:
            logger.debug("Resend response was not JSON: %s", res.text[:200])
        logger.info("Resend: sent %r to %s (id=%s)", subject, to, message_id)
        return message_id
