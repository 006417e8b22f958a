"""
Mail service interface: send one HTML message.
Implementations raise on delivery failure; callers decide whether that matters.
"""
from typing import Protocol


class MailDeliveryError(Exception):
    """Provider rejected the message or could not be reached."""


class MailService(Protocol):
    """Abstract interface for outbound mail."""

    def send(self, to: str, subject: str, html: str) -> str | None:
        """Send one message; return the provider message id when there is one."""
        ...
