"""
Turn unexpected failures inside a route into ServerError (500).
"""
import logging

from voidslab.config import Settings
from voidslab.exceptions import ServerError

logger = logging.getLogger(__name__)


def server_error(action: str, exc: Exception, settings: Settings) -> ServerError:
    """Log with traceback; include exception text only when DEBUG is on."""
    logger.exception("%s failed: %s", action, exc)
    if settings.debug:
        return ServerError(f"Server error: {type(exc).__name__}: {exc}")
    return ServerError()
