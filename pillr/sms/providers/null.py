"""SMS provider that logs messages instead of sending them."""

import logging
import secrets
import time

from pillr.sms.models import SMSSendResult

logger = logging.getLogger(__name__)


class NullProvider:
    """Provider for development and tests; nothing leaves the process."""

    def send_sms(self, to: str, message: str, user_id: str | None = None) -> SMSSendResult:
        """Log the message and report success.

        :param to: Destination phone number.
        :param message: Message text.
        :param user_id: Optional user ID.
        :returns: A successful result with a synthesized ``mock-`` message ID.
        """
        message_id = f"mock-{int(time.time() * 1000)}-{secrets.token_hex(4)}"
        logger.info(f"[null SMS] Logged, not sent: user_id={user_id}, message_id={message_id}")
        # INFO is forwarded to Sentry; recipient and body stay at DEBUG
        logger.debug(f"[null SMS] to={to}, message={message!r}")
        return SMSSendResult(success=True, message_id=message_id)
