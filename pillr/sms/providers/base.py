"""Base protocol for SMS providers."""

from typing import Protocol

from pillr.sms.models import SMSSendResult


class SMSProvider(Protocol):
    """Protocol for SMS backends.

    Providers report per-message failures through the returned result
    instead of raising.
    """

    def send_sms(self, to: str, message: str, user_id: str | None = None) -> SMSSendResult:
        """Send one SMS.

        :param to: Destination phone number in E.164 format.
        :param message: Message text.
        :param user_id: Optional user ID attached as vendor metadata.
        :returns: The send result.
        """
        ...
