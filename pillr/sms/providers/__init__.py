"""SMS provider implementations."""

from pillr.sms.providers.base import SMSProvider
from pillr.sms.providers.null import NullProvider
from pillr.sms.providers.surge import SurgeProvider
from pillr.sms.providers.twilio import TwilioProvider

__all__ = [
    "NullProvider",
    "SMSProvider",
    "SurgeProvider",
    "TwilioProvider",
]
