"""SMS transport: provider protocol, backends and configuration."""

from pillr.sms.config import SMSSettings, get_sms_settings
from pillr.sms.exceptions import SMSConfigurationError, SMSError
from pillr.sms.factory import get_sms_provider
from pillr.sms.models import SMSProviderKind, SMSSendResult
from pillr.sms.providers import NullProvider, SMSProvider, SurgeProvider, TwilioProvider

__all__ = [
    "NullProvider",
    "SMSConfigurationError",
    "SMSError",
    "SMSProvider",
    "SMSProviderKind",
    "SMSSendResult",
    "SMSSettings",
    "SurgeProvider",
    "TwilioProvider",
    "get_sms_provider",
    "get_sms_settings",
]
