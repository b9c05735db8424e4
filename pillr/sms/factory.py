"""Factory for building the configured SMS provider."""

import logging

from pillr.sms.config import SMSSettings, get_sms_settings
from pillr.sms.models import SMSProviderKind
from pillr.sms.providers.base import SMSProvider
from pillr.sms.providers.null import NullProvider
from pillr.sms.providers.surge import SurgeProvider
from pillr.sms.providers.twilio import TwilioProvider

logger = logging.getLogger(__name__)


def get_sms_provider(settings: SMSSettings | None = None) -> SMSProvider:
    """Build the SMS provider selected by ``SMS_PROVIDER``.

    :param settings: SMS settings. Defaults to the cached environment settings.
    :returns: The concrete provider.
    :raises SMSConfigurationError: If the selected provider is missing credentials.
    """
    if settings is None:
        settings = get_sms_settings()

    logger.info(f"Using SMS provider: {settings.provider.value}")

    if settings.provider == SMSProviderKind.SURGE:
        return SurgeProvider(settings)
    if settings.provider == SMSProviderKind.TWILIO:
        return TwilioProvider(settings)
    return NullProvider()
