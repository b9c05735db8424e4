"""Tests for the SMS provider factory and settings."""

import os
import unittest
from unittest.mock import MagicMock, patch

from pydantic import ValidationError

from pillr.sms.config import SMSSettings
from pillr.sms.exceptions import SMSConfigurationError
from pillr.sms.factory import get_sms_provider
from pillr.sms.models import SMSProviderKind
from pillr.sms.providers.null import NullProvider
from pillr.sms.providers.surge import SurgeProvider
from pillr.sms.providers.twilio import TwilioProvider


class TestSMSSettings(unittest.TestCase):
    """Tests for SMSSettings."""

    @patch.dict(os.environ, {"SMS_PROVIDER": "SURGE"})
    def test_provider_is_case_insensitive(self) -> None:
        """Test SMS_PROVIDER is parsed regardless of case."""
        self.assertEqual(SMSSettings().provider, SMSProviderKind.SURGE)

    @patch.dict(os.environ, {"SMS_PROVIDER": "twilio", "TWILIO_PHONE_NUMBER": "+15550001111"})
    def test_twilio_settings_from_environment(self) -> None:
        """Test the Twilio sender number is read from the environment."""
        settings = SMSSettings()

        self.assertEqual(settings.provider, SMSProviderKind.TWILIO)
        self.assertEqual(settings.twilio_phone_number, "+15550001111")

    @patch.dict(os.environ, {"SMS_PROVIDER": "carrier-pigeon"})
    def test_unknown_provider_fails_validation(self) -> None:
        """Test an unsupported provider is rejected at load time."""
        with self.assertRaises(ValidationError):
            SMSSettings()

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self) -> None:
        """Test the defaults when nothing is configured."""
        settings = SMSSettings()

        self.assertEqual(settings.provider, SMSProviderKind.NULL)
        self.assertEqual(settings.surge_api_url, "https://api.surge.app")
        self.assertEqual(settings.request_timeout, 30)


class TestGetSmsProvider(unittest.TestCase):
    """Tests for get_sms_provider."""

    def test_null_provider(self) -> None:
        """Test the null kind builds a NullProvider."""
        provider = get_sms_provider(SMSSettings(provider=SMSProviderKind.NULL))
        self.assertIsInstance(provider, NullProvider)

    def test_surge_provider(self) -> None:
        """Test the surge kind builds a SurgeProvider."""
        settings = SMSSettings(
            provider=SMSProviderKind.SURGE,
            surge_api_key="sk_test",
            surge_account_id="acct_01",
        )
        self.assertIsInstance(get_sms_provider(settings), SurgeProvider)

    def test_surge_without_credentials_raises(self) -> None:
        """Test a misconfigured surge provider fails fast."""
        settings = SMSSettings(
            provider=SMSProviderKind.SURGE,
            surge_api_key=None,
            surge_account_id=None,
        )
        with self.assertRaises(SMSConfigurationError):
            get_sms_provider(settings)

    @patch("pillr.sms.providers.twilio.Client")
    def test_twilio_provider(self, mock_client_cls: MagicMock) -> None:
        """Test the twilio kind builds a TwilioProvider."""
        settings = SMSSettings(
            provider=SMSProviderKind.TWILIO,
            twilio_account_sid="AC0123456789",
            twilio_auth_token="auth-token",
            twilio_phone_number="+15550001111",
        )
        self.assertIsInstance(get_sms_provider(settings), TwilioProvider)

    def test_twilio_without_credentials_raises(self) -> None:
        """Test a misconfigured twilio provider fails fast."""
        settings = SMSSettings(
            provider=SMSProviderKind.TWILIO,
            twilio_account_sid="AC0123456789",
            twilio_auth_token=None,
            twilio_phone_number=None,
        )
        with self.assertRaises(SMSConfigurationError):
            get_sms_provider(settings)


if __name__ == "__main__":
    unittest.main()
