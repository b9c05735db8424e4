"""SMS provider backed by the Twilio messaging API."""

import logging

import requests
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from pillr.sms.config import SMSSettings
from pillr.sms.exceptions import SMSConfigurationError
from pillr.sms.models import SMSSendResult

logger = logging.getLogger(__name__)


class TwilioProvider:
    """Send SMS through the Twilio Messages resource from a fixed sender number."""

    def __init__(self, settings: SMSSettings, client: Client | None = None) -> None:
        """Initialise the Twilio provider.

        :param settings: SMS settings holding the Twilio credentials.
        :param client: Optional pre-built Twilio client.
        :raises SMSConfigurationError: If the account SID, auth token or sender number is missing.
        """
        missing = [
            name
            for name, value in (
                ("TWILIO_ACCOUNT_SID", settings.twilio_account_sid),
                ("TWILIO_AUTH_TOKEN", settings.twilio_auth_token),
                ("TWILIO_PHONE_NUMBER", settings.twilio_phone_number),
            )
            if not value
        ]
        if missing:
            raise SMSConfigurationError(
                f"Twilio SMS provider requires {', '.join(missing)} to be set"
            )

        self._from_number = settings.twilio_phone_number
        self._client = client or Client(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            http_client=TwilioHttpClient(timeout=settings.request_timeout),
        )
        logger.debug(f"TwilioProvider initialised: account_sid={settings.twilio_account_sid}")

    def send_sms(self, to: str, message: str, user_id: str | None = None) -> SMSSendResult:
        """Send one SMS through Twilio.

        :param to: Destination phone number in E.164 format.
        :param message: Message text.
        :param user_id: Optional user ID, used for logging only.
        :returns: The send result.
        """
        logger.info(f"Sending SMS via Twilio: user_id={user_id}")

        try:
            created = self._client.messages.create(
                body=message,
                from_=self._from_number,
                to=to,
            )
        except TwilioRestException as e:
            logger.warning(f"Twilio API error: status={e.status}, code={e.code}, detail={e.msg}")
            return SMSSendResult(success=False, error=f"Twilio API error: {e.msg}")
        except (TwilioException, requests.exceptions.RequestException) as e:
            logger.exception("Twilio request failed")
            return SMSSendResult(success=False, error=f"Twilio API request failed: {e}")

        logger.info(f"SMS sent via Twilio: message_id={created.sid}")
        return SMSSendResult(success=True, message_id=created.sid)
