"""SMS provider backed by the Surge messaging API."""

import logging
import secrets
import time
from typing import Any

import requests

from pillr.sms.config import SMSSettings
from pillr.sms.exceptions import SMSConfigurationError
from pillr.sms.models import SMSSendResult

logger = logging.getLogger(__name__)


class SurgeProvider:
    """Send SMS through ``POST {base}/accounts/{account_id}/messages``.

    Every call is a single attempt; failures come back as unsuccessful
    results and are never retried here.
    """

    def __init__(self, settings: SMSSettings) -> None:
        """Initialise the Surge provider.

        :param settings: SMS settings holding the Surge credentials.
        :raises SMSConfigurationError: If the API key or account ID is missing.
        """
        if not settings.surge_api_key or not settings.surge_account_id:
            raise SMSConfigurationError(
                "Surge SMS provider requires SURGE_API_KEY and SURGE_ACCOUNT_ID to be set"
            )

        self._api_key = settings.surge_api_key
        self._account_id = settings.surge_account_id
        self._timeout = settings.request_timeout
        self._messages_url = (
            f"{settings.surge_api_url.rstrip('/')}/accounts/{self._account_id}/messages"
        )
        logger.debug(f"SurgeProvider initialised: account_id={self._account_id}")

    def send_sms(self, to: str, message: str, user_id: str | None = None) -> SMSSendResult:
        """Send one SMS through Surge.

        :param to: Destination phone number in E.164 format.
        :param message: Message text.
        :param user_id: Optional user ID sent as ``metadata.userId``.
        :returns: The send result.
        """
        payload: dict[str, Any] = {
            "conversation": {"contact": {"phone_number": to}},
            "body": message,
        }
        if user_id:
            payload["metadata"] = {"userId": user_id}

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        logger.info(f"Sending SMS via Surge: user_id={user_id}")

        try:
            response = requests.post(
                self._messages_url,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout:
            logger.exception(f"Surge request timed out after {self._timeout}s")
            return SMSSendResult(
                success=False,
                error=f"Surge API request timed out after {self._timeout}s",
            )
        except requests.exceptions.RequestException as e:
            logger.exception("Surge request failed")
            return SMSSendResult(success=False, error=f"Surge API request failed: {e}")

        if not response.ok:
            error_detail = self._extract_error_detail(response)
            logger.warning(f"Surge API error: status={response.status_code}, detail={error_detail}")
            return SMSSendResult(success=False, error=f"Surge API error: {error_detail}")

        try:
            data = response.json()
        except ValueError as e:
            logger.exception("Surge returned an unreadable response")
            return SMSSendResult(success=False, error=f"Surge API returned invalid JSON: {e}")

        message_id = data.get("id") if isinstance(data, dict) else None
        if not message_id:
            message_id = f"surge-{int(time.time() * 1000)}-{secrets.token_hex(4)}"
            logger.warning(f"Surge response had no message ID, using {message_id}")

        logger.info(f"SMS sent via Surge: message_id={message_id}")
        return SMSSendResult(success=True, message_id=str(message_id))

    @staticmethod
    def _extract_error_detail(response: requests.Response) -> str:
        """Extract error detail from a failed response.

        :param response: HTTP response.
        :returns: The vendor's message or error field, else the raw body, else the status.
        """
        try:
            data = response.json()
            if isinstance(data, dict):
                return str(data.get("message") or data.get("error") or data)
            return str(data)
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
