"""Configuration for SMS sending using pydantic-settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pillr.sms.models import SMSProviderKind

DEFAULT_SURGE_API_URL = "https://api.surge.app"


class SMSSettings(BaseSettings):
    """Configuration for the SMS provider.

    :param provider: Which backend sends messages.
    :param surge_api_key: Surge API key.
    :param surge_account_id: Surge account ID.
    :param surge_api_url: Base URL of the Surge API.
    :param twilio_account_sid: Twilio account SID.
    :param twilio_auth_token: Twilio auth token.
    :param twilio_phone_number: Twilio sender number in E.164 format.
    :param request_timeout: HTTP timeout in seconds for vendor calls.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    provider: SMSProviderKind = Field(
        default=SMSProviderKind.NULL,
        validation_alias=AliasChoices("SMS_PROVIDER", "provider"),
        description="SMS backend (null, surge or twilio)",
    )
    surge_api_key: str | None = Field(default=None, description="Surge API key")
    surge_account_id: str | None = Field(default=None, description="Surge account ID")
    surge_api_url: str = Field(
        default=DEFAULT_SURGE_API_URL,
        description="Base URL of the Surge API",
    )
    twilio_account_sid: str | None = Field(default=None, description="Twilio account SID")
    twilio_auth_token: str | None = Field(default=None, description="Twilio auth token")
    twilio_phone_number: str | None = Field(
        default=None,
        description="Twilio sender number in E.164 format",
    )
    request_timeout: int = Field(
        default=30,
        ge=1,
        le=120,
        validation_alias=AliasChoices("SMS_REQUEST_TIMEOUT", "request_timeout"),
        description="HTTP timeout in seconds for vendor calls",
    )

    @field_validator("provider", mode="before")
    @classmethod
    def normalise_provider(cls, v: object) -> object:
        """Accept provider names in any case.

        :param v: Raw provider value.
        :returns: The lower-cased value for strings, else the value unchanged.
        """
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache
def get_sms_settings() -> SMSSettings:
    """Get cached SMS settings.

    :returns: Configured SMSSettings instance.
    """
    return SMSSettings()
