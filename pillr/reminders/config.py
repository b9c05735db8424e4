"""Configuration for SMS reminder sweeps using pydantic-settings."""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DISPLAY_TIMEZONE = "America/Denver"


class ReminderSettings(BaseSettings):
    """Configuration for reminder sweeps.

    Settings are loaded from environment variables with the REMINDER_ prefix,
    except the cron secret which keeps its deployment name ``CRON_SECRET``.

    :param lead_minutes: Minutes before a dose that the reminder goes out.
    :param window_minutes: Width of the reminder window, equal to the sweep cadence.
    :param display_timezone: Timezone used to render dose times when a profile has none.
    :param cron_secret: Shared secret required by the HTTP trigger, if set.
    """

    model_config = SettingsConfigDict(
        env_prefix="REMINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    lead_minutes: int = Field(
        default=15,
        ge=0,
        le=240,
        description="Minutes before the dose that the reminder is sent",
    )
    window_minutes: int = Field(
        default=5,
        ge=1,
        le=60,
        description="Width of the reminder window in minutes",
    )
    display_timezone: str = Field(
        default=DEFAULT_DISPLAY_TIMEZONE,
        description="IANA timezone used to display dose times",
    )
    cron_secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CRON_SECRET", "cron_secret"),
        description="Shared secret for the reminder trigger endpoint",
    )

    @field_validator("display_timezone")
    @classmethod
    def validate_display_timezone(cls, v: str) -> str:
        """Validate that the display timezone is a known IANA name.

        :param v: Timezone name from the environment.
        :returns: The validated name.
        :raises ValueError: If the timezone is unknown.
        """
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v


@lru_cache
def get_reminder_settings() -> ReminderSettings:
    """Get cached reminder settings.

    :returns: Configured ReminderSettings instance.
    """
    return ReminderSettings()
