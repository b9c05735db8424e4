"""Configuration for the OpenFDA client using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OPENFDA_BASE_URL = "https://api.fda.gov/drug/label.json"


class OpenFDASettings(BaseSettings):
    """Configuration for drug-label lookups, loaded with the OPENFDA_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="OPENFDA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default=DEFAULT_OPENFDA_BASE_URL,
        description="Drug label endpoint URL",
    )
    timeout: int = Field(
        default=10,
        ge=1,
        le=60,
        description="HTTP timeout in seconds",
    )


@lru_cache
def get_openfda_settings() -> OpenFDASettings:
    """Get cached OpenFDA settings.

    :returns: Configured OpenFDASettings instance.
    """
    return OpenFDASettings()
