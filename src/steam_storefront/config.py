"""
Environment-backed settings for the store client and the CLI.

The client never reads these on its own; pass a Settings instance
to SteamBuilder.from_settings().
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from steam_storefront.contracts import Language


class StoreAPIConfig(BaseSettings):
    """Steam Store API specific configuration."""

    model_config = SettingsConfigDict(env_prefix="STEAM_")

    store_url: str = Field(
        default="https://store.steampowered.com/",
        description="Base URL of the Steam storefront",
    )
    timeout_seconds: float = Field(
        default=30.0,
        ge=1,
        le=120,
        description="HTTP request timeout in seconds",
    )
    country_code: str | None = Field(
        default=None,
        description="ISO 3166-1 alpha-2 country code used for prices",
    )
    language: Language | None = Field(
        default=None,
        description="Store language token for localized strings (e.g. 'english')",
    )
    user_agent: str = Field(
        default="SteamStorefrontClient/0.1",
        description="User-Agent header sent with every request",
    )

    @field_validator("country_code")
    @classmethod
    def normalize_country_code(cls, v: str | None) -> str | None:
        """Upper-case the country code; full validation happens at build time."""
        if v is None or not v.strip():
            return None
        return v.strip().upper()


class RetryConfig(BaseSettings):
    """
    Backoff for transport failures (connect errors, timeouts).

    Error statuses and store-level failures are never retried.
    A single attempt (the default) disables retrying.
    """

    model_config = SettingsConfigDict(env_prefix="RETRY_")

    max_attempts: int = Field(default=1, ge=1, le=10, description="Attempts per request")
    base_delay_seconds: float = Field(
        default=0.5,
        ge=0.1,
        le=30.0,
        description="Delay before the first retry; doubled by exponential_base after that",
    )
    max_delay_seconds: float = Field(
        default=8.0,
        ge=0.1,
        le=300.0,
        description="Upper bound of a single backoff delay",
    )
    exponential_base: float = Field(default=2.0, ge=1.5, le=4.0)

    @model_validator(mode="after")
    def check_delays(self) -> "RetryConfig":
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must not be below base_delay_seconds")
        return self


class LoggingConfig(BaseSettings):
    """Log level and rendering."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    format: Literal["json", "console"] = Field(
        default="json",
        description="JSON lines, or key=value console output",
    )
    include_timestamp: bool = Field(default=True, description="Prefix events with a UTC timestamp")
    httpx_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Level of httpx's own per-request log lines",
    )


class Settings(BaseSettings):
    """All configuration sections, read from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    steam: StoreAPIConfig = Field(default_factory=StoreAPIConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_settings() -> Settings:
    """Settings loaded once per process."""
    return Settings()
