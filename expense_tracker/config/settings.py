"""
Configuration Management for the Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RemoteServiceSettings(BaseSettings):
    """Remote expense collection (REST) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSES_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    base_url: str = Field(
        ...,
        description="Base URL of the remote database, e.g. https://<project>.firebaseio.com"
    )
    collection: str = Field(
        default="expenses",
        min_length=1,
        description="Name of the expense collection under the base URL"
    )

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL; trailing slashes are dropped."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got: {v}")
        return v.rstrip("/")

    @field_validator('collection')
    @classmethod
    def validate_collection(cls, v: str) -> str:
        return v.strip("/")


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG, including one line per remote request"
    )

    # Sync behaviour
    rollback_failed_updates: bool = Field(
        default=False,
        description=(
            "Revert the optimistic store change when a remote update fails. "
            "Off by default: the edit stays visible until the next list fetch."
        )
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def remote(self) -> RemoteServiceSettings:
        return RemoteServiceSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.remote
        results["remote"] = True
    except Exception as e:
        results["remote"] = False
        results["remote_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
