"""Configuration package."""

from expense_tracker.config.settings import (
    AppSettings,
    RemoteServiceSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "RemoteServiceSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
