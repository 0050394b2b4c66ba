"""Configuration package."""

from iexpense.config.settings import (
    AppSettings,
    Settings,
    StoreSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "StoreSettings",
    "get_settings",
]
