"""Configuration package."""

from voice_expense.config.settings import (
    AppSettings,
    ParserSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ParserSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
