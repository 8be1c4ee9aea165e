"""
Configuration Management for Voice Expense

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All tunable policy lives here, not in the parsing code.
The auto-save threshold in particular belongs to the UI collaborator;
the parser only reports a confidence score and lets the caller compare.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from voice_expense.models.expense import CurrencyCode


class ParserSettings(BaseSettings):
    """Transcript parsing configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VOICE_EXPENSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_currency: CurrencyCode = Field(
        default=CurrencyCode.USD,
        description="Currency used when the transcript names none and the caller supplies none"
    )
    auto_save_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Confidence at or above which an expense may be saved without confirmation"
    )

    # Sanity bounds for extracted amounts
    min_amount: float = Field(
        default=0.01,
        ge=0.0,
        description="Smallest amount considered plausible"
    )
    max_amount: float = Field(
        default=999999.99,
        gt=0.0,
        description="Largest amount considered plausible"
    )

    @field_validator('default_currency', mode='before')
    @classmethod
    def normalize_currency_code(cls, v):
        """Accept lowercase codes from the environment (e.g. 'aed')."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


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
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local structured logs"
    )
    audit_enabled: bool = Field(
        default=True,
        description="Emit audit events for every parsed transcript"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


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

    @property
    def parser(self) -> ParserSettings:
        return ParserSettings()

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

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.parser
        results["parser"] = True
    except Exception as e:
        results["parser"] = False
        results["parser_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
