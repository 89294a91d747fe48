"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AccountCoreConfig(BaseSettings):
    """Account core configuration"""

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Defaults for the standard checking account
    default_account_number: int = 99887766
    default_overdraft_limit: Decimal = Decimal("500")
    default_currency: str = "EUR"

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        if value.lower() not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value.lower()

    @field_validator("default_account_number")
    @classmethod
    def _check_account_number(cls, value: int) -> int:
        if value < 0:
            raise ValueError("default_account_number must not be negative")
        return value

    @field_validator("default_overdraft_limit")
    @classmethod
    def _check_overdraft_limit(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("default_overdraft_limit must not be negative")
        return value

    model_config = SettingsConfigDict(
        env_prefix="ACCOUNT_CORE_",
        env_file=".env",
        case_sensitive=False,
    )


# Global configuration instance
config = AccountCoreConfig()


def get_config() -> AccountCoreConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> AccountCoreConfig:
    """Reload configuration from environment"""
    global config
    config = AccountCoreConfig()
    return config
