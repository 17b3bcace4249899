"""Configuration management"""

import logging
from decimal import Decimal
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Share Ledger"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Money
    default_currency: str = "USD"
    balance_epsilon: Decimal = Decimal("0.0001")

    # CORS
    allowed_origins: List[str] = []

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard logging names"""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v}")
        return level

    @field_validator("default_currency")
    @classmethod
    def validate_default_currency(cls, v: str) -> str:
        """Validate default currency is a three letter code"""
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError("DEFAULT_CURRENCY must be a three letter currency code")
        return code

    @field_validator("balance_epsilon")
    @classmethod
    def validate_balance_epsilon(cls, v: Decimal) -> Decimal:
        """Validate epsilon is non-negative"""
        if v < 0:
            raise ValueError("BALANCE_EPSILON cannot be negative")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
