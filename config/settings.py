"""Application settings loaded from environment variables."""

from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    rate_table_file: str = ""  # YAML under config/; empty = built-in Barbados table
    currency_symbol: str = "$"
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
