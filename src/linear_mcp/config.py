"""Configuration management for Linear MCP."""

import os
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env" if os.getenv("ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "linear-mcp"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Linear credentials: a personal API key, or an OAuth access token
    linear_api_key: Optional[str] = Field(default=None)
    linear_access_token: Optional[str] = Field(default=None)
    linear_api_url: str = Field(default="https://api.linear.app/graphql")

    # Transport
    http_timeout: float = Field(default=30.0)
    http_max_retries: int = Field(default=3)
    http_retry_base_delay: float = Field(default=1.0)
    http_retry_max_delay: float = Field(default=30.0)

    # Formatting
    display_timezone: str = Field(
        default="UTC",
        description="IANA zone used when rendering comment timestamps",
    )

    @field_validator("linear_api_key", "linear_access_token", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("http_max_retries")
    @classmethod
    def validate_max_retries(cls, v):
        if v < 0:
            raise ValueError("http_max_retries must be >= 0")
        return v

    @field_validator("http_retry_base_delay", "http_retry_max_delay")
    @classmethod
    def validate_retry_delay(cls, v):
        if v < 0:
            raise ValueError("retry delays must be >= 0")
        return v

    @field_validator("display_timezone")
    @classmethod
    def validate_display_timezone(cls, v):
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {v}") from exc
        return v

    def get_log_level(self) -> str:
        """Effective log level; DEBUG wins over the configured level."""
        if self.debug:
            return "DEBUG"
        return self.log_level.upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
