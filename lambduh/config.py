"""Configuration management using Pydantic Settings."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter settings loaded from LAMBDUH_* environment variables."""

    model_config = SettingsConfigDict(
        # Only load .env file in development (not Lambda/production)
        env_file=".env" if os.getenv("AWS_EXECUTION_ENV") is None else None,
        env_file_encoding="utf-8",
        env_prefix="LAMBDUH_",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    service_name: str = "lambduh"
    configure_logging: bool = False
    log_events: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower-case or padded level names."""
        if isinstance(v, str):
            return v.strip().upper() or "INFO"
        return v


# Global settings instance
settings = Settings()
