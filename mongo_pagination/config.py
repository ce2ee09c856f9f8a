"""Configuration management for mongo-pagination."""

import logging
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Pagination settings with environment variable support."""

    # Page size settings
    default_page_size: int = 50
    max_page_size: int = 200

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def validate_page_size(cls, v):
        """Page sizes must allow at least one record."""
        if v < 1:
            raise ValueError("Page size must be at least 1")
        return v

    model_config = {
        "env_prefix": "PAGINATION_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get pagination settings."""
    return settings


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    config = config or get_settings()
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format=config.log_format
    )
    logging.getLogger().setLevel(getattr(logging, config.log_level))
