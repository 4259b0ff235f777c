"""Configuration management for cmdlang."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.captures import DEFAULT_CAPACITY
from .logging_utils import configure_logging


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CMDLANG_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parser Configuration
    capture_capacity: int = Field(
        default=DEFAULT_CAPACITY, ge=DEFAULT_CAPACITY, description="Identifiers one command may capture"
    )
    max_input_length: int = Field(default=4096, gt=0, description="Longest command string accepted")
    grammar_path: Optional[Path] = Field(None, description="YAML grammar file; the built-in grammar when unset")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: str = Field(default="default", description="Log profile (default, rich)")


def get_settings(**overrides: object) -> Settings:
    """Get application settings and configure logging from them."""
    settings = Settings(**overrides)  # type: ignore[arg-type]
    configure_logging(level=settings.log_level, profile=settings.log_profile)  # type: ignore[arg-type]
    return settings
