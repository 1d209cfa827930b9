"""
Application settings and configuration.

This module provides a centralized configuration management system using Pydantic.
It loads settings from environment variables, .env files, or falls back to defaults.
"""

import os
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

# Base directories
ROOT_DIR = Path(__file__).parent.parent.parent
LOG_DIR = ROOT_DIR / "logs"
DATA_DIR = ROOT_DIR / "data"


class BackendSettings(BaseModel):
    """Backend HTTP API configuration settings."""

    base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the booking platform backend"
    )

    timeout_seconds: float = Field(
        default=10.0,
        description="Total request timeout in seconds"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL and warn when it is missing."""
        if not v:
            logging.warning("Backend URL is not set. Please set COURTSIDE_BACKEND_URL environment variable.")
        return v.rstrip("/")


class StorageSettings(BaseModel):
    """On-device key-value storage settings."""

    data_dir: Path = Field(
        default=DATA_DIR,
        description="Directory holding one JSON document per storage key"
    )

    enabled: bool = Field(
        default=True,
        description="Whether persistent stores write to disk"
    )


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )

    file_enabled: bool = Field(
        default=False,
        description="Whether to write logs to a file"
    )

    console_enabled: bool = Field(
        default=True,
        description="Whether to write logs to console"
    )

    log_dir: Path = Field(
        default=LOG_DIR,
        description="Directory for rotating log files"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class Settings(BaseModel):
    """Main application settings."""

    # Application info
    app_name: str = Field(
        default="Courtside",
        description="Application name"
    )

    app_version: str = Field(
        default="0.1.0",
        description="Application version"
    )

    # Sub-configurations
    backend: BackendSettings = Field(default_factory=lambda: BackendSettings(
        base_url=os.environ.get("COURTSIDE_BACKEND_URL", "http://localhost:3000"),
        timeout_seconds=float(os.environ.get("COURTSIDE_BACKEND_TIMEOUT", "10.0"))
    ))

    storage: StorageSettings = Field(default_factory=lambda: StorageSettings(
        data_dir=Path(os.environ.get("COURTSIDE_DATA_DIR", str(DATA_DIR))),
        enabled=_parse_bool(os.environ.get("COURTSIDE_STORAGE_ENABLED", "True"))
    ))

    logging: LoggingSettings = Field(default_factory=lambda: LoggingSettings(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format=os.environ.get("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        file_enabled=_parse_bool(os.environ.get("LOG_FILE_ENABLED", "False")),
        console_enabled=_parse_bool(os.environ.get("LOG_CONSOLE_ENABLED", "True")),
        log_dir=Path(os.environ.get("LOG_DIR", str(LOG_DIR)))
    ))

    # Runtime configs
    seed_dummy_data: bool = Field(
        default=True,
        description="Populate stores with demo data at start-up"
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    def __init__(self, **data: Any):
        """Initialize settings, applying environment overrides for runtime flags."""
        super().__init__(**data)

        self.debug_mode = _parse_bool(os.environ.get("DEBUG_MODE", str(self.debug_mode)))
        self.seed_dummy_data = _parse_bool(os.environ.get("COURTSIDE_SEED_DATA", str(self.seed_dummy_data)))


def _parse_bool(value: str) -> bool:
    """Parse string to boolean."""
    return value.lower() in ("true", "1", "t", "yes", "y")
