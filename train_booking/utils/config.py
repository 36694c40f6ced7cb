"""
Environment configuration loader with validation for the train booking demo.
"""

import logging
import os
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

from ..models.enums import RecordPolicy

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BookingConfig(BaseModel):
    """Configuration model for the train booking demo with validation."""

    # Input data
    train_data_file: str = Field(
        default="Train Data.txt", description="Path to the departure records file"
    )
    record_policy: RecordPolicy = Field(
        default=RecordPolicy.SKIP, description="Handling of records that fail to parse"
    )

    # Diagnostics
    booking_debug: bool = Field(default=False, description="Enable debug mode")
    booking_log_level: str = Field(default="WARNING", description="Logging level")

    @field_validator("booking_log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {VALID_LOG_LEVELS}")
        return v.upper()

    @field_validator("train_data_file")
    @classmethod
    def validate_data_file(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("TRAIN_DATA_FILE cannot be empty")
        return v.strip()

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.booking_debug else self.booking_log_level


def load_config(env_file: Optional[str] = None) -> BookingConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.

    Returns:
        BookingConfig: Validated configuration object

    Raises:
        ValueError: If configuration is invalid
    """
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    config_data: Dict[str, Any] = {
        "train_data_file": os.getenv("TRAIN_DATA_FILE", "Train Data.txt"),
        "record_policy": os.getenv("RECORD_POLICY", "skip").lower(),
        "booking_debug": os.getenv("BOOKING_DEBUG", "false").lower()
        in ("true", "1", "yes", "on"),
        "booking_log_level": os.getenv("BOOKING_LOG_LEVEL", "WARNING"),
    }

    try:
        return BookingConfig(**config_data)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")


def configure_logging(config: BookingConfig, handler: Optional[logging.Handler] = None) -> None:
    """
    Apply the configured log level to the root logger.

    Args:
        config: Configuration providing the level
        handler: Optional handler replacing the default stderr stream handler
    """
    kwargs: Dict[str, Any] = {"level": config.effective_log_level, "force": True}

    if handler is not None:
        kwargs["handlers"] = [handler]
        kwargs["format"] = "%(message)s"
    else:
        kwargs["format"] = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    logging.basicConfig(**kwargs)


# Global configuration instance
_config: Optional[BookingConfig] = None


def get_config() -> BookingConfig:
    """
    Get the global configuration instance, loading it if necessary.

    Returns:
        BookingConfig: The global configuration object
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next ``get_config`` reloads it."""
    global _config
    _config = None
