"""
memkv Configuration Settings

This module contains the configuration constants for memkv stores and
the logging setup used by embedding processes.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Store configuration settings."""

    # TTL settings
    DEFAULT_TTL: float = float(os.environ.get("MEMKV_DEFAULT_TTL", "0"))  # 0 means no expiration

    # Logging settings
    DEBUG: bool = os.environ.get("MEMKV_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("MEMKV_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()


def setup_logging(debug: Optional[bool] = None) -> None:
    """
    Configure root logging for an embedding process.

    Args:
        debug: Force DEBUG level on or off (default from settings.DEBUG;
            when off, settings.LOG_LEVEL applies)
    """
    if debug is None:
        debug = settings.DEBUG
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )
