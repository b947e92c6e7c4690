"""Configuration module for memkv."""

from .settings import Settings, settings, setup_logging

__all__ = ["Settings", "settings", "setup_logging"]
