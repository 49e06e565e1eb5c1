"""Configuration management for restructure."""

from restructure.config.config import ConfigManager

__all__ = ["ConfigManager"]
