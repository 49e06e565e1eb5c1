"""Core infrastructure shared by every stage."""

from restructure.core.exceptions import (
    BackupError,
    ConfigError,
    PlanError,
    RestructureError,
    ToolchainError,
)
from restructure.core.logging import configure_logging, get_logger

__all__ = [
    "RestructureError",
    "ConfigError",
    "PlanError",
    "BackupError",
    "ToolchainError",
    "configure_logging",
    "get_logger",
]
