"""Restructure exception classes."""


class RestructureError(Exception):
    """Base exception for all restructure errors."""
    pass


class ConfigError(RestructureError):
    """Configuration related errors."""
    pass


class PlanError(RestructureError):
    """Migration plan is inconsistent (unknown project or cyclic edges)."""
    pass


class BackupError(RestructureError):
    """Backup snapshot could not be produced."""
    pass


class ToolchainError(RestructureError):
    """External tool invocation related errors."""
    pass
