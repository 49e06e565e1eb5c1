"""Wrappers around the external build and version-control tools."""

from restructure.tools.dotnet import DotnetToolchain
from restructure.tools.git import GitClient
from restructure.tools.runner import CommandResult, run_command

__all__ = ["CommandResult", "run_command", "DotnetToolchain", "GitClient"]
