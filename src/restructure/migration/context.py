"""Explicit run context handed to every stage."""
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from rich.console import Console

from restructure.migration.prompts import ConfirmationGate
from restructure.models.config import LayoutConfig, RestructureConfig
from restructure.tools import DotnetToolchain, GitClient


@dataclass
class MigrationContext:
    """Configuration and collaborators for one migration run.

    Stages never read the process cwd or environment; everything they need
    is on this object.
    """
    config: RestructureConfig
    repo_root: Path
    toolchain: Any
    gate: ConfirmationGate
    vcs: Optional[Any] = None
    console: Console = field(default_factory=Console)
    clock: Callable[[], datetime] = datetime.now

    @property
    def layout(self) -> LayoutConfig:
        return self.config.layout


def resolve_manifest(repo_root: Path, layout: LayoutConfig) -> Path:
    """Find the solution file at the repository root.

    Returns the configured manifest if set, otherwise the single `*.sln` at
    the root. When none (or several) exist the conventional
    `<legacy>.sln` path is returned and the prober reports it.
    """
    if layout.manifest:
        return repo_root / layout.manifest

    candidates = sorted(repo_root.glob("*.sln"))
    if len(candidates) == 1:
        return candidates[0]
    return repo_root / f"{layout.legacy_project}.sln"


def build_context(
    config: RestructureConfig,
    repo_root: Path,
    console: Optional[Console] = None,
    gate: Optional[ConfirmationGate] = None,
) -> MigrationContext:
    """Wire up the real dotnet and git adapters for a repository."""
    repo_root = repo_root.resolve()
    console = console or Console()
    manifest = resolve_manifest(repo_root, config.layout)
    timeout = config.tools.command_timeout

    return MigrationContext(
        config=config,
        repo_root=repo_root,
        toolchain=DotnetToolchain(repo_root, manifest, config.tools.build_binary, timeout),
        vcs=GitClient(repo_root, config.tools.vcs_binary, timeout),
        gate=gate or ConfirmationGate(
            console,
            assume_yes=config.prompts.assume_yes,
            default=config.prompts.default_answer,
        ),
        console=console,
    )
