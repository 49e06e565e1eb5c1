"""Migration plan models.

The plan is built once by the plan builder and shared read-only by every
stage, so all models here are frozen dataclasses holding tuples.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ProjectSpec:
    """Target project to scaffold."""
    name: str
    kind: str
    path: Path

    @property
    def project_file(self) -> Path:
        """Path of the project's build file."""
        return self.path / f"{self.name}.csproj"


@dataclass(frozen=True)
class FileMoveOperation:
    """Single file or directory relocation."""
    source: Path
    destination: Path
    is_directory: bool = False
    strip_demo_artifact: bool = False

    def describe(self, root: Optional[Path] = None) -> str:
        """Human readable source -> destination pair, relative to root if given."""
        suffix = "/" if self.is_directory else ""
        source, destination = self.source, self.destination
        if root is not None:
            source = relative_path(source, root)
            destination = relative_path(destination, root)
        return f"{source}{suffix} -> {destination}{suffix}"


@dataclass(frozen=True)
class ReferenceEdge:
    """Project reference from one planned project to another."""
    source: str
    target: str

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True)
class PackageSpec:
    """Package to add to a project after wiring."""
    project: str
    package_id: str


@dataclass(frozen=True)
class MigrationPlan:
    """Complete description of the target layout."""
    legacy_name: str
    legacy_dir: Path
    manifest: Path
    projects: Tuple[ProjectSpec, ...] = field(default_factory=tuple)
    moves: Tuple[FileMoveOperation, ...] = field(default_factory=tuple)
    edges: Tuple[ReferenceEdge, ...] = field(default_factory=tuple)
    packages: Tuple[PackageSpec, ...] = field(default_factory=tuple)
    api_project: Optional[str] = None

    @property
    def legacy_project_file(self) -> Path:
        """Path of the legacy project's build file."""
        return self.legacy_dir / f"{self.legacy_name}.csproj"

    def project(self, name: str) -> ProjectSpec:
        """Look up a planned project by name."""
        for spec in self.projects:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def projects_by_name(self) -> Dict[str, ProjectSpec]:
        return {spec.name: spec for spec in self.projects}


def relative_path(path: Path, root: Path) -> Path:
    """path relative to root, or path unchanged when it lies outside root."""
    try:
        return path.relative_to(root)
    except ValueError:
        return path
