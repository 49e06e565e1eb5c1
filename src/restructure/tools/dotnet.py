"""Build toolchain adapter for the dotnet CLI."""
from pathlib import Path
from typing import Optional

from restructure.tools.runner import CommandResult, run_command


class DotnetToolchain:
    """Creates, wires, restores, builds and tests projects with `dotnet`."""

    def __init__(
        self,
        repo_root: Path,
        manifest: Path,
        binary: str = "dotnet",
        timeout: Optional[int] = None,
    ):
        self.repo_root = repo_root
        self.manifest = manifest
        self.binary = binary
        self.timeout = timeout

    def _run(self, *args) -> CommandResult:
        return run_command([self.binary, *args], cwd=self.repo_root, timeout=self.timeout)

    def version(self) -> CommandResult:
        return self._run("--version")

    def create_project(self, kind: str, name: str, path: Path) -> CommandResult:
        return self._run("new", kind, "-n", name, "-o", path, "--force")

    def add_reference(self, from_project: Path, to_project: Path) -> CommandResult:
        return self._run("add", from_project, "reference", to_project)

    def add_to_manifest(self, project_file: Path) -> CommandResult:
        return self._run("sln", self.manifest, "add", project_file)

    def remove_from_manifest(self, project_file: Path) -> CommandResult:
        return self._run("sln", self.manifest, "remove", project_file)

    def restore(self) -> CommandResult:
        return self._run("restore", self.manifest)

    def build(self) -> CommandResult:
        return self._run("build", self.manifest, "--no-restore")

    def test(self) -> CommandResult:
        return self._run("test", self.manifest, "--no-build")

    def add_package(self, project_file: Path, package_id: str) -> CommandResult:
        return self._run("add", project_file, "package", package_id)
