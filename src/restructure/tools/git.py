"""Version-control adapter for git."""
from pathlib import Path
from typing import Optional

from restructure.tools.runner import CommandResult, run_command


class GitClient:
    """Branch creation and tracked moves."""

    def __init__(self, repo_root: Path, binary: str = "git", timeout: Optional[int] = None):
        self.repo_root = repo_root
        self.binary = binary
        self.timeout = timeout

    def _run(self, *args) -> CommandResult:
        return run_command([self.binary, *args], cwd=self.repo_root, timeout=self.timeout)

    def version(self) -> CommandResult:
        return self._run("--version")

    def is_repository(self) -> bool:
        result = self._run("rev-parse", "--is-inside-work-tree")
        return result.ok and result.output.strip() == "true"

    def create_branch(self, name: str) -> CommandResult:
        return self._run("checkout", "-b", name)

    def move(self, source: Path, destination: Path) -> CommandResult:
        return self._run("mv", source, destination)
