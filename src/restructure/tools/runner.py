"""Blocking external command execution."""
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

# Shell convention for "command not found"
EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


@dataclass
class CommandResult:
    """Exit status and captured output of one external command."""
    command: List[str]
    exit_code: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


def run_command(
    args: Sequence[str],
    cwd: Optional[Path] = None,
    timeout: Optional[int] = None,
) -> CommandResult:
    """Run an external command and capture its output.

    Never raises for a failing or missing executable; those become
    non-zero exit codes so callers can turn them into stage results.

    Args:
        args: Command and arguments
        cwd: Working directory for the command
        timeout: Seconds to wait before giving up (None waits forever)

    Returns:
        Command result with stdout and stderr joined
    """
    command = [str(a) for a in args]
    logger.debug(f"Running: {' '.join(command)} (cwd={cwd})")

    try:
        completed = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        logger.warning(f"Executable not found: {command[0]}")
        return CommandResult(command, EXIT_NOT_FOUND, str(e))
    except subprocess.TimeoutExpired as e:
        logger.error(f"Command timed out after {timeout}s: {' '.join(command)}")
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return CommandResult(command, EXIT_TIMEOUT, f"{partial}\nTimed out after {timeout}s")

    output = "\n".join(part for part in (completed.stdout, completed.stderr) if part)
    logger.debug(f"Exit code {completed.returncode}: {' '.join(command)}")
    return CommandResult(command, completed.returncode, output)
