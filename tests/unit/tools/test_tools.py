"""Unit tests for the external command wrappers."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

from restructure.tools import DotnetToolchain, GitClient, run_command
from restructure.tools.runner import EXIT_NOT_FOUND, EXIT_TIMEOUT

ROOT = Path("/work/repo")
SLN = ROOT / "AccountingSystem.sln"


def completed(returncode=0, stdout="", stderr=""):
    return Mock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestRunCommand:

    @patch("restructure.tools.runner.subprocess.run")
    def test_captures_output_and_exit_code(self, mock_run):
        mock_run.return_value = completed(1, "out", "err")

        result = run_command(["dotnet", "build"], cwd=ROOT)

        assert result.exit_code == 1
        assert not result.ok
        assert result.output == "out\nerr"
        mock_run.assert_called_once_with(
            ["dotnet", "build"], cwd=str(ROOT), capture_output=True, text=True, timeout=None
        )

    @patch("restructure.tools.runner.subprocess.run", side_effect=FileNotFoundError("dotnet"))
    def test_missing_executable_is_not_raised(self, mock_run):
        result = run_command(["dotnet", "--version"])

        assert result.exit_code == EXIT_NOT_FOUND
        assert result.command_line == "dotnet --version"

    @patch("restructure.tools.runner.subprocess.run")
    def test_timeout_becomes_exit_code(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(["dotnet", "test"], 5)

        result = run_command(["dotnet", "test"], timeout=5)

        assert result.exit_code == EXIT_TIMEOUT
        assert "Timed out after 5s" in result.output


class TestDotnetToolchain:

    @patch("restructure.tools.dotnet.run_command")
    def test_commands(self, mock_run):
        toolchain = DotnetToolchain(ROOT, SLN, timeout=30)
        api = ROOT / "src" / "Accounting.Api"
        api_file = api / "Accounting.Api.csproj"
        app_file = ROOT / "src" / "Accounting.Application" / "Accounting.Application.csproj"

        toolchain.create_project("webapi", "Accounting.Api", api)
        toolchain.add_reference(api_file, app_file)
        toolchain.add_to_manifest(api_file)
        toolchain.remove_from_manifest(api_file)
        toolchain.add_package(api_file, "Swashbuckle.AspNetCore")
        toolchain.restore()
        toolchain.build()
        toolchain.test()

        commands = [call.args[0] for call in mock_run.call_args_list]
        assert commands == [
            ["dotnet", "new", "webapi", "-n", "Accounting.Api", "-o", api, "--force"],
            ["dotnet", "add", api_file, "reference", app_file],
            ["dotnet", "sln", SLN, "add", api_file],
            ["dotnet", "sln", SLN, "remove", api_file],
            ["dotnet", "add", api_file, "package", "Swashbuckle.AspNetCore"],
            ["dotnet", "restore", SLN],
            ["dotnet", "build", SLN, "--no-restore"],
            ["dotnet", "test", SLN, "--no-build"],
        ]
        assert all(call.kwargs == {"cwd": ROOT, "timeout": 30} for call in mock_run.call_args_list)


class TestGitClient:

    @patch("restructure.tools.git.run_command")
    def test_move_and_branch(self, mock_run):
        git = GitClient(ROOT)
        git.create_branch("feature/layers")
        git.move(ROOT / "a.cs", ROOT / "b.cs")

        commands = [call.args[0] for call in mock_run.call_args_list]
        assert commands == [
            ["git", "checkout", "-b", "feature/layers"],
            ["git", "mv", ROOT / "a.cs", ROOT / "b.cs"],
        ]

    @patch("restructure.tools.git.run_command")
    def test_is_repository(self, mock_run):
        mock_run.return_value = Mock(ok=True, output="true\n")
        assert GitClient(ROOT).is_repository()

        mock_run.return_value = Mock(ok=False, output="fatal: not a git repository")
        assert not GitClient(ROOT).is_repository()
