"""Pytest configuration and fixtures."""

import io
import shutil
from pathlib import Path

import pytest
from rich.console import Console

from restructure.migration import ConfirmationGate, MigrationContext, build_plan
from restructure.models.config import RestructureConfig
from restructure.tools import CommandResult

LEGACY = "AccountingSystem"

CONTROLLER_SOURCE = """using Microsoft.AspNetCore.Mvc;

namespace AccountingSystem.Controllers;

[ApiController]
[Route("[controller]")]
public class WeatherForecastController : ControllerBase
{
    [HttpGet(Name = "GetWeatherForecast")]
    public IEnumerable<WeatherForecast> Get() => Array.Empty<WeatherForecast>();
}
"""

PROGRAM_SOURCE = """using AccountingSystem.Extensions;

var builder = WebApplication.CreateBuilder(args);
builder.Services.AddControllers();
var app = builder.Build();
app.MapControllers();
app.Run();

public partial class Program { }
"""

LAUNCH_SETTINGS = '{"profiles": {"AccountingSystem": {"commandName": "Project"}}}\n'


class FakeToolchain:
    """In-memory stand-in for the dotnet CLI.

    Records every call and materializes project folders the way
    `dotnet new` would, including the webapi template placeholders.
    """

    def __init__(self, manifest: Path, failures=None, fail_projects=()):
        self.manifest = manifest
        self.failures = dict(failures or {})
        self.fail_projects = set(fail_projects)
        self.calls = []

    def _result(self, name, *args, output=None):
        self.calls.append((name,) + args)
        code = self.failures.get(name, 0)
        return CommandResult(["dotnet", name, *map(str, args)], code, output or f"{name} output")

    def calls_to(self, name):
        return [call[1:] for call in self.calls if call[0] == name]

    def version(self):
        return self._result("version", output="8.0.100")

    def create_project(self, kind, name, path):
        if name in self.fail_projects:
            self.calls.append(("create_project", kind, name, path))
            return CommandResult(["dotnet", "new", kind], 1, f"Template error for {name}")

        result = self._result("create_project", kind, name, path)
        if result.ok:
            path.mkdir(parents=True, exist_ok=True)
            (path / f"{name}.csproj").write_text("<Project Sdk=\"Microsoft.NET.Sdk\" />\n")
            if kind == "webapi":
                (path / "Program.cs").write_text("// template program\n")
                (path / "appsettings.json").write_text("{}\n")
                (path / "WeatherForecast.cs").write_text(f"namespace {name};\n")
                (path / "Controllers").mkdir(exist_ok=True)
                (path / "Controllers" / "WeatherForecastController.cs").write_text(
                    f"namespace {name}.Controllers;\n"
                )
                (path / "Properties").mkdir(exist_ok=True)
                (path / "Properties" / "launchSettings.json").write_text("{}\n")
        return result

    def add_reference(self, from_project, to_project):
        return self._result("add_reference", from_project, to_project)

    def add_to_manifest(self, project_file):
        return self._result("add_to_manifest", project_file)

    def remove_from_manifest(self, project_file):
        return self._result("remove_from_manifest", project_file)

    def restore(self):
        return self._result("restore")

    def build(self):
        return self._result("build")

    def test(self):
        return self._result("test")

    def add_package(self, project_file, package_id):
        return self._result("add_package", project_file, package_id)


class FakeVcs:
    """Stand-in for git; `mv` refuses an existing destination like git does."""

    def __init__(self, move_ok=True, available=True):
        self.move_ok = move_ok
        self.available = available
        self.moves = []
        self.branches = []

    def version(self):
        if not self.available:
            return CommandResult(["git", "--version"], 127, "git: not found")
        return CommandResult(["git", "--version"], 0, "git version 2.43.0")

    def is_repository(self):
        return self.available

    def create_branch(self, name):
        self.branches.append(name)
        return CommandResult(["git", "checkout", "-b", name], 0, "")

    def move(self, source, destination):
        self.moves.append((source, destination))
        if not self.move_ok or destination.exists():
            return CommandResult(["git", "mv"], 128, "fatal: not under version control")
        shutil.move(str(source), str(destination))
        return CommandResult(["git", "mv"], 0, "")


@pytest.fixture
def legacy_repo(tmp_path):
    """Repository with a single flat legacy web project."""
    repo = tmp_path / "repo"
    legacy = repo / LEGACY
    (legacy / "Controllers").mkdir(parents=True)
    (legacy / "Properties").mkdir()

    (repo / f"{LEGACY}.sln").write_text("Microsoft Visual Studio Solution File, Format Version 12.00\n")
    (legacy / f"{LEGACY}.csproj").write_text("<Project Sdk=\"Microsoft.NET.Sdk.Web\" />\n")
    (legacy / "Program.cs").write_text(PROGRAM_SOURCE)
    (legacy / "appsettings.json").write_text('{"Logging": {"LogLevel": {"Default": "Information"}}}\n')
    (legacy / "Controllers" / "WeatherForecastController.cs").write_text(CONTROLLER_SOURCE)
    (legacy / "Properties" / "launchSettings.json").write_text(LAUNCH_SETTINGS)
    return repo


@pytest.fixture
def config():
    return RestructureConfig()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def make_context(legacy_repo, config, output):
    """Factory building a context with fake tools and scripted answers."""

    def factory(toolchain=None, vcs=None, answers=True, repo=None, clock=None):
        root = repo or legacy_repo
        console = Console(file=output, width=200, color_system=None)

        if callable(answers):
            ask = answers
        elif isinstance(answers, list):
            queue = list(answers)
            ask = lambda prompt, default: queue.pop(0)
        else:
            ask = lambda prompt, default: answers

        context = MigrationContext(
            config=config,
            repo_root=root,
            toolchain=toolchain or FakeToolchain(root / f"{LEGACY}.sln"),
            gate=ConfirmationGate(console, ask=ask),
            vcs=vcs,
            console=console,
        )
        if clock is not None:
            context.clock = clock
        return context

    return factory


@pytest.fixture
def plan(legacy_repo, config):
    return build_plan(config.layout, legacy_repo, legacy_repo / f"{LEGACY}.sln")


def snapshot(root: Path) -> dict:
    """Relative path -> bytes for every file under root."""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
