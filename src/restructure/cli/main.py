"""Main CLI entry point for restructure."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from restructure import __version__
from restructure.config import ConfigManager
from restructure.core.exceptions import BackupError, ConfigError, PlanError
from restructure.core.logging import configure_logging
from restructure.migration import (
    BackupManager,
    EnvironmentProber,
    MigrationContext,
    MigrationOrchestrator,
    build_context,
    build_plan,
)
from restructure.models.plan import MigrationPlan, relative_path
from restructure.models.results import BackupRecord, PipelineState

app = typer.Typer(
    name="restructure",
    help="Split a flat project into a layered multi-project solution",
    pretty_exceptions_enable=False,
    no_args_is_help=True,
)

console = Console()

EXIT_ABORTED = 1
EXIT_VERIFICATION_FAILED = 2

RepoOption = typer.Option(Path("."), "--repo", "-r", help="Repository root")
ConfigOption = typer.Option(None, "--config", "-c", help="Configuration file")


def _setup(repo: Path, config_file: Optional[Path], assume_yes: bool = False) -> Tuple[MigrationContext, MigrationPlan]:
    """Load configuration, configure logging and build the run context."""
    try:
        manager = ConfigManager(config_file)
        config = manager.load()
        if assume_yes:
            config.prompts.assume_yes = True

        configure_logging(
            level=config.logging.level,
            log_file=manager.logs_path / config.logging.file,
            rotation=config.logging.rotation,
            retention=config.logging.retention,
        )

        context = build_context(config, repo, console=console)
        manifest = context.toolchain.manifest
        plan = build_plan(config.layout, context.repo_root, manifest)
    except (ConfigError, PlanError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_ABORTED)

    logger.info(f"restructure {__version__} on {context.repo_root}")
    return context, plan


@app.command()
def migrate(
    branch: Optional[str] = typer.Argument(None, help="Branch to create before migrating"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to every confirmation"),
    repo: Path = RepoOption,
    config_file: Optional[Path] = ConfigOption,
):
    """Run the full migration pipeline."""
    context, plan = _setup(repo, config_file, assume_yes=yes)
    report = MigrationOrchestrator(context, plan, branch=branch).run()

    if report.state == PipelineState.ABORTED:
        raise typer.Exit(EXIT_ABORTED)
    if not report.verification_passed:
        raise typer.Exit(EXIT_VERIFICATION_FAILED)


@app.command()
def plan(
    repo: Path = RepoOption,
    config_file: Optional[Path] = ConfigOption,
):
    """Show the migration plan without changing anything."""
    context, migration_plan = _setup(repo, config_file)
    root = context.repo_root

    table = Table(title="Projects", box=box.SIMPLE, show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Template")
    table.add_column("Path")
    for spec in migration_plan.projects:
        table.add_row(spec.name, spec.kind, str(relative_path(spec.path, root)))
    console.print(table)

    table = Table(title="Moves", box=box.SIMPLE, show_header=True)
    table.add_column("Source -> Destination", style="cyan")
    table.add_column("Replaces placeholder", justify="center")
    for op in migration_plan.moves:
        table.add_row(op.describe(root), "yes" if op.strip_demo_artifact else "no")
    console.print(table)

    console.print("[bold]References (applied in order):[/bold]")
    for number, edge in enumerate(migration_plan.edges, 1):
        console.print(f"  {number}. {edge}")

    console.print("[bold]Packages:[/bold]")
    for package in migration_plan.packages:
        console.print(f"  {package.package_id} -> {package.project}")


@app.command()
def probe(
    repo: Path = RepoOption,
    config_file: Optional[Path] = ConfigOption,
):
    """Check the repository layout and external tools."""
    context, migration_plan = _setup(repo, config_file)
    result = EnvironmentProber(context, migration_plan).probe()

    if result.missing_tools:
        console.print(f"Missing tools: {', '.join(result.missing_tools)}")
    if not result.ok:
        raise typer.Exit(EXIT_ABORTED)


@app.command()
def restore(
    backup_dir: Path = typer.Argument(..., help="Backup directory created by migrate"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to every confirmation"),
    repo: Path = RepoOption,
    config_file: Optional[Path] = ConfigOption,
):
    """Replace the legacy project directory with a backup copy."""
    context, migration_plan = _setup(repo, config_file, assume_yes=yes)
    if not backup_dir.is_absolute():
        backup_dir = context.repo_root / backup_dir
    record = BackupRecord(
        original=migration_plan.legacy_dir,
        copy=backup_dir.resolve(),
        created_at=datetime.now(),
    )

    if not context.gate.confirm(f"Overwrite {record.original} with {record.copy}?"):
        console.print("[yellow]Restore cancelled[/yellow]")
        raise typer.Exit(EXIT_ABORTED)

    try:
        BackupManager(context).restore(record)
    except BackupError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_ABORTED)

    console.print(f"[green]✓[/green] Restored {record.original.name} from {record.copy}")


@app.command()
def version():
    """Show restructure version."""
    console.print(f"[bold green]restructure[/bold green] version {__version__}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
