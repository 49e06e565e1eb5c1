"""Legacy deregistration and the end-of-run summary."""
from typing import List

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from restructure.migration.context import MigrationContext
from restructure.migration.status import print_result
from restructure.models.plan import MigrationPlan
from restructure.models.results import MigrationReport, Outcome, PipelineState, StageResult

STAGE = "finalize"

NEXT_STEPS = (
    "Review namespaces and using directives in the relocated files and clean up leftovers",
    "Verify Properties/launchSettings.json profiles start the new API project",
    "Move domain and business code from the API project into the Domain, Application and Infrastructure layers",
    "Delete the legacy project directory and the backup once the new layout is confirmed",
)


class Finalizer:
    """Offers legacy deregistration and prints the consolidated report.

    Neither the legacy directory nor the backup is ever deleted here.
    """

    def __init__(self, context: MigrationContext, plan: MigrationPlan):
        self.context = context
        self.plan = plan

    def finalize(self) -> List[StageResult]:
        """Ask before removing the legacy project from the manifest."""
        console = self.context.console
        legacy = self.plan.legacy_project_file

        if not self.context.gate.confirm(
            f"Remove {self.plan.legacy_name} from {self.plan.manifest.name}?"
        ):
            return [print_result(console, StageResult.success(
                STAGE, f"Kept {self.plan.legacy_name} registered in {self.plan.manifest.name}"
            ))]

        result = self.context.toolchain.remove_from_manifest(legacy)
        if not result.ok:
            return [print_result(console, StageResult.warning(
                STAGE, f"Could not remove {self.plan.legacy_name} from the manifest; remove it manually",
                result.output,
            ))]
        return [print_result(console, StageResult.success(
            STAGE, f"Removed {self.plan.legacy_name} from {self.plan.manifest.name}"
        ))]

    def render_summary(self, report: MigrationReport) -> None:
        """Print created projects, verification, problems and next steps."""
        console = self.context.console
        aborted = report.state == PipelineState.ABORTED

        projects = ", ".join(report.created_projects) or "none"
        backup = str(report.backup.copy) if report.backup else "not created"
        console.print(Panel.fit(
            f"[bold]Migration {'aborted' if aborted else 'completed'}[/bold]\n\n"
            f"Created projects: {escape(projects)}\n"
            f"Backup: {escape(backup)}",
            title="Summary",
            border_style="red" if aborted or report.has_fatal else "green",
        ))

        if report.phases:
            table = Table(title="Verification", box=box.SIMPLE, show_header=True)
            table.add_column("Phase", style="cyan")
            table.add_column("Status", justify="center")
            table.add_column("Exit code", justify="right")
            for phase in report.phases:
                color = {"passed": "green", "failed": "red"}.get(phase.status, "dim")
                exit_code = "-" if phase.exit_code is None else str(phase.exit_code)
                table.add_row(phase.name, f"[{color}]{phase.status}[/{color}]", exit_code)
            console.print(table)

        problems = [r for r in report.results if r.outcome != Outcome.SUCCESS]
        if problems:
            table = Table(title="Problems", box=box.SIMPLE, show_header=True)
            table.add_column("Stage", style="cyan")
            table.add_column("Severity")
            table.add_column("Detail")
            for result in problems:
                color = "red" if result.is_fatal else "yellow"
                table.add_row(result.stage, f"[{color}]{result.outcome.value}[/{color}]", escape(result.detail))
            console.print(table)

        console.print("[bold]Next steps:[/bold]")
        steps = list(NEXT_STEPS)
        if aborted and report.backup:
            steps.insert(0, f"Restore {self.plan.legacy_dir.name} from {report.backup.copy} if needed")
        for number, step in enumerate(steps, 1):
            console.print(f"  {number}. {escape(step)}")
