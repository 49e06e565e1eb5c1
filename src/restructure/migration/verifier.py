"""Restore, build and test through the external toolchain."""
from typing import Optional, Sequence

from restructure.migration.context import MigrationContext
from restructure.migration.status import print_result
from restructure.models.results import MigrationReport, PhaseResult, StageResult

STAGE = "verify"

# Phases whose failure makes running the remaining ones meaningless
BLOCKING_PHASES = ("restore", "build")


class Verifier:
    """Runs the verification phases in fixed order."""

    PHASES = ("restore", "build", "test")

    def __init__(self, context: MigrationContext):
        self.context = context

    def verify(
        self,
        report: Optional[MigrationReport] = None,
        scaffold_failures: Sequence[str] = (),
    ) -> MigrationReport:
        """Run restore, build and test, recording every phase.

        A failed restore or build marks the later phases as skipped. The
        report is always complete, even when every phase fails.

        Args:
            report: Report to extend (a fresh one is created if omitted)
            scaffold_failures: Projects that failed to scaffold earlier

        Returns:
            The report with one phase result per phase
        """
        report = report or MigrationReport()
        console = self.context.console
        console.print("\n[bold]Verifying solution[/bold]")

        if scaffold_failures:
            report.results.append(print_result(console, StageResult.warning(
                STAGE, f"Projects missing after scaffolding: {', '.join(scaffold_failures)}; expect build errors"
            )))

        blocked_by: Optional[str] = None
        for name in self.PHASES:
            if blocked_by:
                report.phases.append(PhaseResult(name=name, passed=False, skipped=True))
                report.results.append(print_result(
                    console, StageResult.warning(STAGE, f"{name} skipped because {blocked_by} failed")
                ))
                continue

            result = getattr(self.context.toolchain, name)()
            report.phases.append(PhaseResult(
                name=name, passed=result.ok, exit_code=result.exit_code, output=result.output
            ))

            if result.ok:
                report.results.append(print_result(console, StageResult.success(STAGE, f"{name} passed")))
                continue

            report.results.append(print_result(console, StageResult.warning(
                STAGE, f"{name} failed with exit code {result.exit_code}", result.output
            )))
            if name in BLOCKING_PHASES:
                blocked_by = name

        return report
