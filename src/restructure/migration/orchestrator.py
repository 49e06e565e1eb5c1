"""Single forward pass over the migration stages."""
from typing import List, Optional

from loguru import logger
from rich.panel import Panel

from restructure.migration.backup import BackupManager
from restructure.migration.context import MigrationContext
from restructure.migration.finalizer import Finalizer
from restructure.migration.prober import EnvironmentProber
from restructure.migration.relocator import Relocator
from restructure.migration.rewriter import NamespaceRewriter
from restructure.migration.scaffolder import Scaffolder
from restructure.migration.status import print_result
from restructure.migration.verifier import Verifier
from restructure.migration.wirer import ReferenceWirer
from restructure.models.plan import MigrationPlan
from restructure.models.results import MigrationReport, PipelineState, StageResult


class MigrationOrchestrator:
    """Drives Probing through Finalizing, aborting on the first fatal result.

    No stage is retried or re-entered; a decline or fatal result leaves the
    tree as it is, with the backup as the only way back.
    """

    def __init__(self, context: MigrationContext, plan: MigrationPlan, branch: Optional[str] = None):
        self.context = context
        self.plan = plan
        self.branch = branch
        self.report = MigrationReport()
        self.finalizer = Finalizer(context, plan)

    def run(self) -> MigrationReport:
        """Run the whole pipeline and return the report."""
        report = self.report
        console = self.context.console
        console.print(Panel.fit(
            f"[bold cyan]Restructuring {self.plan.legacy_name}[/bold cyan]\n\n"
            f"Repository: {self.context.repo_root}\n"
            f"Projects: {len(self.plan.projects)}  Moves: {len(self.plan.moves)}  "
            f"References: {len(self.plan.edges)}",
            title="Migration",
        ))

        self._enter(PipelineState.PROBING)
        probe = EnvironmentProber(self.context, self.plan).probe()
        report.extend(probe.results)
        if not probe.ok:
            return self._abort()
        if not probe.vcs_available:
            self.context.vcs = None

        self._enter(PipelineState.BACKING_UP)
        record, result = BackupManager(self.context).backup(self.plan.legacy_dir)
        report.results.append(result)
        if record is None:
            return self._abort()
        report.backup = record

        if self.branch:
            report.results.append(self._create_branch())

        self._enter(PipelineState.SCAFFOLDING)
        scaffolder = Scaffolder(self.context, self.plan)
        report.extend(scaffolder.scaffold())
        report.created_projects = list(scaffolder.created)

        self._enter(PipelineState.RELOCATING)
        if self._extend_or_abort(Relocator(self.context, self.plan).relocate()):
            return self._abort()

        self._enter(PipelineState.REWRITING)
        api = self.plan.project(self.plan.api_project)
        report.extend(
            NamespaceRewriter(self.context).rewrite_namespaces(api.path, self.plan.legacy_name, api.name)
        )

        self._enter(PipelineState.WIRING)
        wirer = ReferenceWirer(self.context, self.plan)
        report.extend(wirer.wire_references())
        report.extend(wirer.add_packages())

        self._enter(PipelineState.VERIFYING)
        Verifier(self.context).verify(report, scaffold_failures=scaffolder.failed)

        self._enter(PipelineState.FINALIZING)
        report.extend(self.finalizer.finalize())

        self._enter(PipelineState.COMPLETED)
        self.finalizer.render_summary(report)
        return report

    def _enter(self, state: PipelineState) -> None:
        logger.info(f"Pipeline state: {self.report.state.value} -> {state.value}")
        self.report.state = state
        if state not in (PipelineState.COMPLETED, PipelineState.ABORTED):
            self.context.console.rule(f"[bold]{state.value.replace('_', ' ').title()}[/bold]")

    def _extend_or_abort(self, results: List[StageResult]) -> bool:
        self.report.extend(results)
        return any(r.is_fatal for r in results)

    def _abort(self) -> MigrationReport:
        logger.error(f"Migration aborted during {self.report.state.value}")
        self._enter(PipelineState.ABORTED)
        self.finalizer.render_summary(self.report)
        return self.report

    def _create_branch(self) -> StageResult:
        stage = "branch"
        vcs = self.context.vcs
        if vcs is None:
            return print_result(self.context.console, StageResult.warning(
                stage, f"Version control unavailable, branch '{self.branch}' not created"
            ))

        result = vcs.create_branch(self.branch)
        if not result.ok:
            return print_result(self.context.console, StageResult.warning(
                stage, f"Could not create branch '{self.branch}'", result.output
            ))
        return print_result(self.context.console, StageResult.success(stage, f"Switched to new branch '{self.branch}'"))
