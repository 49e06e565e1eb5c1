"""Project skeleton creation and manifest registration."""
from typing import List

from restructure.migration.context import MigrationContext
from restructure.migration.status import print_result
from restructure.models.plan import MigrationPlan, ProjectSpec
from restructure.models.results import StageResult

STAGE = "scaffold"


class Scaffolder:
    """Creates every planned project that does not exist yet."""

    def __init__(self, context: MigrationContext, plan: MigrationPlan):
        self.context = context
        self.plan = plan
        self.created: List[str] = []
        self.failed: List[str] = []

    def scaffold(self) -> List[StageResult]:
        """Create missing projects, then register the new ones.

        A failing project does not stop the others; registration failures
        are warnings since the manifest can be fixed by hand.
        """
        results = [self._create(spec) for spec in self.plan.projects]
        results.extend(self._register(spec) for spec in self.plan.projects if spec.name in self.created)
        return results

    def _create(self, spec: ProjectSpec) -> StageResult:
        console = self.context.console

        if spec.project_file.exists():
            return print_result(console, StageResult.success(STAGE, f"{spec.name} already exists, skipped"))

        result = self.context.toolchain.create_project(spec.kind, spec.name, spec.path)
        if not result.ok:
            self.failed.append(spec.name)
            return print_result(console, StageResult.warning(
                STAGE, f"Failed to create {spec.name} ({spec.kind}), exit code {result.exit_code}", result.output
            ))

        self.created.append(spec.name)
        return print_result(console, StageResult.success(STAGE, f"Created {spec.name} ({spec.kind})", result.output))

    def _register(self, spec: ProjectSpec) -> StageResult:
        result = self.context.toolchain.add_to_manifest(spec.project_file)
        if not result.ok:
            return print_result(self.context.console, StageResult.warning(
                STAGE, f"Could not add {spec.name} to {self.plan.manifest.name}; add it manually", result.output
            ))
        return print_result(
            self.context.console, StageResult.success(STAGE, f"Registered {spec.name} in {self.plan.manifest.name}")
        )
