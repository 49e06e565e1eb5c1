"""Inter-project references and post-migration packages."""
from typing import List

from restructure.migration.context import MigrationContext
from restructure.migration.status import print_result
from restructure.models.plan import MigrationPlan, PackageSpec, ReferenceEdge
from restructure.models.results import StageResult

STAGE = "wire"


class ReferenceWirer:
    """Adds project references in the plan's literal edge order."""

    def __init__(self, context: MigrationContext, plan: MigrationPlan):
        self.context = context
        self.plan = plan
        self.projects = plan.projects_by_name()

    def wire_references(self) -> List[StageResult]:
        return [print_result(self.context.console, self._wire(edge)) for edge in self.plan.edges]

    def add_packages(self) -> List[StageResult]:
        return [print_result(self.context.console, self._add_package(pkg)) for pkg in self.plan.packages]

    def _wire(self, edge: ReferenceEdge) -> StageResult:
        source = self.projects[edge.source]
        target = self.projects[edge.target]

        for spec in (source, target):
            if not spec.project_file.exists():
                return StageResult.warning(STAGE, f"Skipped {edge}: {spec.name} was not scaffolded")

        result = self.context.toolchain.add_reference(source.project_file, target.project_file)
        if not result.ok:
            return StageResult.warning(
                STAGE, f"Failed to add reference {edge}; add it manually", result.output
            )
        return StageResult.success(STAGE, f"Referenced {edge}")

    def _add_package(self, package: PackageSpec) -> StageResult:
        project = self.projects[package.project]
        if not project.project_file.exists():
            return StageResult.warning(
                STAGE, f"Skipped package {package.package_id}: {project.name} was not scaffolded"
            )

        result = self.context.toolchain.add_package(project.project_file, package.package_id)
        if not result.ok:
            return StageResult.warning(
                STAGE, f"Failed to add package {package.package_id} to {project.name}", result.output
            )
        return StageResult.success(STAGE, f"Added package {package.package_id} to {project.name}")
