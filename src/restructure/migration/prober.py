"""Environment preconditions for a migration run."""
from dataclasses import dataclass, field
from typing import List

from restructure.migration.context import MigrationContext
from restructure.migration.status import print_result
from restructure.models.plan import MigrationPlan
from restructure.models.results import Outcome, StageResult

STAGE = "probe"


@dataclass
class ProbeResult:
    """Outcome of the environment checks."""
    ok: bool
    missing_tools: List[str] = field(default_factory=list)
    results: List[StageResult] = field(default_factory=list)
    vcs_available: bool = False


class EnvironmentProber:
    """Checks the manifest, legacy project and external tools."""

    def __init__(self, context: MigrationContext, plan: MigrationPlan):
        self.context = context
        self.plan = plan

    def probe(self) -> ProbeResult:
        """Run all checks; manifest and legacy directory are checked first."""
        results: List[StageResult] = []
        missing: List[str] = []

        if not self.plan.manifest.is_file():
            results.append(StageResult.fatal(STAGE, f"Solution manifest not found: {self.plan.manifest}"))
        else:
            results.append(StageResult.success(STAGE, f"Found manifest {self.plan.manifest.name}"))

        if not self.plan.legacy_dir.is_dir():
            results.append(StageResult.fatal(STAGE, f"Legacy project directory not found: {self.plan.legacy_dir}"))
        else:
            results.append(StageResult.success(STAGE, f"Found legacy project {self.plan.legacy_name}"))

        if any(r.is_fatal for r in results):
            # Fail fast; tool checks are pointless without a repository to migrate
            for result in results:
                print_result(self.context.console, result)
            return ProbeResult(ok=False, results=results)

        tools = self.context.config.tools
        version = self.context.toolchain.version()
        if version.ok:
            results.append(StageResult.success(STAGE, f"{tools.build_binary} {version.output.strip()}"))
        else:
            missing.append(tools.build_binary)
            results.append(StageResult.fatal(
                STAGE, f"Build toolchain '{tools.build_binary}' is not invocable", version.output
            ))

        vcs_available = self._probe_vcs(results, missing)

        for result in results:
            print_result(self.context.console, result)

        return ProbeResult(
            ok=not any(r.outcome == Outcome.FATAL for r in results),
            missing_tools=missing,
            results=results,
            vcs_available=vcs_available,
        )

    def _probe_vcs(self, results: List[StageResult], missing: List[str]) -> bool:
        vcs = self.context.vcs
        binary = self.context.config.tools.vcs_binary
        if vcs is None:
            results.append(StageResult.warning(STAGE, "Version control disabled; files will be copied"))
            return False

        version = vcs.version()
        if not version.ok:
            missing.append(binary)
            results.append(StageResult.warning(
                STAGE, f"'{binary}' is not invocable; files will be copied instead of moved", version.output
            ))
            return False

        if not vcs.is_repository():
            results.append(StageResult.warning(
                STAGE, f"{self.context.repo_root} is not a {binary} work tree; files will be copied"
            ))
            return False

        results.append(StageResult.success(STAGE, version.output.strip()))
        return True
