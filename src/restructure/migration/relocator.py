"""Moves legacy files into the new API project."""
import shutil
from typing import List

from loguru import logger

from restructure.migration.context import MigrationContext
from restructure.migration.status import print_result
from restructure.models.plan import FileMoveOperation, MigrationPlan
from restructure.models.results import StageResult

STAGE = "relocate"


class Relocator:
    """Applies the plan's file moves.

    A tracked move through version control is tried first; on failure files
    are copied then deleted and directories replace their destination.
    """

    def __init__(self, context: MigrationContext, plan: MigrationPlan):
        self.context = context
        self.plan = plan

    def relocate(self) -> List[StageResult]:
        """Confirm the full move list, then move each entry independently."""
        console = self.context.console
        console.print(f"\n[bold]Planned moves ({len(self.plan.moves)}):[/bold]")

        accepted = self.context.gate.confirm(
            "Relocate these files?",
            details=[op.describe(self.context.repo_root) for op in self.plan.moves],
        )
        if not accepted:
            return [print_result(console, StageResult.fatal(STAGE, "Relocation declined by user"))]

        return [print_result(console, self.relocate_one(op)) for op in self.plan.moves]

    def relocate_one(self, op: FileMoveOperation) -> StageResult:
        """Move a single file or directory; never raises."""
        label = op.describe(self.context.repo_root)

        if not op.source.exists():
            return StageResult.warning(STAGE, f"Source missing, skipped: {label}")

        try:
            if op.strip_demo_artifact:
                self._strip_placeholder(op)

            op.destination.parent.mkdir(parents=True, exist_ok=True)

            if self._tracked_move(op):
                return StageResult.success(STAGE, f"Moved (tracked) {label}")

            if op.is_directory:
                if op.destination.exists():
                    shutil.rmtree(op.destination)
                shutil.move(str(op.source), str(op.destination))
            else:
                shutil.copy2(op.source, op.destination)
                op.source.unlink()
        except OSError as e:
            logger.exception(f"Relocation failed: {label}")
            return StageResult.warning(STAGE, f"Failed to move {label}: {e}")

        return StageResult.success(STAGE, f"Moved (copy) {label}")

    def _strip_placeholder(self, op: FileMoveOperation) -> None:
        destination = op.destination
        if destination.is_dir() and not destination.is_symlink():
            logger.debug(f"Removing placeholder directory {destination}")
            shutil.rmtree(destination)
        elif destination.exists():
            logger.debug(f"Removing placeholder file {destination}")
            destination.unlink()

    def _tracked_move(self, op: FileMoveOperation) -> bool:
        vcs = self.context.vcs
        if vcs is None:
            return False

        # git mv nests a directory inside an existing destination
        if op.is_directory and op.destination.exists():
            return False

        result = vcs.move(op.source, op.destination)
        if result.ok and op.destination.exists() and not op.source.exists():
            return True

        logger.info(f"Tracked move failed for {op.source}, falling back to copy: {result.output.strip()}")
        return False
