"""Pre-migration snapshot of the legacy project."""
import shutil
from pathlib import Path
from typing import Optional, Tuple

from loguru import logger

from restructure.core.exceptions import BackupError
from restructure.migration.context import MigrationContext
from restructure.migration.status import print_result
from restructure.models.results import BackupRecord, StageResult

STAGE = "backup"


class BackupManager:
    """Copies the legacy tree to a timestamped sibling directory.

    Backups are never deleted by the tool; removing one is a manual step.
    """

    def __init__(self, context: MigrationContext):
        self.context = context

    def backup_path_for(self, source_dir: Path) -> Path:
        layout = self.context.layout
        timestamp = self.context.clock().strftime(layout.timestamp_format)
        name = layout.backup_name_format.format(legacy=source_dir.name, timestamp=timestamp)
        return source_dir.parent / name

    def backup(self, source_dir: Path) -> Tuple[Optional[BackupRecord], StageResult]:
        """Snapshot source_dir.

        Returns:
            The backup record (None on failure) and the stage result
        """
        created_at = self.context.clock()
        target = self.backup_path_for(source_dir)

        if target.exists():
            if self.context.gate.assume_yes:
                # Unattended runs never replace an earlier snapshot
                target = self._next_free_path(target)
            else:
                overwrite = self.context.gate.confirm(
                    f"Backup {target.name} already exists. Overwrite it?"
                )
                if not overwrite:
                    return None, print_result(self.context.console, StageResult.fatal(
                        STAGE, f"Overwrite of existing backup {target} declined by user"
                    ))

        try:
            self._copy(source_dir, target)
        except BackupError as e:
            return None, print_result(self.context.console, StageResult.fatal(STAGE, str(e)))

        record = BackupRecord(original=source_dir, copy=target, created_at=created_at)
        return record, print_result(
            self.context.console, StageResult.success(STAGE, f"Backed up {source_dir.name} to {target}")
        )

    def restore(self, record: BackupRecord) -> None:
        """Replace the original tree with the backup copy.

        Raises:
            BackupError: If the backup is missing or copying fails
        """
        if not record.copy.is_dir():
            raise BackupError(f"Backup not found: {record.copy}")

        logger.info(f"Restoring {record.original} from {record.copy}")
        self._copy(record.copy, record.original)

    def _next_free_path(self, target: Path) -> Path:
        counter = 2
        candidate = target.with_name(f"{target.name}_{counter}")
        while candidate.exists():
            counter += 1
            candidate = target.with_name(f"{target.name}_{counter}")
        logger.info(f"Backup {target.name} already exists, using {candidate.name}")
        return candidate

    def _copy(self, source: Path, target: Path) -> None:
        try:
            if target.exists():
                shutil.rmtree(target)
            shutil.copytree(source, target, symlinks=True)
        except (OSError, shutil.Error) as e:
            raise BackupError(f"Failed to copy {source} to {target}: {e}") from e
        logger.info(f"Copied {source} to {target}")
