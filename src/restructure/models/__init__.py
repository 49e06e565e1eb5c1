"""Data models for restructure."""

from restructure.models.config import RestructureConfig
from restructure.models.plan import (
    FileMoveOperation,
    MigrationPlan,
    PackageSpec,
    ProjectSpec,
    ReferenceEdge,
)
from restructure.models.results import (
    BackupRecord,
    MigrationReport,
    Outcome,
    PhaseResult,
    PipelineState,
    StageResult,
)

__all__ = [
    "RestructureConfig",
    "ProjectSpec",
    "FileMoveOperation",
    "ReferenceEdge",
    "PackageSpec",
    "MigrationPlan",
    "Outcome",
    "StageResult",
    "PhaseResult",
    "BackupRecord",
    "MigrationReport",
    "PipelineState",
]
