"""Stage results and the aggregated migration report."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional


class Outcome(Enum):
    """Outcome of a stage operation."""
    SUCCESS = "success"
    WARNING = "warning"
    FATAL = "fatal"


class PipelineState(Enum):
    """States of a single migration run."""
    PROBING = "probing"
    BACKING_UP = "backing_up"
    SCAFFOLDING = "scaffolding"
    RELOCATING = "relocating"
    REWRITING = "rewriting"
    WIRING = "wiring"
    VERIFYING = "verifying"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class StageResult:
    """Result of one stage operation."""
    stage: str
    outcome: Outcome
    detail: str
    output: Optional[str] = None

    @classmethod
    def success(cls, stage: str, detail: str, output: Optional[str] = None) -> "StageResult":
        return cls(stage, Outcome.SUCCESS, detail, output)

    @classmethod
    def warning(cls, stage: str, detail: str, output: Optional[str] = None) -> "StageResult":
        return cls(stage, Outcome.WARNING, detail, output)

    @classmethod
    def fatal(cls, stage: str, detail: str, output: Optional[str] = None) -> "StageResult":
        return cls(stage, Outcome.FATAL, detail, output)

    @property
    def is_fatal(self) -> bool:
        return self.outcome == Outcome.FATAL


@dataclass
class PhaseResult:
    """Result of one verification phase (restore, build or test)."""
    name: str
    passed: bool
    skipped: bool = False
    exit_code: Optional[int] = None
    output: str = ""

    @property
    def status(self) -> str:
        if self.skipped:
            return "skipped"
        return "passed" if self.passed else "failed"


@dataclass(frozen=True)
class BackupRecord:
    """Location of the pre-migration snapshot."""
    original: Path
    copy: Path
    created_at: datetime


@dataclass
class MigrationReport:
    """Everything the run produced, consumed by the finalizer."""
    results: List[StageResult] = field(default_factory=list)
    phases: List[PhaseResult] = field(default_factory=list)
    backup: Optional[BackupRecord] = None
    created_projects: List[str] = field(default_factory=list)
    state: PipelineState = PipelineState.PROBING

    def extend(self, results: List[StageResult]) -> None:
        self.results.extend(results)

    def phase(self, name: str) -> Optional[PhaseResult]:
        for phase in self.phases:
            if phase.name == name:
                return phase
        return None

    @property
    def warnings(self) -> List[StageResult]:
        return [r for r in self.results if r.outcome == Outcome.WARNING]

    @property
    def fatals(self) -> List[StageResult]:
        return [r for r in self.results if r.outcome == Outcome.FATAL]

    @property
    def has_fatal(self) -> bool:
        return any(r.is_fatal for r in self.results)

    @property
    def verification_passed(self) -> bool:
        """True when every verification phase ran and passed."""
        return bool(self.phases) and all(p.passed and not p.skipped for p in self.phases)
