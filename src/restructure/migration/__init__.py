"""Migration of a flat project into the layered multi-project layout.

Stages run in a fixed order, each returning stage results rather than
raising, and the orchestrator decides when a run aborts.
"""

from restructure.migration.backup import BackupManager
from restructure.migration.context import MigrationContext, build_context, resolve_manifest
from restructure.migration.finalizer import Finalizer
from restructure.migration.orchestrator import MigrationOrchestrator
from restructure.migration.plan_builder import build_plan, find_cycle, validate_plan
from restructure.migration.prober import EnvironmentProber, ProbeResult
from restructure.migration.prompts import ConfirmationGate
from restructure.migration.relocator import Relocator
from restructure.migration.rewriter import NamespaceRewriter
from restructure.migration.scaffolder import Scaffolder
from restructure.migration.verifier import Verifier
from restructure.migration.wirer import ReferenceWirer

__all__ = [
    'MigrationContext',
    'build_context',
    'resolve_manifest',
    'ConfirmationGate',
    'build_plan',
    'validate_plan',
    'find_cycle',
    'EnvironmentProber',
    'ProbeResult',
    'BackupManager',
    'Scaffolder',
    'Relocator',
    'NamespaceRewriter',
    'ReferenceWirer',
    'Verifier',
    'Finalizer',
    'MigrationOrchestrator',
]
