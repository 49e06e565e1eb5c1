"""Static migration plan for the layered layout.

Pure functions only: the tables below are the single source of truth for
which projects exist, what moves where and in which order references are
wired.
"""
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from restructure.core.exceptions import PlanError
from restructure.models.config import LayoutConfig
from restructure.models.plan import (
    FileMoveOperation,
    MigrationPlan,
    PackageSpec,
    ProjectSpec,
    ReferenceEdge,
)

API = "Api"

# (layer suffix, project template), in creation order
PROJECT_TABLE = (
    (API, "webapi"),
    ("Application", "classlib"),
    ("Domain", "classlib"),
    ("Infrastructure", "classlib"),
    ("Tests", "xunit"),
)

# Applied literally in this order; every target must already be scaffolded
REFERENCE_TABLE = (
    ("Application", "Domain"),
    ("Infrastructure", "Domain"),
    ("Infrastructure", "Application"),
    (API, "Application"),
    ("Tests", API),
)

PACKAGE_TABLE = (
    (API, "Swashbuckle.AspNetCore"),
    (API, "Swashbuckle.AspNetCore.Annotations"),
    ("Tests", "Microsoft.AspNetCore.Mvc.Testing"),
)

CRITICAL_FILES = (
    "Program.cs",
    "appsettings.json",
    "appsettings.Development.json",
    "WeatherForecast.cs",
)

CONTROLLERS_DIR = "Controllers"
LAUNCH_SETTINGS_DIR = "Properties"


def project_name(layout: LayoutConfig, layer: str) -> str:
    return f"{layout.project_prefix}.{layer}"


def build_plan(layout: LayoutConfig, repo_root: Path, manifest: Path) -> MigrationPlan:
    """Build the migration plan from the fixed tables.

    Args:
        layout: Layout section of the configuration
        repo_root: Repository root all plan paths are anchored to
        manifest: Solution file the projects are registered with

    Returns:
        Validated, immutable migration plan

    Raises:
        PlanError: If the reference table is inconsistent
    """
    target_root = repo_root / layout.target_dir
    legacy_dir = repo_root / (layout.legacy_dir or layout.legacy_project)

    projects = tuple(
        ProjectSpec(
            name=project_name(layout, layer),
            kind=kind,
            path=target_root / project_name(layout, layer),
        )
        for layer, kind in PROJECT_TABLE
    )

    api_dir = target_root / project_name(layout, API)

    # Every relocated item replaces a placeholder generated by the webapi template
    moves = tuple(
        FileMoveOperation(legacy_dir / name, api_dir / name, strip_demo_artifact=True)
        for name in CRITICAL_FILES
    ) + tuple(
        FileMoveOperation(legacy_dir / name, api_dir / name, is_directory=True, strip_demo_artifact=True)
        for name in (CONTROLLERS_DIR, LAUNCH_SETTINGS_DIR)
    )

    edges = tuple(
        ReferenceEdge(project_name(layout, source), project_name(layout, target))
        for source, target in REFERENCE_TABLE
    )

    packages = tuple(
        PackageSpec(project_name(layout, layer), package_id)
        for layer, package_id in PACKAGE_TABLE
    )

    plan = MigrationPlan(
        legacy_name=layout.legacy_project,
        legacy_dir=legacy_dir,
        manifest=manifest,
        projects=projects,
        moves=moves,
        edges=edges,
        packages=packages,
        api_project=project_name(layout, API),
    )
    validate_plan(plan)
    return plan


def find_cycle(edges: Sequence[ReferenceEdge]) -> Optional[List[str]]:
    """Return the project names forming a cycle, or None if the graph is acyclic."""
    graph: Dict[str, List[str]] = {}
    for edge in edges:
        graph.setdefault(edge.source, []).append(edge.target)
        graph.setdefault(edge.target, [])

    visiting: List[str] = []
    done = set()

    def visit(node: str) -> Optional[List[str]]:
        if node in visiting:
            return visiting[visiting.index(node):] + [node]
        if node in done:
            return None
        visiting.append(node)
        for child in graph[node]:
            cycle = visit(child)
            if cycle:
                return cycle
        visiting.pop()
        done.add(node)
        return None

    for node in graph:
        cycle = visit(node)
        if cycle:
            return cycle
    return None


def validate_plan(plan: MigrationPlan) -> None:
    """Check that every edge names planned projects and the edge set is acyclic.

    Edges are never reordered; their order stays exactly as authored.

    Raises:
        PlanError: On an unknown project, duplicate project or a cycle
    """
    names = [spec.name for spec in plan.projects]
    if len(set(names)) != len(names):
        raise PlanError(f"Duplicate project names in plan: {names}")

    known = set(names)
    for edge in plan.edges:
        for name in (edge.source, edge.target):
            if name not in known:
                raise PlanError(f"Reference {edge} names unknown project '{name}'")
        if edge.source == edge.target:
            raise PlanError(f"Project '{edge.source}' references itself")

    for package in plan.packages:
        if package.project not in known:
            raise PlanError(f"Package {package.package_id} targets unknown project '{package.project}'")

    cycle = find_cycle(plan.edges)
    if cycle:
        raise PlanError(f"Reference cycle: {' -> '.join(cycle)}")
