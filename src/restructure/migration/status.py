"""Colored per-operation status lines."""
from rich.console import Console
from rich.markup import escape
from loguru import logger

from restructure.models.results import Outcome, StageResult

_ICONS = {
    Outcome.SUCCESS: "[green]✓[/green]",
    Outcome.WARNING: "[yellow]![/yellow]",
    Outcome.FATAL: "[red]✗[/red]",
}


def print_result(console: Console, result: StageResult) -> StageResult:
    """Print and log one stage result, returning it unchanged."""
    console.print(f"{_ICONS[result.outcome]} [dim]{result.stage}:[/dim] {escape(result.detail)}")

    message = f"[{result.stage}] {result.detail}"
    if result.outcome == Outcome.FATAL:
        logger.error(message)
    elif result.outcome == Outcome.WARNING:
        logger.warning(message)
    else:
        logger.info(message)

    if result.output and result.outcome != Outcome.SUCCESS:
        logger.debug(f"[{result.stage}] tool output:\n{result.output}")
    return result
