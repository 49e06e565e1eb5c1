"""Synchronous yes/no confirmation gates."""
from typing import Callable, Iterable, Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm


class ConfirmationGate:
    """Blocks on a yes/no prompt before a destructive stage."""

    def __init__(
        self,
        console: Console,
        assume_yes: bool = False,
        default: bool = False,
        ask: Optional[Callable[[str, bool], bool]] = None,
    ):
        """Initialize the gate.

        Args:
            console: Console used for the prompt and the listed details
            assume_yes: Answer every prompt with yes without asking
            default: Answer used when the user just presses enter
            ask: Replacement for the interactive prompt (prompt, default) -> bool
        """
        self.console = console
        self.assume_yes = assume_yes
        self.default = default
        self._ask = ask or self._ask_console

    def _ask_console(self, prompt: str, default: bool) -> bool:
        return Confirm.ask(prompt, default=default, console=self.console)

    def confirm(self, prompt: str, details: Optional[Iterable[str]] = None) -> bool:
        """Show details and ask for confirmation.

        Returns:
            True if the user accepted
        """
        for line in details or ():
            self.console.print(f"  [dim]•[/dim] {escape(line)}")

        if self.assume_yes:
            logger.info(f"Auto-confirmed: {prompt}")
            return True

        answer = bool(self._ask(prompt, self.default))
        logger.info(f"Confirmation '{prompt}': {'yes' if answer else 'no'}")
        return answer
