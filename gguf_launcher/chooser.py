"""
Interactive selection prompts.

The resolver only talks to the Chooser interface, so tests can swap the
terminal for a scripted fake. TerminalChooser renders menus with Rich and
reads answers with prompt_toolkit.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from rich.console import Console
from rich.table import Table
from rich.text import Text

logger = logging.getLogger(__name__)

CANCEL_WORDS = ("q", "quit", "exit")


class Chooser(ABC):
    """Blocking human-input capability used by the resolver."""

    @abstractmethod
    def choose(
        self, prompt: str, options: Sequence[str], default: int = 0
    ) -> Optional[int]:
        """
        Ask the user to pick one of ``options``.

        Returns:
            Index of the selected option, or None if the user cancelled
        """

    @abstractmethod
    def ask_text(self, prompt: str) -> Optional[str]:
        """
        Ask the user for a line of free text.

        Returns:
            The non-empty answer, or None if the user cancelled
        """


class TerminalChooser(Chooser):
    """Numbered-menu chooser for an interactive terminal."""

    def __init__(self, console: Optional[Console] = None, session: Optional[PromptSession] = None):
        """
        Initialize the terminal chooser.

        Args:
            console: Rich console used to render menus
            session: prompt_toolkit session used to read answers
        """
        self.console = console or Console()
        self.session = session

    def _read(self, message: str) -> Optional[str]:
        """Read one line; None on Ctrl-C / Ctrl-D."""
        if self.session is None:
            self.session = PromptSession()
        try:
            return self.session.prompt(HTML(message)).strip()
        except (KeyboardInterrupt, EOFError):
            return None

    def choose(
        self, prompt: str, options: Sequence[str], default: int = 0
    ) -> Optional[int]:
        if not options:
            return None

        table = Table(title=f"[bold cyan]{prompt}[/bold cyan]", show_header=False, box=None)
        table.add_column(style="cyan", justify="right")
        table.add_column()
        for i, option in enumerate(options, 1):
            label = Text(option)
            if i - 1 == default:
                label.append(" (default)", style="green")
            table.add_row(f"{i}.", label)
        self.console.print(table)

        while True:
            answer = self._read(
                f"<ansiblue><b>{prompt}</b></ansiblue> [1-{len(options)}, q to cancel] "
            )
            if answer is None or answer.lower() in CANCEL_WORDS:
                logger.debug(f"Selection cancelled: {prompt}")
                return None
            if not answer:
                return default
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return int(answer) - 1
            self.console.print(
                f"[red]✗ Enter a number between 1 and {len(options)}[/red]"
            )

    def ask_text(self, prompt: str) -> Optional[str]:
        while True:
            answer = self._read(f"<ansiblue><b>{prompt}</b></ansiblue> ")
            if answer is None:
                logger.debug(f"Input cancelled: {prompt}")
                return None
            if answer:
                return answer
