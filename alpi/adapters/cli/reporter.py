"""
Rich-based status line reporter
"""
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ...core.interfaces import Reporter
from ...core.logging import get_stderr_console, get_stdout_console


class RichReporter(Reporter):
    """
    Colour-coded ``[TAG] message`` lines.

    Messages are rendered as plain text, never as Rich markup, so paths
    and command lines containing brackets print unchanged. Failures go to
    stderr, everything else to stdout.
    """

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or get_stdout_console()
        self.error_console = error_console or get_stderr_console()

    def _line(self, tag: str, style: str, message: str, console: Optional[Console] = None) -> None:
        (console or self.console).print(Text.assemble((tag, style), " ", message))

    def say(self, message: str) -> None:
        self._line("[ALPI]", "blue", message)

    def step(self, message: str) -> None:
        self._line("[====]", "magenta", message)

    def info(self, message: str) -> None:
        self._line("[INFO]", "cyan", message)

    def ok(self, message: str) -> None:
        self._line("[ OK ]", "green", message)

    def warn(self, message: str) -> None:
        self._line("[WARN]", "yellow", message)

    def fail(self, message: str) -> None:
        self._line("[FAIL]", "red", message, console=self.error_console)

    def panel(self, content: str, title: str = "", border_style: str = "blue") -> None:
        """Display content in a panel"""
        self.console.print(Panel(Text(content), title=title, border_style=border_style))
