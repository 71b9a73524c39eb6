"""
Rich-based user prompts
"""
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from ...core.interfaces import PromptProvider
from ...core.logging import get_stdout_console


class RichPromptProvider(PromptProvider):
    """Plain-text fallback when no menu front-end is available"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_stdout_console()

    def prompt(self, message: str, default: Optional[str] = None) -> str:
        return Prompt.ask(message, default=default, console=self.console)
