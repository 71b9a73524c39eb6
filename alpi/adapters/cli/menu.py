"""
whiptail menu front-end
"""
import shutil
import subprocess
import sys
from typing import Optional, Sequence, Tuple

from ...core.interfaces import MenuFrontend
from ...core.logging import get_logger

logger = get_logger(__name__)

MENU_HEIGHT = 16
MENU_WIDTH = 62


class WhiptailMenu(MenuFrontend):
    """Full-screen menu via ``whiptail``; the choice is read from stderr"""

    def __init__(self, binary: str = "whiptail"):
        self.binary = binary

    def available(self) -> bool:
        return shutil.which(self.binary) is not None and sys.stdin.isatty()

    def choose(self, title: str, text: str, choices: Sequence[Tuple[str, str]]) -> Optional[str]:
        argv = [
            self.binary,
            "--title", title,
            "--menu", text,
            str(MENU_HEIGHT), str(MENU_WIDTH), str(len(choices)),
        ]
        for tag, description in choices:
            argv += [tag, description]

        try:
            p = subprocess.run(argv, stderr=subprocess.PIPE, text=True)
        except OSError as e:
            logger.warning(f"[menu] {self.binary} failed to start: {e}")
            return None

        if p.returncode != 0:
            logger.debug(f"[menu] cancelled (exit {p.returncode})")
            return None
        return p.stderr.strip() or None
