"""
Executor that performs actions on the host
"""
from pathlib import Path
from typing import Optional

from ...core.actions import Action, ActionResult
from ...core.interfaces import Executor, PathLike
from ...core.logging import get_logger

logger = get_logger(__name__)


class RealExecutor(Executor):
    """
    Performs every action and propagates its failure.

    Errors raised by ``Action.perform`` (``CommandError``, ``OSError``,
    ``DeployError``) are not caught here: recoverable steps catch them at
    the call site, everything else aborts the run.
    """

    dry_run = False

    def execute(self, action: Action) -> ActionResult:
        description = action.describe()
        self.journal.append(description)
        logger.info(f"[run] {description}")
        action.perform()
        return ActionResult(action=action, performed=True)

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def is_dir(self, path: PathLike) -> bool:
        return Path(path).is_dir()

    def read_bytes(self, path: PathLike) -> Optional[bytes]:
        try:
            return Path(path).read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None
