"""
Executor that previews actions without performing them
"""
from pathlib import Path
from typing import Dict, Optional, Set

from ...core.actions import (
    Action,
    ActionResult,
    CopyFile,
    CopyTree,
    MakeDirs,
    MoveFile,
    RemoveTree,
    SubstituteInFile,
    WriteFile,
)
from ...core.interfaces import Executor, PathLike, Reporter
from ...core.logging import get_logger

logger = get_logger(__name__)


class DryRunExecutor(Executor):
    """
    Prints ``[dry-run] <action>`` for every action and always succeeds.

    The executor keeps an overlay of the files and directories its
    previewed actions would have produced. Probes consult the overlay
    before the real filesystem, so a decision taken later in the same run
    (is a backup needed? is the block already there?) matches what a real
    run would decide. The content of a fresh ``git clone`` is unknowable
    and is not simulated.
    """

    dry_run = True

    def __init__(self, reporter: Reporter):
        super().__init__()
        self.reporter = reporter
        self._files: Dict[str, Optional[bytes]] = {}
        self._dirs: Set[str] = set()
        self._removed: Set[Path] = set()

    # ------------------------------------------------------------
    # Executor
    # ------------------------------------------------------------

    def execute(self, action: Action) -> ActionResult:
        description = action.describe()
        self.journal.append(description)
        logger.info(f"[dry-run] {description}")
        self.reporter.say(f"[dry-run] {description}")
        self._simulate(action)
        return ActionResult(action=action, performed=False)

    def exists(self, path: PathLike) -> bool:
        key = self._key(path)
        if key in self._files:
            return self._files[key] is not None
        if key in self._dirs:
            return True
        if self._is_removed(path):
            return False
        return Path(path).exists()

    def is_dir(self, path: PathLike) -> bool:
        key = self._key(path)
        if key in self._dirs:
            return True
        if key in self._files or self._is_removed(path):
            return False
        return Path(path).is_dir()

    def read_bytes(self, path: PathLike) -> Optional[bytes]:
        key = self._key(path)
        if key in self._files:
            return self._files[key]
        if self._is_removed(path):
            return None
        try:
            return Path(path).read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None

    # ------------------------------------------------------------
    # Overlay
    # ------------------------------------------------------------

    @staticmethod
    def _key(path: PathLike) -> str:
        return str(Path(path))

    def _is_removed(self, path: PathLike) -> bool:
        p = Path(path)
        return any(p == r or r in p.parents for r in self._removed)

    def _mark_dir(self, path: Path) -> None:
        for p in (path, *path.parents):
            self._dirs.add(self._key(p))

    def _put(self, path: Path, data: Optional[bytes]) -> None:
        self._files[self._key(path)] = data
        if data is not None:
            self._mark_dir(path.parent)

    def _simulate(self, action: Action) -> None:
        if isinstance(action, MakeDirs):
            self._mark_dir(action.path)
        elif isinstance(action, WriteFile):
            self._put(action.path, action.content.encode("utf-8"))
        elif isinstance(action, CopyFile):
            self._put(action.dest, self.read_bytes(action.source) or b"")
        elif isinstance(action, MoveFile):
            self._put(action.dest, self.read_bytes(action.source))
            self._files[self._key(action.source)] = None
        elif isinstance(action, CopyTree):
            self._mark_dir(action.dest)
            if action.source.is_dir():
                for item in action.source.rglob("*"):
                    rel = item.relative_to(action.source)
                    if item.is_dir():
                        self._mark_dir(action.dest / rel)
                    elif item.is_file():
                        self._put(action.dest / rel, self.read_bytes(item))
        elif isinstance(action, RemoveTree):
            self._removed.add(action.path)
            prefix = self._key(action.path)
            for key in list(self._files):
                if key == prefix or key.startswith(prefix + "/"):
                    del self._files[key]
            self._dirs = {d for d in self._dirs if not (d == prefix or d.startswith(prefix + "/"))}
        elif isinstance(action, SubstituteInFile):
            text = self.read_text(action.path)
            if text is not None:
                self._put(action.path, action.render(text).encode("utf-8"))
