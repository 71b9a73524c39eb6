"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from .actions import (
    Action,
    ActionResult,
    CopyFile,
    CopyTree,
    MakeDirs,
    MoveFile,
    RemoveTree,
    RunCommand,
    SubstituteInFile,
    SubstitutionRule,
    WriteFile,
)

PathLike = Union[str, Path]


class Reporter(ABC):
    """Colour-coded status lines for the user"""

    @abstractmethod
    def say(self, message: str) -> None:
        """Neutral progress line"""
        pass

    @abstractmethod
    def step(self, message: str) -> None:
        """Phase header line"""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        """Informational line"""
        pass

    @abstractmethod
    def ok(self, message: str) -> None:
        """Success line"""
        pass

    @abstractmethod
    def warn(self, message: str) -> None:
        """Recoverable problem"""
        pass

    @abstractmethod
    def fail(self, message: str) -> None:
        """Fatal problem"""
        pass


class PromptProvider(ABC):
    """User prompt interface"""

    @abstractmethod
    def prompt(self, message: str, default: Optional[str] = None) -> str:
        """Ask for one line of input"""
        pass


class MenuFrontend(ABC):
    """Full-screen menu front-end (e.g. whiptail)"""

    @abstractmethod
    def available(self) -> bool:
        """Whether the front-end can be shown on this terminal"""
        pass

    @abstractmethod
    def choose(self, title: str, text: str, choices: Sequence[Tuple[str, str]]) -> Optional[str]:
        """Show a menu; return the selected tag, or None when cancelled"""
        pass


class Executor(ABC):
    """
    Single chokepoint for every state-mutating action.

    Implementations decide whether an action is performed or only
    previewed. Read-side probes are part of the interface so a preview
    sees the state its own earlier actions would have produced.
    """

    dry_run: bool = False

    def __init__(self) -> None:
        self.journal: list[str] = []

    @abstractmethod
    def execute(self, action: Action) -> ActionResult:
        """Perform (or preview) an action"""
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Whether a file or directory exists"""
        pass

    @abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """Whether a directory exists"""
        pass

    @abstractmethod
    def read_bytes(self, path: PathLike) -> Optional[bytes]:
        """File content, or None when the file does not exist"""
        pass

    # ------------------------------------------------------------
    # Convenience helpers (all route through execute)
    # ------------------------------------------------------------

    def read_text(self, path: PathLike) -> Optional[str]:
        data = self.read_bytes(path)
        if data is None:
            return None
        return data.decode("utf-8", errors="replace")

    def run(
        self,
        *argv: str,
        cwd: Optional[PathLike] = None,
        input_text: Optional[str] = None,
    ) -> ActionResult:
        return self.execute(RunCommand(
            argv=tuple(argv),
            cwd=str(cwd) if cwd is not None else None,
            input_text=input_text,
        ))

    def sudo(self, *argv: str, cwd: Optional[PathLike] = None) -> ActionResult:
        return self.run("sudo", *argv, cwd=cwd)

    def make_dirs(self, path: PathLike, privileged: bool = False) -> ActionResult:
        return self.execute(MakeDirs(path=Path(path), privileged=privileged))

    def write_text(
        self,
        path: PathLike,
        content: str,
        mode: Optional[int] = None,
        privileged: bool = False,
    ) -> ActionResult:
        return self.execute(WriteFile(path=Path(path), content=content, mode=mode, privileged=privileged))

    def copy_file(self, source: PathLike, dest: PathLike, mode: int) -> ActionResult:
        return self.execute(CopyFile(source=Path(source), dest=Path(dest), mode=mode))

    def move(self, source: PathLike, dest: PathLike) -> ActionResult:
        return self.execute(MoveFile(source=Path(source), dest=Path(dest)))

    def copy_tree(self, source: PathLike, dest: PathLike) -> ActionResult:
        return self.execute(CopyTree(source=Path(source), dest=Path(dest)))

    def remove_tree(self, path: PathLike) -> ActionResult:
        return self.execute(RemoveTree(path=Path(path)))

    def substitute(
        self,
        path: PathLike,
        rules: Sequence[SubstitutionRule],
        privileged: bool = False,
    ) -> ActionResult:
        return self.execute(SubstituteInFile(path=Path(path), rules=tuple(rules), privileged=privileged))
