"""
Sync domain models
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class SyncTarget:
    """
    A remote git source mirrored into a local working copy.

    The local copy is created on first sync, updated on every later run
    and never deleted by alpi.
    """
    remote: str
    local_path: Path
    branch: Optional[str] = None

    @property
    def name(self) -> str:
        return self.local_path.name


class SyncOutcome(str, Enum):
    CLONED = "cloned"
    UPDATED = "updated"
    STALE = "stale"        # fast-forward failed, existing tree kept


@dataclass
class SyncResult:
    """Mirror sync result"""
    target: SyncTarget
    outcome: SyncOutcome
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


@dataclass(frozen=True)
class TextBlock:
    """
    A named, delimiter-bounded region in a user-owned text file.

    At most one instance of a name exists in the file; writing it again
    replaces the previous instance.
    """
    name: str
    content: str
