"""
Phase domain models
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, TYPE_CHECKING

from ...core.utils import parse_csv
from ..variant import Variant

if TYPE_CHECKING:
    from .context import PhaseContext


class PhaseId(str, Enum):
    """Phase identifiers, in execution order"""
    CORE = "core"
    SUCKLESS = "suckless"
    NIRI = "niri"
    LOOKANDFEEL = "lookandfeel"
    APPS = "apps"
    OPTIMIZE = "optimize"

    def __str__(self) -> str:
        return self.value


Gate = Callable[[Variant], bool]
Body = Callable[["PhaseContext"], None]


def always(variant: Variant) -> bool:
    return True


def wants_x11(variant: Variant) -> bool:
    return variant.wants_x11


def wants_niri(variant: Variant) -> bool:
    return variant.wants_niri


@dataclass(frozen=True)
class Phase:
    """
    One ordered unit of a provisioning run.

    ``gate`` is evaluated when the phase is about to run, not when phases
    are selected by name.
    """
    id: PhaseId
    ordinal: int
    title: str
    gate: Gate
    body: Body

    @property
    def name(self) -> str:
        return self.id.value

    @property
    def variant_gated(self) -> bool:
        return self.gate is not always


@dataclass(frozen=True)
class RunFilter:
    """
    Name filter from ``--only`` / ``--skip``.

    A non-empty ``include`` is the sole source of truth and ``exclude`` is
    ignored. Unknown names simply never match.
    """
    include: FrozenSet[str] = frozenset()
    exclude: FrozenSet[str] = frozenset()

    @classmethod
    def from_csv(cls, only: Optional[str] = None, skip: Optional[str] = None) -> "RunFilter":
        return cls(include=parse_csv(only), exclude=parse_csv(skip))

    def matches(self, name: str) -> bool:
        if self.include:
            return name in self.include
        return name not in self.exclude


class PhaseStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED_VARIANT = "skipped-variant"


@dataclass(frozen=True)
class PhaseOutcome:
    phase: str
    status: PhaseStatus


@dataclass
class RunResult:
    """What a provisioning run did"""
    variant: Variant
    dry_run: bool
    outcomes: List[PhaseOutcome] = field(default_factory=list)

    @property
    def ran_phases(self) -> List[str]:
        return [o.phase for o in self.outcomes if o.status == PhaseStatus.COMPLETED]

    @property
    def skipped_phases(self) -> List[str]:
        return [o.phase for o in self.outcomes if o.status == PhaseStatus.SKIPPED_VARIANT]
