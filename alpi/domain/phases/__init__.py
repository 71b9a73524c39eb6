"""
Phase domain module
"""
from .models import (
    Phase,
    PhaseId,
    PhaseOutcome,
    PhaseStatus,
    RunFilter,
    RunResult,
)
from .context import PhaseContext
from .selector import select_phases, plan, unknown_names
from .registry import build_registry, phase_names
from .runner import ProvisionService

__all__ = [
    "Phase",
    "PhaseId",
    "PhaseOutcome",
    "PhaseStatus",
    "RunFilter",
    "RunResult",
    "PhaseContext",
    "select_phases",
    "plan",
    "unknown_names",
    "build_registry",
    "phase_names",
    "ProvisionService",
]
