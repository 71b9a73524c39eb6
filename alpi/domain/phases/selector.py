"""
Phase selection by name
"""
from typing import List, Sequence, Tuple

from ...core.logging import get_logger
from ..variant import Variant
from .models import Phase, RunFilter

logger = get_logger(__name__)


def unknown_names(phases: Sequence[Phase], run_filter: RunFilter) -> List[str]:
    """Names in the filter that match no declared phase"""
    known = {p.name for p in phases}
    return sorted((run_filter.include | run_filter.exclude) - known)


def select_phases(phases: Sequence[Phase], run_filter: RunFilter) -> List[Phase]:
    """
    Apply the name filter, preserving declaration order.

    - include non-empty: keep exactly ``include`` ∩ known phases
    - otherwise: all phases minus ``exclude``

    Unknown names are ignored (logged only). The variant gate is not
    applied here; see ``ProvisionService``.
    """
    for name in unknown_names(phases, run_filter):
        logger.warning(f"Ignoring unknown phase name '{name}'")

    ordered = sorted(phases, key=lambda p: p.ordinal)
    return [p for p in ordered if run_filter.matches(p.name)]


def plan(phases: Sequence[Phase], run_filter: RunFilter, variant: Variant) -> List[Tuple[Phase, bool]]:
    """Selected phases paired with whether their gate lets them run"""
    return [(p, p.gate(variant)) for p in select_phases(phases, run_filter)]
