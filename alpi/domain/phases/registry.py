"""
The fixed, ordered phase table
"""
from typing import Tuple

from .bodies import run_apps, run_core, run_lookandfeel, run_niri, run_optimize, run_suckless
from .models import Phase, PhaseId, always, wants_niri, wants_x11


def build_registry() -> Tuple[Phase, ...]:
    return (
        Phase(PhaseId.CORE, 1, "Core system", always, run_core),
        Phase(PhaseId.SUCKLESS, 2, "Suckless (X11)", wants_x11, run_suckless),
        Phase(PhaseId.NIRI, 3, "Niri (Wayland)", wants_niri, run_niri),
        Phase(PhaseId.LOOKANDFEEL, 4, "Look & feel", always, run_lookandfeel),
        Phase(PhaseId.APPS, 5, "Applications", always, run_apps),
        Phase(PhaseId.OPTIMIZE, 6, "System optimisation", always, run_optimize),
    )


def phase_names() -> Tuple[str, ...]:
    return tuple(p.name for p in build_registry())
