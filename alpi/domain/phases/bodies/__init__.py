"""
Phase bodies
"""
from .core import run_core
from .suckless import run_suckless
from .niri import run_niri
from .lookandfeel import run_lookandfeel
from .apps import run_apps
from .optimize import run_optimize

__all__ = [
    "run_core",
    "run_suckless",
    "run_niri",
    "run_lookandfeel",
    "run_apps",
    "run_optimize",
]
