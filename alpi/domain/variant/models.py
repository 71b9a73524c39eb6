"""
Session variant model
"""
from enum import Enum


class Variant(str, Enum):
    """
    Which desktop stack(s) a run provisions.

    - x11:  dwm + suckless tools
    - niri: niri + waybar + Wayland stack
    - both: install everything, choose the session at login
    """
    X11 = "x11"
    NIRI = "niri"
    BOTH = "both"

    @property
    def wants_x11(self) -> bool:
        return self in (Variant.X11, Variant.BOTH)

    @property
    def wants_niri(self) -> bool:
        return self in (Variant.NIRI, Variant.BOTH)

    @classmethod
    def names(cls) -> list[str]:
        return [v.value for v in cls]

    def __str__(self) -> str:
        return self.value


# Menu entries: (tag, description)
VARIANT_CHOICES = [
    (Variant.X11.value, "dwm   · X11 · suckless tools"),
    (Variant.NIRI.value, "niri  · Wayland · waybar · foot · swaylock · wofi"),
    (Variant.BOTH.value, "Both  · Install everything, choose at login"),
]
