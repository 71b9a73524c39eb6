"""
Immutable provisioning configuration

Built once at startup (see ``adapters.config.parser.build_config``) and
passed by reference to every component.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from . import constants as c


@dataclass(frozen=True)
class Paths:
    """Filesystem locations used by deployment and verification"""
    home: Path
    config_home: Path
    cache_dir: Path
    suckless_dir: Path
    lookandfeel_dir: Path
    niri_config_dir: Path
    yay_dir: Path
    local_bin: Path
    xinitrc_hooks: Path
    profile: Path
    suckless_prefix: str = c.SUCKLESS_PREFIX
    system_root: Path = Path(c.SYSTEM_ROOT)

    @property
    def etc(self) -> Path:
        return self.system_root / "etc"

    @property
    def xinitrc(self) -> Path:
        return self.home / ".xinitrc"

    @property
    def nvim_config(self) -> Path:
        return self.config_home / "nvim"

    @property
    def autostart(self) -> Path:
        return self.config_home / "autostart"


@dataclass(frozen=True)
class Repositories:
    """Remote sources mirrored into the cache"""
    suckless: str = c.SUCKLESS_REPO
    lookandfeel: str = c.LOOKANDFEEL_REPO
    lookandfeel_branch: Optional[str] = c.LOOKANDFEEL_BRANCH
    niri_config: str = c.NIRI_CONFIG_REPO
    yay: str = c.YAY_REPO
    lazyvim: str = c.LAZYVIM_REPO


@dataclass(frozen=True)
class Packages:
    """Package lists handed to pacman and the AUR helper"""
    core: Tuple[str, ...] = c.PACMAN_CORE
    apps: Tuple[str, ...] = c.PACMAN_APPS
    niri: Tuple[str, ...] = c.PACMAN_NIRI
    suckless_build_deps: Tuple[str, ...] = c.SUCKLESS_BUILD_DEPS
    aur_apps: Tuple[str, ...] = c.AUR_APPS
    aur_niri: Tuple[str, ...] = c.AUR_NIRI


@dataclass(frozen=True)
class ProvisionConfig:
    """Everything a run needs to know that is not a CLI flag"""
    paths: Paths
    repos: Repositories = field(default_factory=Repositories)
    packages: Packages = field(default_factory=Packages)
    palette: Mapping[str, str] = field(default_factory=lambda: dict(c.PALETTE))
    components: Tuple[str, ...] = c.SUCKLESS_COMPONENTS
    dotfiles: Tuple[str, ...] = c.DOTFILES
    config_dirs: Tuple[str, ...] = c.CONFIG_DIRS
    jobs: Optional[int] = None


def palette_color(config: ProvisionConfig, name: str) -> str:
    palette: Dict[str, str] = dict(config.palette)
    return palette.get(name, c.PALETTE[name])
