"""
alpi - Arch Linux post-install provisioning

Brings a fresh Arch Linux install to a configured desktop by running a
fixed sequence of idempotent phases:
- core: system upgrade, base packages, Btrfs snapshots, services, firewall
- suckless: dwm/st/dmenu/slock/slstatus built from source (X11)
- niri: niri, waybar and the Wayland stack
- lookandfeel: dotfiles, configs, scripts, login session selector
- apps: desktop and developer applications
- optimize: microcode, zram, journald, sysctl, package manager tuning
"""

__version__ = "0.1.0"

# Export core components
from .core import (
    ProvisionConfig,
    Executor,
    Reporter,
    HostProbe,
)

# Export domain models
from .domain.variant import Variant, VariantResolver
from .domain.phases import (
    Phase,
    PhaseId,
    RunFilter,
    RunResult,
    ProvisionService,
    build_registry,
    select_phases,
)
from .domain.sync import SyncTarget, sync_mirror, deploy_file, deploy_tree, upsert_text_block
from .domain.verify import Verifier, VerifyReport

__all__ = [
    # Version
    "__version__",
    # Core
    "ProvisionConfig",
    "Executor",
    "Reporter",
    "HostProbe",
    # Variant
    "Variant",
    "VariantResolver",
    # Phases
    "Phase",
    "PhaseId",
    "RunFilter",
    "RunResult",
    "ProvisionService",
    "build_registry",
    "select_phases",
    # Sync primitives
    "SyncTarget",
    "sync_mirror",
    "deploy_file",
    "deploy_tree",
    "upsert_text_block",
    # Verification
    "Verifier",
    "VerifyReport",
]
