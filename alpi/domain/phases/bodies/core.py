"""
Phase core: system upgrade, base packages, Btrfs snapshots, services
"""
from ....core.actions import SubstitutionRule
from ....core.exceptions import CommandError, DeployError
from ..context import PhaseContext
from ..packages import enable_service, pacman_install, pacman_upgrade, try_run
from ..templates import SNAPPER_TIMELINE_LIMITS


def _setup_snapper(ctx: PhaseContext) -> None:
    fstype = ctx.probe.root_fstype()
    if fstype != "btrfs":
        ctx.reporter.warn(f"Root is not Btrfs ({fstype}) - skipping Snapper")
        return

    ctx.reporter.say("Btrfs detected - setting up Snapper...")
    pacman_install(ctx, ["snapper", "snap-pac"])
    has_grub = ctx.probe.command_exists("grub-mkconfig")
    if has_grub:
        pacman_install(ctx, ["grub-btrfs"])

    if not ctx.executor.exists(ctx.paths.system_root / ".snapshots"):
        ctx.executor.sudo("snapper", "-c", "root", "create-config", "/")
        rules = [
            SubstitutionRule(rf"{key}=.*", f'{key}="{value}"', append_if_missing=False)
            for key, value in SNAPPER_TIMELINE_LIMITS
        ]
        try:
            ctx.executor.substitute(ctx.paths.etc / "snapper/configs/root", rules, privileged=True)
        except (CommandError, DeployError) as e:
            ctx.reporter.warn(f"Snapper timeline limits not applied: {e}")
    else:
        ctx.reporter.info("Snapper root config already exists")

    if has_grub:
        enable_service(ctx, "grub-btrfsd.service", optional=True)
        try_run(
            ctx, "sudo", "grub-mkconfig", "-o", "/boot/grub/grub.cfg",
            warning="grub-mkconfig failed (non-fatal)",
        )
    ctx.reporter.ok("Snapper configured")


def run_core(ctx: PhaseContext) -> None:
    ctx.reporter.say("Syncing & upgrading system...")
    pacman_upgrade(ctx)

    ctx.reporter.say("Installing core packages...")
    pacman_install(ctx, ctx.packages.core)

    _setup_snapper(ctx)

    ctx.reporter.say("Enabling services...")
    enable_service(ctx, "NetworkManager")
    enable_service(ctx, "tailscaled", optional=True, warning="tailscaled enable failed")
    enable_service(ctx, "ufw", optional=True)

    # ufw is part of the core package set installed above
    try_run(ctx, "sudo", "ufw", "default", "deny", "incoming")
    try_run(ctx, "sudo", "ufw", "default", "allow", "outgoing")
    try_run(ctx, "sudo", "ufw", "enable")

    ctx.reporter.ok("Phase core done")
