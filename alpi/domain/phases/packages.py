"""
Package manager, service and build helpers shared by phase bodies
"""
from typing import Optional, Sequence

from ...core.exceptions import CommandError
from ...core.logging import get_logger
from ..sync import SyncTarget, sync_mirror
from .context import PhaseContext

logger = get_logger(__name__)

AUR_HELPER = "yay"


# ============================================================
# pacman / AUR
# ============================================================

def pacman_upgrade(ctx: PhaseContext) -> None:
    ctx.executor.sudo("pacman", "-Syu", "--noconfirm")


def pacman_install(ctx: PhaseContext, packages: Sequence[str]) -> None:
    """Bulk install; already satisfied packages are skipped by pacman"""
    if not packages:
        return
    ctx.executor.sudo("pacman", "-S", "--needed", "--noconfirm", *packages)


def ensure_aur_helper(ctx: PhaseContext) -> None:
    """Bootstrap yay from the AUR once per run"""
    if AUR_HELPER in ctx.ensured:
        return

    if ctx.probe.command_exists(AUR_HELPER):
        ctx.reporter.info(f"{AUR_HELPER} already installed")
    else:
        ctx.reporter.step(f"Installing {AUR_HELPER} (AUR helper)")
        target = SyncTarget(remote=ctx.repos.yay, local_path=ctx.paths.yay_dir)
        sync_mirror(ctx.executor, ctx.reporter, target)
        ctx.executor.run("makepkg", "-sif", "--noconfirm", cwd=ctx.paths.yay_dir)
        ctx.reporter.ok(f"{AUR_HELPER} installed")

    ctx.ensured.add(AUR_HELPER)


def aur_install(ctx: PhaseContext, packages: Sequence[str]) -> None:
    if not packages:
        return
    ensure_aur_helper(ctx)
    ctx.executor.run(AUR_HELPER, "-S", "--needed", "--noconfirm", *packages)


# ============================================================
# Commands allowed to fail
# ============================================================

def try_run(ctx: PhaseContext, *argv: str, warning: Optional[str] = None) -> bool:
    """
    Run a non-critical command.

    A failure is downgraded to a warning (or to a debug log line when no
    warning text is given) and the run continues.
    """
    try:
        ctx.executor.run(*argv)
        return True
    except CommandError as e:
        if warning:
            ctx.reporter.warn(warning)
        logger.debug(f"[optional] {e}")
        return False


def enable_service(
    ctx: PhaseContext,
    *units: str,
    user: bool = False,
    optional: bool = False,
    warning: Optional[str] = None,
) -> bool:
    """
    ``systemctl enable --now`` one or more units.

    System units go through sudo, user units through ``systemctl --user``.
    Optional units only warn on failure.
    """
    argv = ["systemctl", "--user"] if user else ["sudo", "systemctl"]
    argv += ["enable", "--now", *units]
    if optional:
        return try_run(ctx, *argv, warning=warning)
    ctx.executor.run(*argv)
    return True


# ============================================================
# Source builds
# ============================================================

def build_component(ctx: PhaseContext, name: str) -> bool:
    """
    ``make clean && make -jN && sudo make PREFIX=... install`` in the
    component directory; a missing directory is a warning, not an error.
    """
    src = ctx.paths.suckless_dir / name
    if not ctx.executor.is_dir(src):
        ctx.reporter.warn(f"{name} not found in {ctx.paths.suckless_dir} - skipping")
        return False

    ctx.reporter.say(f"Building {name}...")
    ctx.executor.run("make", "clean", cwd=src)
    ctx.executor.run("make", f"-j{ctx.jobs}", cwd=src)
    ctx.executor.sudo("make", f"PREFIX={ctx.paths.suckless_prefix}", "install", cwd=src)
    ctx.reporter.ok(f"{name} installed")
    return True
