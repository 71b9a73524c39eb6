"""
Phase suckless: build and install dwm, st, dmenu, slock, slstatus (X11)
"""
from ....core.config import palette_color
from ....core.constants import DATA_MODE, EXEC_MODE
from ...sync import SyncTarget, sync_mirror
from ..context import PhaseContext
from ..packages import build_component, pacman_install
from ..templates import HOOK_SUCKLESS, xinitrc


def run_suckless(ctx: PhaseContext) -> None:
    paths = ctx.paths
    pacman_install(ctx, ctx.packages.suckless_build_deps)

    sync_mirror(ctx.executor, ctx.reporter, SyncTarget(remote=ctx.repos.suckless, local_path=paths.suckless_dir))

    for component in ctx.config.components:
        build_component(ctx, component)

    ctx.executor.make_dirs(paths.xinitrc_hooks)

    if not ctx.executor.exists(paths.xinitrc):
        ctx.reporter.warn("~/.xinitrc not found - writing minimal bootstrap")
        ctx.executor.write_text(
            paths.xinitrc,
            xinitrc(palette_color(ctx.config, "bg"), paths.suckless_prefix),
            mode=DATA_MODE,
        )
    else:
        ctx.reporter.info("~/.xinitrc exists - not touched")

    ctx.reporter.say("Writing xinitrc hook 40-suckless.sh...")
    ctx.executor.write_text(paths.xinitrc_hooks / "40-suckless.sh", HOOK_SUCKLESS, mode=EXEC_MODE)

    ctx.reporter.ok("Phase suckless done")
