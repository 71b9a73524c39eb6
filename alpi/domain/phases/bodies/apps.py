"""
Phase apps: desktop and developer applications
"""
from ..context import PhaseContext
from ..packages import aur_install, pacman_install, try_run


def _bootstrap_lazyvim(ctx: PhaseContext) -> None:
    nvim_dir = ctx.paths.nvim_config
    if ctx.executor.exists(nvim_dir):
        ctx.reporter.info("Neovim config exists - leaving as-is")
        return
    if not ctx.probe.command_exists("nvim"):
        return

    ctx.reporter.step("Bootstrapping LazyVim...")
    ctx.executor.run("git", "clone", "--depth=1", ctx.repos.lazyvim, str(nvim_dir))
    ctx.executor.remove_tree(nvim_dir / ".git")
    try_run(ctx, "nvim", "--headless", "+Lazy! sync", "+qa")
    ctx.reporter.ok("LazyVim installed")


def run_apps(ctx: PhaseContext) -> None:
    ctx.reporter.say(f"Installing pacman packages ({len(ctx.packages.apps)} total)...")
    pacman_install(ctx, ctx.packages.apps)

    ctx.reporter.say(f"Installing AUR packages ({len(ctx.packages.aur_apps)} total)...")
    aur_install(ctx, ctx.packages.aur_apps)

    _bootstrap_lazyvim(ctx)

    ctx.reporter.ok("Phase apps done")
