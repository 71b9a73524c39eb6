"""
Phase lookandfeel: dotfiles, configs, scripts, profile blocks, xinitrc hooks
"""
from ....core.constants import ENV_BLOCK, EXEC_MODE, SESSION_SELECTOR_BLOCK
from ...sync import SyncTarget, deploy_file, deploy_scripts, deploy_tree, sync_mirror, upsert_text_block
from ..context import PhaseContext
from ..templates import HOOK_LOOKANDFEEL, HOOK_STATUSBAR, PROFILE_ENV, session_selector


def run_lookandfeel(ctx: PhaseContext) -> None:
    paths = ctx.paths
    ex = ctx.executor

    ex.make_dirs(paths.local_bin)
    ex.make_dirs(paths.xinitrc_hooks)

    target = SyncTarget(
        remote=ctx.repos.lookandfeel,
        local_path=paths.lookandfeel_dir,
        branch=ctx.repos.lookandfeel_branch,
    )
    sync_mirror(ex, ctx.reporter, target)
    repo = paths.lookandfeel_dir

    ctx.reporter.say("Deploying dotfiles...")
    for name in ctx.config.dotfiles:
        deploy_file(ex, ctx.reporter, repo / "dotfiles" / name, paths.home / name)

    ctx.reporter.say("Deploying config files...")
    for name in ctx.config.config_dirs:
        deploy_tree(ex, ctx.reporter, repo / "config" / name, paths.config_home / name)

    ctx.reporter.say("Deploying scripts to ~/.local/bin...")
    deploy_scripts(ex, ctx.reporter, repo / "local/bin", paths.local_bin, "*.sh")

    if ex.is_dir(repo / "local/share"):
        ctx.reporter.say("Deploying local/share...")
        deploy_tree(ex, ctx.reporter, repo / "local/share", paths.home / ".local/share")

    upsert_text_block(ex, paths.profile, ENV_BLOCK, PROFILE_ENV)

    ctx.reporter.say("Writing session selector to ~/.bash_profile...")
    upsert_text_block(ex, paths.profile, SESSION_SELECTOR_BLOCK, session_selector(ctx.variant))
    ctx.reporter.ok(f"~/.bash_profile: session selector written ({ctx.variant})")

    if ctx.variant.wants_x11:
        ctx.reporter.say("Writing xinitrc hook 20-lookandfeel.sh...")
        ex.write_text(paths.xinitrc_hooks / "20-lookandfeel.sh", HOOK_LOOKANDFEEL, mode=EXEC_MODE)
        ctx.reporter.say("Writing xinitrc hook 30-statusbar.sh...")
        ex.write_text(paths.xinitrc_hooks / "30-statusbar.sh", HOOK_STATUSBAR, mode=EXEC_MODE)

    ctx.reporter.ok("Phase lookandfeel done")
