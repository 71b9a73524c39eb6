"""
Phase niri: niri via AUR, waybar and the Wayland stack
"""
from ....core.constants import WAYLAND_ENV_BLOCK
from ...sync import SyncTarget, deploy_file, deploy_scripts, sync_mirror, upsert_text_block
from ..context import PhaseContext
from ..packages import aur_install, enable_service, pacman_install
from ..templates import POLKIT_AUTOSTART, WAYLAND_ENV

# (path in the config repo, path under $XDG_CONFIG_HOME)
CONFIG_FILES = (
    ("niri/config.kdl", "niri/config.kdl"),
    ("waybar/config", "waybar/config"),
    ("waybar/style.css", "waybar/style.css"),
    ("foot/foot.ini", "foot/foot.ini"),
    ("wofi/style.css", "wofi/style.css"),
    ("environment.d/10-theme.conf", "environment.d/10-theme.conf"),
)


def _deploy_configs(ctx: PhaseContext) -> None:
    repo = ctx.paths.niri_config_dir
    config_home = ctx.paths.config_home

    ctx.reporter.say("Deploying niri configs...")
    for src, dest in CONFIG_FILES:
        deploy_file(ctx.executor, ctx.reporter, repo / src, config_home / dest)

    deploy_scripts(ctx.executor, ctx.reporter, repo / "waybar/scripts", config_home / "waybar/scripts", "*.sh")

    ctx.reporter.say("Deploying local/bin scripts...")
    deploy_scripts(ctx.executor, ctx.reporter, repo / "local/bin", ctx.paths.local_bin)


def run_niri(ctx: PhaseContext) -> None:
    ctx.reporter.say("Installing Wayland packages from official repos...")
    pacman_install(ctx, ctx.packages.niri)

    # input/video membership is needed by niri with logind
    ctx.executor.sudo("usermod", "-aG", "input,video", ctx.probe.user())
    ctx.reporter.ok("User added to input/video groups")

    ctx.reporter.say("Installing niri via AUR...")
    aur_install(ctx, ctx.packages.aur_niri)
    ctx.reporter.ok("niri installed")

    enable_service(
        ctx, "pipewire", "pipewire-pulse", "wireplumber",
        user=True, optional=True,
        warning="pipewire user service enable failed (non-fatal)",
    )

    ctx.reporter.say("Enabling polkit-gnome autostart...")
    ctx.executor.make_dirs(ctx.paths.autostart)
    ctx.executor.write_text(ctx.paths.autostart / "polkit-gnome.desktop", POLKIT_AUTOSTART)

    ctx.reporter.say("Cloning niri config repo...")
    sync_mirror(ctx.executor, ctx.reporter, SyncTarget(remote=ctx.repos.niri_config, local_path=ctx.paths.niri_config_dir))
    _deploy_configs(ctx)

    ctx.reporter.say("Setting Wayland environment variables in ~/.bash_profile...")
    upsert_text_block(ctx.executor, ctx.paths.profile, WAYLAND_ENV_BLOCK, WAYLAND_ENV)

    ctx.reporter.ok("Phase niri done")
    ctx.reporter.warn("IMPORTANT: Log out and back in for group changes to take effect (input/video)")
