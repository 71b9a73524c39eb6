"""
Phase optimize: microcode, zram, journald, sysctl, pacman/makepkg tuning,
maintenance timers, systemd-oomd
"""
from typing import List

from ....core.actions import SubstitutionRule
from ..context import PhaseContext
from ..packages import enable_service, pacman_install
from ..templates import JOURNALD_CONF, OOMD_CONF, ZRAM_CONF, sysctl_conf

DROPIN_NAME = "90-alpi.conf"


def pacman_conf_rules() -> List[SubstitutionRule]:
    # pacman.conf is sectioned; appending would land in the last repo section
    return [
        SubstitutionRule(r"#?Color", "Color", append_if_missing=False),
        SubstitutionRule(r"#?VerbosePkgLists", "VerbosePkgLists", append_if_missing=False),
        SubstitutionRule(r"#?ParallelDownloads\s*=.*", "ParallelDownloads = 10", append_if_missing=False),
    ]


def makepkg_conf_rules(cores: int) -> List[SubstitutionRule]:
    return [
        SubstitutionRule(r"#?MAKEFLAGS=.*", f'MAKEFLAGS="-j{cores}"'),
        SubstitutionRule(r"#?COMPRESSXZ=.*", "COMPRESSXZ=(xz -c -T0 -z -)"),
        SubstitutionRule(r"#?COMPRESSZST=.*", "COMPRESSZST=(zstd -c -T0 -z -q -19 -)"),
    ]


def _write_dropin(ctx: PhaseContext, directory: str, content: str) -> None:
    target_dir = ctx.paths.etc / directory
    ctx.executor.make_dirs(target_dir, privileged=True)
    ctx.executor.write_text(target_dir / DROPIN_NAME, content, privileged=True)


def _install_microcode(ctx: PhaseContext) -> None:
    vendor = ctx.probe.cpu_vendor()
    if "Intel" in vendor:
        ctx.reporter.say("Installing Intel microcode...")
        pacman_install(ctx, ["intel-ucode"])
    elif "AMD" in vendor:
        ctx.reporter.say("Installing AMD microcode...")
        pacman_install(ctx, ["amd-ucode"])
    else:
        ctx.reporter.warn(f"Unknown CPU vendor ({vendor}) - skipping microcode")


def _tune_package_manager(ctx: PhaseContext) -> None:
    etc = ctx.paths.etc

    pacman_conf = etc / "pacman.conf"
    if ctx.executor.exists(pacman_conf):
        ctx.reporter.say("Tuning pacman.conf...")
        ctx.executor.substitute(pacman_conf, pacman_conf_rules(), privileged=True)
    else:
        ctx.reporter.warn(f"{pacman_conf} not found - skipping")

    makepkg_conf = etc / "makepkg.conf"
    if ctx.executor.exists(makepkg_conf):
        ctx.reporter.say("Tuning makepkg.conf...")
        ctx.executor.substitute(makepkg_conf, makepkg_conf_rules(ctx.probe.cpu_count()), privileged=True)
    else:
        ctx.reporter.warn(f"{makepkg_conf} not found - skipping")


def run_optimize(ctx: PhaseContext) -> None:
    _install_microcode(ctx)
    pacman_install(ctx, ["linux-firmware"])

    ctx.reporter.say("Configuring zram swap...")
    pacman_install(ctx, ["zram-generator"])
    _write_dropin(ctx, "systemd/zram-generator.conf.d", ZRAM_CONF)
    enable_service(ctx, "systemd-zram-setup@zram0.service", optional=True)

    ctx.reporter.say("Limiting journald size...")
    _write_dropin(ctx, "systemd/journald.conf.d", JOURNALD_CONF)
    ctx.executor.sudo("systemctl", "restart", "systemd-journald")

    qdisc = "cake" if ctx.probe.supports_cake_qdisc() else "fq"
    ctx.reporter.say(f"Applying sysctl tuning (qdisc: {qdisc})...")
    _write_dropin(ctx, "sysctl.d", sysctl_conf(qdisc))
    ctx.executor.sudo("sysctl", "--system")

    _tune_package_manager(ctx)

    ctx.reporter.say("Enabling maintenance timers...")
    pacman_install(ctx, ["pacman-contrib", "util-linux"])
    enable_service(ctx, "paccache.timer")
    enable_service(ctx, "fstrim.timer")

    ctx.reporter.say("Enabling systemd-oomd...")
    _write_dropin(ctx, "systemd/oomd.conf.d", OOMD_CONF)
    enable_service(ctx, "systemd-oomd.service", optional=True)

    ctx.reporter.ok("Phase optimize done - reboot recommended")
