import stat

import pytest

from alpi.core.actions import SubstituteInFile, WriteFile, apply_rules
from alpi.core.exceptions import CommandError
from alpi.domain.phases.bodies import run_apps, run_core, run_lookandfeel, run_optimize, run_suckless
from alpi.domain.phases.bodies.optimize import makepkg_conf_rules, pacman_conf_rules
from alpi.domain.phases.packages import aur_install, enable_service
from alpi.domain.phases.templates import session_selector
from alpi.domain.variant import Variant
from conftest import StubCommandExecutor


def mode_of(path):
    return stat.S_IMODE(path.stat().st_mode)


# ============================================================
# Packages and services
# ============================================================

def test_aur_helper_bootstrapped_once(make_context, executor):
    ctx = make_context(executor)
    aur_install(ctx, ["pfetch"])
    aur_install(ctx, ["brave-bin"])

    makepkg = [argv for argv in executor.commands if argv[0] == "makepkg"]
    assert makepkg == [("makepkg", "-sif", "--noconfirm")]
    assert executor.cwds[makepkg[0]] == str(ctx.paths.yay_dir)
    assert ("yay", "-S", "--needed", "--noconfirm", "brave-bin") in executor.commands


def test_aur_helper_not_rebuilt_when_present(make_context, executor, probe):
    probe.commands.add("yay")
    aur_install(make_context(executor), ["pfetch"])
    assert not executor.ran("makepkg")


def test_optional_service_failure_warns(make_context, reporter):
    executor = StubCommandExecutor(fail_on=[("sudo", "systemctl", "enable", "--now", "ufw")])
    ok = enable_service(make_context(executor), "ufw", optional=True, warning="ufw enable failed")
    assert ok is False
    assert "ufw enable failed" in reporter.messages("warn")


def test_user_services_use_systemctl_user(make_context, executor):
    enable_service(make_context(executor), "pipewire", "wireplumber", user=True)
    assert executor.commands == [("systemctl", "--user", "enable", "--now", "pipewire", "wireplumber")]


# ============================================================
# core
# ============================================================

def test_core_without_btrfs_skips_snapper(make_context, executor, reporter):
    run_core(make_context(executor))
    assert executor.commands[0] == ("sudo", "pacman", "-Syu", "--noconfirm")
    assert not executor.ran("sudo", "snapper")
    assert any("not Btrfs" in m for m in reporter.messages("warn"))
    assert executor.ran("sudo", "systemctl", "enable", "--now", "NetworkManager")


def test_core_on_btrfs_with_grub(make_context, probe, reporter, config):
    probe.fstype = "btrfs"
    probe.commands.add("grub-mkconfig")
    executor = StubCommandExecutor(fail_on=[("sudo", "grub-mkconfig")])

    run_core(make_context(executor))

    assert executor.ran("sudo", "pacman", "-S", "--needed", "--noconfirm", "snapper", "snap-pac")
    assert executor.ran("sudo", "pacman", "-S", "--needed", "--noconfirm", "grub-btrfs")
    assert executor.ran("sudo", "snapper", "-c", "root", "create-config", "/")
    edits = [a for a in executor.privileged if isinstance(a, SubstituteInFile)]
    assert edits[0].path == config.paths.etc / "snapper/configs/root"
    assert "grub-mkconfig failed (non-fatal)" in reporter.messages("warn")


def test_core_snapper_limits_failure_warns(make_context, probe, reporter):
    class DeniedEdits(StubCommandExecutor):
        def execute(self, action):
            if isinstance(action, SubstituteInFile):
                raise CommandError(["sudo", "cat", str(action.path)], 1)
            return super().execute(action)

    probe.fstype = "btrfs"
    run_core(make_context(DeniedEdits()))
    assert any(m.startswith("Snapper timeline limits not applied") for m in reporter.messages("warn"))


def test_core_existing_snapshots_not_reconfigured(make_context, probe, executor, config):
    probe.fstype = "btrfs"
    (config.paths.system_root / ".snapshots").mkdir()
    run_core(make_context(executor))
    assert not executor.ran("sudo", "snapper")


def test_core_network_manager_failure_is_fatal(make_context):
    executor = StubCommandExecutor(fail_on=[("sudo", "systemctl", "enable", "--now", "NetworkManager")])
    with pytest.raises(CommandError):
        run_core(make_context(executor))


# ============================================================
# suckless
# ============================================================

def test_suckless_builds_present_components(make_context, executor, reporter, config):
    dwm = config.paths.suckless_dir / "dwm"
    dwm.mkdir(parents=True)
    (config.paths.suckless_dir / ".git").mkdir()

    run_suckless(make_context(executor, Variant.X11, jobs=6))

    assert executor.commands.count(("make", "clean")) == 1
    assert executor.cwds[("make", "-j6")] == str(dwm)
    assert executor.ran("sudo", "make", "PREFIX=/usr/local", "install")
    assert any("st not found" in m for m in reporter.messages("warn"))

    xinitrc = config.paths.home / ".xinitrc"
    assert "/usr/local/bin/dwm" in xinitrc.read_text()
    assert mode_of(xinitrc) == 0o644
    assert mode_of(config.paths.xinitrc_hooks / "40-suckless.sh") == 0o755


def test_suckless_keeps_existing_xinitrc(make_context, executor, config):
    xinitrc = config.paths.home / ".xinitrc"
    xinitrc.write_text("exec mywm\n")
    run_suckless(make_context(executor, Variant.X11))
    assert xinitrc.read_text() == "exec mywm\n"


# ============================================================
# lookandfeel
# ============================================================

def test_lookandfeel_deploys_from_mirror(make_context, executor, config, reporter):
    repo = config.paths.lookandfeel_dir
    (repo / ".git").mkdir(parents=True)
    (repo / "dotfiles").mkdir()
    (repo / "dotfiles" / ".bashrc").write_text("alias ll='ls -l'\n")
    (repo / "config" / "picom").mkdir(parents=True)
    (repo / "config" / "picom" / "picom.conf").write_text("backend = \"glx\";\n")
    (repo / "local" / "bin").mkdir(parents=True)
    (repo / "local" / "bin" / "wallrotate.sh").write_text("#!/bin/sh\n")

    run_lookandfeel(make_context(executor, Variant.X11))

    home = config.paths.home
    assert executor.ran("git", "-C", str(repo), "checkout", "main")
    assert (home / ".bashrc").read_text() == "alias ll='ls -l'\n"
    assert (config.paths.config_home / "picom" / "picom.conf").exists()
    assert mode_of(config.paths.local_bin / "wallrotate.sh") == 0o755
    assert (config.paths.xinitrc_hooks / "20-lookandfeel.sh").exists()
    assert "session selector written (x11)" in " ".join(reporter.messages("ok"))


def test_lookandfeel_niri_writes_no_x11_hooks(make_context, executor, config):
    run_lookandfeel(make_context(executor, Variant.NIRI))
    assert not (config.paths.xinitrc_hooks / "20-lookandfeel.sh").exists()
    assert "start-niri" in config.paths.profile.read_text()


@pytest.mark.parametrize("variant,present,absent", [
    (Variant.BOTH, ["exec startx", "start-niri", "3)"], []),
    (Variant.X11, ["exec startx"], ["start-niri"]),
    (Variant.NIRI, ["start-niri"], ["exec startx"]),
])
def test_session_selector_per_variant(variant, present, absent):
    text = session_selector(variant)
    assert text.startswith("if [ -z \"$DISPLAY\" ]")
    for needle in present:
        assert needle in text
    for needle in absent:
        assert needle not in text


# ============================================================
# apps
# ============================================================

def test_apps_bootstraps_lazyvim(make_context, executor, probe, config):
    probe.commands.add("nvim")
    run_apps(make_context(executor))
    nvim = config.paths.config_home / "nvim"
    assert executor.ran("git", "clone", "--depth=1", config.repos.lazyvim, str(nvim))
    assert executor.ran("nvim", "--headless")


def test_apps_leaves_existing_nvim_config(make_context, executor, probe, config):
    probe.commands.update({"nvim", "yay"})
    (config.paths.config_home / "nvim").mkdir(parents=True)
    run_apps(make_context(executor))
    assert not executor.ran("git", "clone")


# ============================================================
# optimize
# ============================================================

def test_optimize_writes_dropins_and_tunes(make_context, executor, probe, config, reporter):
    probe.vendor = "AuthenticAMD"
    probe.cake = True
    etc = config.paths.etc
    (etc / "pacman.conf").write_text("[options]\n#Color\n")

    run_optimize(make_context(executor))

    assert executor.ran("sudo", "pacman", "-S", "--needed", "--noconfirm", "amd-ucode")
    writes = {a.path: a for a in executor.privileged if isinstance(a, WriteFile)}
    sysctl = writes[etc / "sysctl.d" / "90-alpi.conf"]
    assert "net.core.default_qdisc = cake" in sysctl.content
    assert etc / "systemd/zram-generator.conf.d" / "90-alpi.conf" in writes
    edits = [a.path for a in executor.privileged if isinstance(a, SubstituteInFile)]
    assert edits == [etc / "pacman.conf"]
    assert any("makepkg.conf not found" in m for m in reporter.messages("warn"))
    assert executor.ran("sudo", "systemctl", "enable", "--now", "fstrim.timer")


def test_unknown_cpu_vendor_skips_microcode(make_context, executor, probe, reporter):
    probe.vendor = "unknown"
    run_optimize(make_context(executor))
    assert not executor.ran("sudo", "pacman", "-S", "--needed", "--noconfirm", "intel-ucode")
    assert any("microcode" in m for m in reporter.messages("warn"))


def test_pacman_conf_rules_do_not_append():
    text = "[options]\n#Color\n#ParallelDownloads = 5\n\n[core]\nInclude = /etc/pacman.d/mirrorlist\n"
    result = apply_rules(text, tuple(pacman_conf_rules()))
    assert result.startswith("[options]\nColor\nParallelDownloads = 10\n")
    assert "VerbosePkgLists" not in result
    assert apply_rules(result, tuple(pacman_conf_rules())) == result


def test_makepkg_conf_rules_use_core_count():
    text = "#MAKEFLAGS=\"-j2\"\nCOMPRESSZST=(zstd -c -z -q -)\n"
    result = apply_rules(text, tuple(makepkg_conf_rules(12)))
    assert 'MAKEFLAGS="-j12"' in result
    assert "COMPRESSZST=(zstd -c -T0 -z -q -19 -)" in result
    assert "COMPRESSXZ=(xz -c -T0 -z -)" in result
    assert result.count("MAKEFLAGS") == 1
