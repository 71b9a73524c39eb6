"""
Installation verification - strictly observational
"""
from pathlib import Path
from typing import Optional

from ...core.config import ProvisionConfig
from ...core.constants import (
    SESSION_SELECTOR_BLOCK,
    VERIFY_ESSENTIAL_COMMANDS,
    VERIFY_FONTS,
    VERIFY_NIRI_COMMANDS,
    VERIFY_SERVICES,
    VERIFY_X11_COMMANDS,
)
from ...core.interfaces import Reporter
from ...core.logging import get_logger
from ...core.system import HostProbe
from ..sync.block_sync import count_blocks
from ..variant import Variant
from .models import CheckResult, CheckStatus, VerifyReport

logger = get_logger(__name__)

NIRI_SCRIPTS = ("start-niri", "niri-wallpaper.sh", "niri-wallpaper-rotate.sh")


class Verifier:
    """
    Checks that what the phases deploy is actually present.

    Required commands and config files fail when absent; services and
    fonts only warn. Nothing is ever written. With an explicit variant,
    sections belonging to the other stack are omitted.
    """

    def __init__(
        self,
        config: ProvisionConfig,
        probe: HostProbe,
        reporter: Reporter,
        variant: Optional[Variant] = None,
    ):
        self.config = config
        self.probe = probe
        self.reporter = reporter
        self.variant = variant
        self._report = VerifyReport()
        self._section = ""

    # ============================================================
    # Recording
    # ============================================================

    def _record(self, label: str, status: CheckStatus, detail: str = "") -> None:
        result = self._report.add(CheckResult(self._section, label, status, detail))
        line = f"{label}: {detail}" if detail else label
        if result.status == CheckStatus.PASS:
            self.reporter.ok(line)
        elif result.status == CheckStatus.WARN:
            self.reporter.warn(line)
        else:
            self.reporter.fail(line)

    def _begin(self, section: str) -> None:
        self._section = section
        self.reporter.info(section)

    # ============================================================
    # Checks
    # ============================================================

    def _check_command(self, name: str, label: Optional[str] = None) -> None:
        path = self.probe.command_path(name)
        if path:
            self._record(label or name, CheckStatus.PASS, path)
        else:
            self._record(label or name, CheckStatus.FAIL, "NOT FOUND")

    def _check_file(self, path: Path, label: str) -> None:
        if path.is_file():
            self._record(label, CheckStatus.PASS)
        else:
            self._record(label, CheckStatus.FAIL, "NOT FOUND")

    def _check_dir(self, path: Path, label: str) -> None:
        if path.is_dir():
            self._record(label, CheckStatus.PASS)
        else:
            self._record(label, CheckStatus.FAIL, "NOT FOUND")

    def _check_service(self, unit: str) -> None:
        if self.probe.service_enabled(unit):
            self._record(f"Service {unit}", CheckStatus.PASS, "enabled")
        else:
            self._record(f"Service {unit}", CheckStatus.WARN, "not enabled")

    def _check_font(self, name: str) -> None:
        if self.probe.font_installed(name):
            self._record(f"Font: {name}", CheckStatus.PASS)
        else:
            self._record(f"Font not found: {name}", CheckStatus.WARN)

    def _check_session_selector(self) -> None:
        profile = self.config.paths.profile
        try:
            text = profile.read_text(errors="replace")
        except OSError:
            text = ""
        # hand-written selectors count as well
        if count_blocks(text, SESSION_SELECTOR_BLOCK) or "niri" in text or "startx" in text:
            self._record("~/.bash_profile: session selector present", CheckStatus.PASS)
        else:
            self._record("~/.bash_profile: no session selector found", CheckStatus.WARN)

    # ============================================================
    # Sections
    # ============================================================

    def _wants_x11(self) -> bool:
        return self.variant is None or self.variant.wants_x11

    def _wants_niri(self) -> bool:
        return self.variant is None or self.variant.wants_niri

    def _verify_x11(self) -> None:
        paths = self.config.paths
        self._begin("X11 - suckless tools")
        for name in VERIFY_X11_COMMANDS:
            self._check_command(name)
        self._check_file(paths.xinitrc, "~/.xinitrc")
        self._check_dir(paths.xinitrc_hooks, "~/.config/xinitrc.d/")

    def _verify_niri(self) -> None:
        paths = self.config.paths
        config_home = paths.config_home
        self._begin("Wayland - niri + tools")
        for name in VERIFY_NIRI_COMMANDS:
            self._check_command(name)
        self._check_file(config_home / "niri/config.kdl", "niri config")
        self._check_file(config_home / "waybar/config", "waybar config")
        self._check_file(config_home / "waybar/style.css", "waybar style")
        self._check_file(config_home / "foot/foot.ini", "foot config")
        self._check_file(config_home / "wofi/style.css", "wofi style")
        for script in NIRI_SCRIPTS:
            self._check_file(paths.local_bin / script, script)

    def verify(self) -> VerifyReport:
        """
        Run every applicable check section.

        Returns:
            VerifyReport with pass/warn/fail counts
        """
        self._report = VerifyReport()

        if self._wants_x11():
            self._verify_x11()
        if self._wants_niri():
            self._verify_niri()

        self._begin("Session selector")
        self._check_session_selector()

        self._begin("Essential tools")
        for name in VERIFY_ESSENTIAL_COMMANDS:
            self._check_command(name)
        self._check_command("tailscale", "Tailscale")

        self._begin("Services")
        for unit in VERIFY_SERVICES:
            self._check_service(unit)

        self._begin("Fonts")
        for font in VERIFY_FONTS:
            self._check_font(font)

        report = self._report
        logger.info(f"[verify] pass={report.passed} warn={report.warnings} fail={report.failures}")
        if report.failures:
            self.reporter.fail(f"FAILED: {report.failures} error(s), {report.warnings} warning(s)")
        elif report.warnings:
            self.reporter.warn(f"Passed with {report.warnings} warning(s)")
        else:
            self.reporter.ok("All checks passed!")
        return report
