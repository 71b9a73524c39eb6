"""
Read-only host probes

Nothing in here changes the machine, so these queries run in dry-run mode
as well and never go through the executor.
"""
import getpass
import os
import shutil
import subprocess
import sys
from typing import Optional

from .logging import get_logger

logger = get_logger(__name__)


def _query(argv: list[str]) -> Optional[str]:
    """Run a read-only command, return stdout or None on any failure"""
    try:
        p = subprocess.run(argv, capture_output=True, text=True)
    except OSError as e:
        logger.debug(f"[probe] {argv[0]} unavailable: {e}")
        return None
    if p.returncode != 0:
        return None
    return p.stdout


class HostProbe:
    """Queries about the running host"""

    def is_root(self) -> bool:
        return os.geteuid() == 0

    def user(self) -> str:
        return os.environ.get("USER") or getpass.getuser()

    def is_interactive(self) -> bool:
        return sys.stdin.isatty()

    def cpu_count(self) -> int:
        return os.cpu_count() or 2

    def command_exists(self, name: str) -> bool:
        return shutil.which(name) is not None

    def command_path(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def root_fstype(self) -> str:
        out = _query(["findmnt", "-n", "-o", "FSTYPE", "/"])
        return out.strip() if out and out.strip() else "unknown"

    def cpu_vendor(self) -> str:
        out = _query(["lscpu"]) or ""
        for line in out.splitlines():
            key, _, value = line.partition(":")
            if key.strip() == "Vendor ID":
                return value.strip()
        return "unknown"

    def supports_cake_qdisc(self) -> bool:
        out = _query(["tc", "qdisc", "show"]) or ""
        return "cake" in out

    def service_enabled(self, name: str) -> bool:
        try:
            p = subprocess.run(
                ["systemctl", "is-enabled", "--quiet", name],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            return False
        return p.returncode == 0

    def font_installed(self, name: str) -> bool:
        out = _query(["fc-list"]) or ""
        return name.lower() in out.lower()
