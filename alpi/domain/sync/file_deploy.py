"""
File and directory deployment
"""
from datetime import date
from pathlib import Path
from typing import Optional

from ...core.constants import DATA_MODE, EXEC_MODE
from ...core.interfaces import Executor, Reporter
from ...core.logging import get_logger
from ...core.utils import backup_path

logger = get_logger(__name__)


def deploy_file(
    executor: Executor,
    reporter: Reporter,
    source: Path,
    dest: Path,
    mode: int = DATA_MODE,
    today: Optional[date] = None,
) -> bool:
    """
    Install ``source`` at ``dest`` with ``mode``.

    A missing source is skipped with a warning (external content may be
    incomplete). An existing destination whose bytes differ is moved to
    ``dest.bak.YYYYMMDD`` first, so data already present is never lost.

    Returns:
        True if the file was deployed
    """
    incoming = executor.read_bytes(source)
    if incoming is None:
        reporter.warn(f"{source} not found - skipping")
        return False

    current = executor.read_bytes(dest)
    if current is not None and current != incoming:
        backup = backup_path(dest, today)
        executor.move(dest, backup)
        reporter.say(f"Backed up {dest} -> {backup.name}")

    executor.make_dirs(dest.parent)
    executor.copy_file(source, dest, mode)
    reporter.ok(str(dest))
    return True


def deploy_tree(executor: Executor, reporter: Reporter, source_dir: Path, dest_dir: Path) -> bool:
    """
    Merge-copy ``source_dir`` into ``dest_dir``.

    Tree deploys are bulk refreshes: files already at the destination are
    overwritten without a per-file backup.

    Returns:
        True if the tree was deployed
    """
    if not executor.is_dir(source_dir):
        reporter.warn(f"{source_dir} not found - skipping")
        return False

    executor.make_dirs(dest_dir)
    executor.copy_tree(source_dir, dest_dir)
    reporter.ok(f"{dest_dir}/")
    return True


def deploy_scripts(
    executor: Executor,
    reporter: Reporter,
    source_dir: Path,
    dest_dir: Path,
    pattern: str = "*",
    today: Optional[date] = None,
) -> int:
    """
    Deploy every regular file in ``source_dir`` matching ``pattern`` as an
    executable (0755) into ``dest_dir``.

    Returns:
        Number of scripts deployed
    """
    if not executor.is_dir(source_dir):
        reporter.warn(f"{source_dir} not found - skipping")
        return 0

    executor.make_dirs(dest_dir)
    count = 0
    for script in sorted(source_dir.glob(pattern)):
        if not script.is_file():
            continue
        if deploy_file(executor, reporter, script, dest_dir / script.name, EXEC_MODE, today=today):
            count += 1
    logger.debug(f"[deploy] {count} script(s) from {source_dir} -> {dest_dir}")
    return count
