"""
Git mirror sync: clone when absent, fetch + fast-forward when present
"""
from ...core.exceptions import CommandError
from ...core.interfaces import Executor, Reporter
from ...core.logging import get_logger
from .models import SyncOutcome, SyncResult, SyncTarget

logger = get_logger(__name__)


def is_mirror(executor: Executor, target: SyncTarget) -> bool:
    """A local path counts as a mirror once it holds a git work tree"""
    return executor.is_dir(target.local_path / ".git")


def sync_mirror(executor: Executor, reporter: Reporter, target: SyncTarget) -> SyncResult:
    """
    Bring ``target.local_path`` up to date with ``target.remote``.

    This is the only way external content (build sources, dotfile
    repositories) enters the machine.

    - existing mirror: fetch all refs, switch branch (best effort), then
      ``pull --ff-only``; a failed fast-forward keeps the local tree and
      yields a warning instead of an error
    - no mirror: create the parent directory and clone

    Raises:
        CommandError: if fetch or clone fails
    """
    path = target.local_path

    if is_mirror(executor, target):
        reporter.say(f"Updating {target.name}...")
        result = SyncResult(target=target, outcome=SyncOutcome.UPDATED)

        executor.run("git", "-C", str(path), "fetch", "--all", "--prune")

        if target.branch:
            try:
                executor.run("git", "-C", str(path), "checkout", target.branch)
            except CommandError as e:
                logger.warning(f"[mirror] checkout {target.branch} failed in {path}: {e}")
                result.add_warning(f"Could not switch {target.name} to branch {target.branch}")

        try:
            executor.run("git", "-C", str(path), "pull", "--ff-only")
        except CommandError as e:
            logger.warning(f"[mirror] fast-forward failed in {path}: {e}")
            result.outcome = SyncOutcome.STALE
            result.add_warning(f"git pull failed for {target.name} - keeping existing tree")

        for warning in result.warnings:
            reporter.warn(warning)
        return result

    executor.make_dirs(path.parent)
    reporter.say(f"Cloning {target.name}...")
    if target.branch:
        executor.run("git", "clone", "--branch", target.branch, target.remote, str(path))
    else:
        executor.run("git", "clone", target.remote, str(path))
    return SyncResult(target=target, outcome=SyncOutcome.CLONED)
