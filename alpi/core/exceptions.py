"""
Unified exception definitions
"""
from typing import Optional, Sequence


class AlpiError(Exception):
    """Base exception class"""
    pass


class ConfigError(AlpiError):
    """Configuration error"""
    pass


class VariantError(AlpiError):
    """Invalid or missing session variant"""
    pass


class PrivilegeError(AlpiError):
    """Run with the wrong privileges (e.g. as root)"""
    pass


class CommandError(AlpiError):
    """External command exited with a non-zero status"""

    def __init__(
        self,
        argv: Sequence[str],
        returncode: int,
        cwd: Optional[str] = None,
        stderr: str = "",
    ):
        self.argv = list(argv)
        self.returncode = returncode
        self.cwd = cwd
        self.stderr = stderr
        message = f"Command failed ({returncode}): {' '.join(self.argv)}"
        if cwd:
            message += f" (in {cwd})"
        if stderr:
            message += f"\n{stderr.strip()}"
        super().__init__(message)


class PhaseError(AlpiError):
    """A phase body failed; wraps the underlying error with the phase name"""

    def __init__(self, phase: str, cause: BaseException):
        self.phase = phase
        self.cause = cause
        super().__init__(f"Aborted in phase '{phase}': {cause}")


class SyncError(AlpiError):
    """Sync error"""
    pass


class DeployError(SyncError):
    """File or tree deployment error"""
    pass
