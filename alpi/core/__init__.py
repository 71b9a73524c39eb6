"""
Core infrastructure layer
"""
from .actions import (
    Action,
    ActionResult,
    RunCommand,
    MakeDirs,
    WriteFile,
    CopyFile,
    MoveFile,
    CopyTree,
    RemoveTree,
    SubstituteInFile,
    SubstitutionRule,
)
from .config import ProvisionConfig, Paths, Repositories, Packages, palette_color
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import Executor, Reporter, PromptProvider, MenuFrontend
from .system import HostProbe
from .utils import parse_csv, backup_path

__all__ = [
    "Action",
    "ActionResult",
    "RunCommand",
    "MakeDirs",
    "WriteFile",
    "CopyFile",
    "MoveFile",
    "CopyTree",
    "RemoveTree",
    "SubstituteInFile",
    "SubstitutionRule",
    "ProvisionConfig",
    "Paths",
    "Repositories",
    "Packages",
    "palette_color",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "Executor",
    "Reporter",
    "PromptProvider",
    "MenuFrontend",
    "HostProbe",
    "parse_csv",
    "backup_path",
]
