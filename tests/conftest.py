"""
Shared test doubles: in-memory reporter, fake host probe, command-stubbing executor
"""
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest

from alpi.adapters.config.parser import build_config
from alpi.core.actions import Action, ActionResult, RunCommand
from alpi.core.config import ProvisionConfig
from alpi.core.exceptions import CommandError
from alpi.core.interfaces import Reporter
from alpi.core.system import HostProbe
from alpi.domain.phases import PhaseContext
from alpi.domain.variant import Variant
from alpi.infrastructure.execution.real import RealExecutor


class MemoryReporter(Reporter):
    """Keeps (tag, message) pairs instead of printing"""

    def __init__(self):
        self.lines: List[Tuple[str, str]] = []

    def say(self, message: str) -> None:
        self.lines.append(("say", message))

    def step(self, message: str) -> None:
        self.lines.append(("step", message))

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def ok(self, message: str) -> None:
        self.lines.append(("ok", message))

    def warn(self, message: str) -> None:
        self.lines.append(("warn", message))

    def fail(self, message: str) -> None:
        self.lines.append(("fail", message))

    def messages(self, tag: Optional[str] = None) -> List[str]:
        return [m for t, m in self.lines if tag is None or t == tag]


class FakeProbe(HostProbe):
    """Scripted answers to host queries; never spawns a process"""

    def __init__(
        self,
        root: bool = False,
        interactive: bool = False,
        commands: Sequence[str] = (),
        fstype: str = "ext4",
        vendor: str = "GenuineIntel",
        cake: bool = False,
        services: Sequence[str] = (),
        fonts: Sequence[str] = (),
        cpus: int = 4,
        username: str = "tester",
    ):
        self.root = root
        self.interactive = interactive
        self.commands: Set[str] = set(commands)
        self.fstype = fstype
        self.vendor = vendor
        self.cake = cake
        self.services: Set[str] = set(services)
        self.fonts: Set[str] = set(fonts)
        self.cpus = cpus
        self.username = username

    def is_root(self) -> bool:
        return self.root

    def user(self) -> str:
        return self.username

    def is_interactive(self) -> bool:
        return self.interactive

    def cpu_count(self) -> int:
        return self.cpus

    def command_exists(self, name: str) -> bool:
        return name in self.commands

    def command_path(self, name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.commands else None

    def root_fstype(self) -> str:
        return self.fstype

    def cpu_vendor(self) -> str:
        return self.vendor

    def supports_cake_qdisc(self) -> bool:
        return self.cake

    def service_enabled(self, name: str) -> bool:
        return name in self.services

    def font_installed(self, name: str) -> bool:
        return name in self.fonts


class StubCommandExecutor(RealExecutor):
    """
    Real executor for unprivileged file actions; external commands and
    privileged writes are only recorded.

    ``fail_on`` lists argv prefixes whose commands exit with status 1.
    """

    def __init__(self, fail_on: Sequence[Sequence[str]] = ()):
        super().__init__()
        self.fail_on = [tuple(prefix) for prefix in fail_on]
        self.commands: List[Tuple[str, ...]] = []
        self.cwds: Dict[Tuple[str, ...], Optional[str]] = {}
        self.privileged: List[Action] = []

    def execute(self, action: Action) -> ActionResult:
        if isinstance(action, RunCommand):
            self.journal.append(action.describe())
            self.commands.append(action.argv)
            self.cwds[action.argv] = action.cwd
            for prefix in self.fail_on:
                if action.argv[:len(prefix)] == prefix:
                    raise CommandError(action.argv, 1, cwd=action.cwd)
            return ActionResult(action=action, performed=False)
        if getattr(action, "privileged", False):
            self.journal.append(action.describe())
            self.privileged.append(action)
            return ActionResult(action=action, performed=False)
        return super().execute(action)

    def ran(self, *prefix: str) -> bool:
        return any(argv[:len(prefix)] == prefix for argv in self.commands)


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def system_root(tmp_path: Path) -> Path:
    path = tmp_path / "root"
    (path / "etc").mkdir(parents=True)
    return path


@pytest.fixture
def config(home: Path, system_root: Path) -> ProvisionConfig:
    return build_config({"paths": {"system_root": str(system_root)}}, home, {})


@pytest.fixture
def reporter() -> MemoryReporter:
    return MemoryReporter()


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def executor() -> StubCommandExecutor:
    return StubCommandExecutor()


@pytest.fixture
def make_context(config, reporter, probe):
    def factory(executor, variant: Variant = Variant.BOTH, jobs: int = 4) -> PhaseContext:
        return PhaseContext(
            config=config,
            executor=executor,
            reporter=reporter,
            probe=probe,
            variant=variant,
            jobs=jobs,
        )
    return factory
