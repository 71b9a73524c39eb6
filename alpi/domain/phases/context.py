"""
Phase execution context
"""
from dataclasses import dataclass, field
from typing import Set

from ...core.config import ProvisionConfig
from ...core.interfaces import Executor, Reporter
from ...core.system import HostProbe
from ..variant import Variant


@dataclass
class PhaseContext:
    """Everything a phase body may use; shared by all phases of one run"""
    config: ProvisionConfig
    executor: Executor
    reporter: Reporter
    probe: HostProbe
    variant: Variant
    jobs: int
    # Run-scoped memo (e.g. the AUR helper bootstrapped once per run)
    ensured: Set[str] = field(default_factory=set)

    @property
    def paths(self):
        return self.config.paths

    @property
    def packages(self):
        return self.config.packages

    @property
    def repos(self):
        return self.config.repos
