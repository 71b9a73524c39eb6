"""
Verification domain models
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class CheckStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True)
class CheckResult:
    section: str
    label: str
    status: CheckStatus
    detail: str = ""


@dataclass
class VerifyReport:
    """Collected check results; exit code is non-zero iff anything failed"""
    results: List[CheckResult] = field(default_factory=list)

    def add(self, result: CheckResult) -> CheckResult:
        self.results.append(result)
        return result

    def _count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def passed(self) -> int:
        return self._count(CheckStatus.PASS)

    @property
    def warnings(self) -> int:
        return self._count(CheckStatus.WARN)

    @property
    def failures(self) -> int:
        return self._count(CheckStatus.FAIL)

    @property
    def exit_code(self) -> int:
        return 1 if self.failures else 0

    def counts(self):
        """(pass, warn, fail)"""
        return self.passed, self.warnings, self.failures
