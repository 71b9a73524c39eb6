"""
Provisioning service - runs the selected phases in order
"""
from typing import Callable, Optional, Sequence

from ...core.config import ProvisionConfig
from ...core.exceptions import AlpiError, PhaseError
from ...core.interfaces import Executor, Reporter
from ...core.logging import get_logger
from ...core.system import HostProbe
from ..variant import Variant
from .context import PhaseContext
from .models import Phase, PhaseOutcome, PhaseStatus, RunFilter, RunResult
from .registry import build_registry
from .selector import select_phases

logger = get_logger(__name__)


class ProvisionService:
    """
    Provisioning service - pure business logic.

    Selects phases by name, evaluates each phase's variant gate right
    before it would run, and runs bodies strictly one after another.
    No direct dependency on CLI or Typer.
    """

    def __init__(
        self,
        executor: Executor,
        reporter: Reporter,
        probe: HostProbe,
        phases: Optional[Sequence[Phase]] = None,
        on_phase_start: Optional[Callable[[Phase], None]] = None,
        on_phase_skip: Optional[Callable[[Phase, Variant], None]] = None,
        on_phase_done: Optional[Callable[[Phase], None]] = None,
    ):
        """
        Args:
            executor: Real or dry-run executor every mutation goes through
            reporter: Status line sink
            probe: Read-only host queries
            phases: Phase table (defaults to the built-in registry)
            on_phase_start: Callback before a phase body runs
            on_phase_skip: Callback when a phase is gated off (phase, variant)
            on_phase_done: Callback after a phase body completed
        """
        self.executor = executor
        self.reporter = reporter
        self.probe = probe
        self.phases = tuple(phases) if phases is not None else build_registry()
        self.on_phase_start = on_phase_start
        self.on_phase_skip = on_phase_skip
        self.on_phase_done = on_phase_done

    def run(
        self,
        config: ProvisionConfig,
        variant: Variant,
        run_filter: RunFilter,
        jobs: int,
    ) -> RunResult:
        """
        Run every selected phase whose gate accepts ``variant``.

        Returns:
            RunResult listing completed and variant-skipped phases

        Raises:
            PhaseError: If a phase body fails; later phases do not run
        """
        ctx = PhaseContext(
            config=config,
            executor=self.executor,
            reporter=self.reporter,
            probe=self.probe,
            variant=variant,
            jobs=jobs,
        )
        result = RunResult(variant=variant, dry_run=self.executor.dry_run)

        for phase in select_phases(self.phases, run_filter):
            if not phase.gate(variant):
                self.reporter.info(f"Skipping {phase.name} (variant: {variant})")
                if self.on_phase_skip:
                    self.on_phase_skip(phase, variant)
                result.outcomes.append(PhaseOutcome(phase.name, PhaseStatus.SKIPPED_VARIANT))
                continue

            if self.on_phase_start:
                self.on_phase_start(phase)
            logger.info(f"[phase] {phase.name} started")

            try:
                phase.body(ctx)
            except PhaseError:
                raise
            except (AlpiError, OSError) as e:
                logger.debug(f"[phase] {phase.name} failed", exc_info=True)
                raise PhaseError(phase.name, e) from e

            logger.info(f"[phase] {phase.name} completed")
            result.outcomes.append(PhaseOutcome(phase.name, PhaseStatus.COMPLETED))
            if self.on_phase_done:
                self.on_phase_done(phase)

        return result
