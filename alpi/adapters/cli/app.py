"""
Main CLI application
"""
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import click
import typer

from ...core.config import ProvisionConfig
from ...core.constants import DEFAULT_CONFIG_FILE, DEFAULT_LOG_LEVEL
from ...core.exceptions import AlpiError, CommandError, PhaseError, PrivilegeError
from ...core.interfaces import Executor
from ...core.logging import get_logger, get_stderr_console, setup_logging
from ...core.system import HostProbe
from ...domain.phases import Phase, ProvisionService, RunFilter, RunResult, phase_names, plan
from ...domain.variant import Variant, VariantResolver, parse_variant
from ...domain.verify import Verifier
from ...infrastructure.execution.dry_run import DryRunExecutor
from ...infrastructure.execution.real import RealExecutor
from ..config.loader import ConfigLoader
from ..config.parser import build_config, resolve_path
from .menu import WhiptailMenu
from .prompts import RichPromptProvider
from .reporter import RichReporter

logger = get_logger(__name__)

EPILOG = (
    f"Phases: {', '.join(phase_names())}\n\n"
    "Examples:\n\n"
    "  alpi                            interactive setup\n\n"
    "  alpi --variant both             install everything\n\n"
    "  alpi --only suckless            rebuild dwm/st/etc\n\n"
    "  alpi --only lookandfeel         refresh dotfiles\n\n"
    "  alpi --verify                   verify installation\n\n"
    "  alpi --dry-run --variant both   preview everything"
)

app = typer.Typer(
    name="alpi",
    add_completion=False,
    help="Arch Linux post-install provisioning (dwm on X11, niri on Wayland, or both)",
    epilog=EPILOG,
    rich_markup_mode="rich",
)


# ============================================================
# Helpers
# ============================================================

def load_config(
    config_path: Optional[Path],
    home: Path,
    env: Mapping[str, str],
    overrides: Optional[Dict[str, Any]] = None,
) -> ProvisionConfig:
    """
    TOML file < ``ALPI_*`` environment < command-line flags, then validated
    into ProvisionConfig.

    An explicit ``--config`` must exist; the default location is optional.
    """
    loader = ConfigLoader(env)
    if config_path is not None:
        toml_path, required = config_path.expanduser(), True
    else:
        toml_path, required = resolve_path(DEFAULT_CONFIG_FILE, "config", home), False
    raw = loader.load(toml_path=toml_path, cli_overrides=overrides, required=required)
    return build_config(raw, home, env)


def _banner(reporter: RichReporter, user: str, variant: Variant, jobs: int,
            dry_run: bool, planned: List[Tuple[Phase, bool]]) -> None:
    lines = [
        f"User:    {user}",
        f"Variant: {variant}",
        f"Jobs:    {jobs}",
        f"Dry-run: {'yes' if dry_run else 'no'}",
    ]
    will_run = [phase.name for phase, runs in planned if runs]
    gated = [phase.name for phase, runs in planned if not runs]
    lines.append(f"Phases:  {', '.join(will_run) or 'none'}")
    if gated:
        lines.append(f"Gated:   {', '.join(gated)} (not needed for {variant})")
    reporter.panel("\n".join(lines), title="ALPI - NIRUCON Suckless Edition")


def _summary(reporter: RichReporter, result: RunResult) -> None:
    variant = result.variant
    if result.dry_run:
        reporter.ok("Dry run complete - no changes were made")
    else:
        reporter.ok("All selected phases completed!")

    lines: List[str] = [f"Phases run: {', '.join(result.ran_phases) or 'none'}"]
    if result.skipped_phases:
        lines.append(f"Skipped (variant {variant}): {', '.join(result.skipped_phases)}")
    lines.append("→ Reboot to apply all changes")
    if variant.wants_x11:
        lines.append("→ X11:     startx (via session selector)")
    if variant.wants_niri:
        lines.append("→ Wayland: ~/.local/bin/start-niri")
    lines.append("→ Verify:  alpi --verify")
    reporter.panel("\n".join(lines), title="Summary", border_style="green")

    if variant.wants_niri:
        reporter.warn("IMPORTANT: Log out and back in before starting niri")
        reporter.warn("           (group changes for input/video need a fresh login)")


def _on_phase_start(reporter: RichReporter):
    def callback(phase: Phase) -> None:
        reporter.step(f"Phase {phase.ordinal}: {phase.title} ({phase.name})")
    return callback


def provision(
    reporter: RichReporter,
    probe: HostProbe,
    variant: Optional[str],
    only: Optional[str],
    skip: Optional[str],
    jobs: Optional[int],
    dry_run: bool,
    verify: bool,
    config_path: Optional[Path],
) -> int:
    """
    Run verification or a provisioning pass.

    Returns:
        Process exit code
    """
    if probe.is_root():
        raise PrivilegeError("Do not run as root. Run as your normal user (sudo is used where needed).")

    env = dict(os.environ)
    overrides = {"jobs": jobs} if jobs is not None else None
    config = load_config(config_path, Path.home(), env, overrides)

    if verify:
        explicit = parse_variant(variant) if variant is not None else None
        report = Verifier(config, probe, reporter, explicit).verify()
        return report.exit_code

    resolver = VariantResolver(prompt_provider=RichPromptProvider(), menu=WhiptailMenu())
    resolved = resolver.resolve(variant, interactive=probe.is_interactive())
    reporter.ok(f"Variant: {resolved}")

    run_filter = RunFilter.from_csv(only, skip)
    build_jobs = config.jobs or probe.cpu_count()

    executor: Executor = DryRunExecutor(reporter) if dry_run else RealExecutor()
    service = ProvisionService(
        executor=executor,
        reporter=reporter,
        probe=probe,
        on_phase_start=_on_phase_start(reporter),
    )
    _banner(reporter, probe.user(), resolved, build_jobs, dry_run, plan(service.phases, run_filter, resolved))
    result = service.run(config, resolved, run_filter, build_jobs)
    _summary(reporter, result)
    return 0


# ============================================================
# Command
# ============================================================

@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def main(
    variant: Optional[str] = typer.Option(
        None, "--variant", help="Session variant: x11, niri or both (interactive if omitted)",
    ),
    only: Optional[str] = typer.Option(
        None, "--only", help="Run only these phases (comma-separated)",
    ),
    skip: Optional[str] = typer.Option(
        None, "--skip", help="Skip these phases (comma-separated)",
    ),
    jobs: Optional[int] = typer.Option(
        None, "--jobs", min=1, help="Parallel make jobs (default: number of CPUs)",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print actions, make no changes",
    ),
    verify: bool = typer.Option(
        False, "--verify", help="Check installation status and exit",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help=f"TOML configuration file (default: {DEFAULT_CONFIG_FILE} if present)",
    ),
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL, "--log-level", "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Log file path",
    ),
):
    """
    Provision a fresh Arch Linux install: core system, suckless (X11),
    niri (Wayland), look and feel, applications and system tuning.
    """
    setup_logging(level=log_level, log_file=log_file)
    reporter = RichReporter()

    try:
        code = provision(
            reporter, HostProbe(), variant, only, skip, jobs, dry_run, verify, config_path,
        )
    except PhaseError as e:
        reporter.fail(str(e))
        if isinstance(e.cause, CommandError) and e.cause.cwd:
            reporter.fail(f"Working directory: {e.cause.cwd}")
        raise typer.Exit(1)
    except AlpiError as e:
        reporter.fail(str(e))
        raise typer.Exit(1)
    except KeyboardInterrupt:
        reporter.fail("Interrupted")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        reporter.fail(f"Unexpected error: {e}")
        raise typer.Exit(1)

    if code:
        raise typer.Exit(code)


def run(argv: Optional[List[str]] = None) -> None:
    """
    CLI entry point.

    Every fatal outcome, including usage errors and interrupts, exits 1.
    """
    try:
        code = app(args=argv, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        get_stderr_console().print("Aborted")
        sys.exit(1)
    sys.exit(code or 0)


if __name__ == "__main__":
    run()
