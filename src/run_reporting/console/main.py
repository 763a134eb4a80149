# src/run_reporting/console/main.py
from __future__ import annotations

import time
from importlib.metadata import PackageNotFoundError, metadata
from importlib.metadata import version as dist_version
from typing import Any, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

from run_reporting.console.rich_console_logger import RichConsoleLogger
from run_reporting.core import MeasurementDriver, MeasurementUnit, Period, PeriodType, RunInfo
from run_reporting.reporting import BaseReporter, ConsoleReporter, ReportingError, ReportManager
from run_reporting.utils import LoggingProtocol, NullLogger, configure_logging

load_dotenv()
configure_logging()

DIST_NAME = "run-reporting"


class _FlakyReporter(BaseReporter):
    """Fails every Nth unit; used to show that other reporters keep receiving units."""

    def __init__(self, every: int):
        super().__init__()
        self._every = every

    def report_unit(self, unit: MeasurementUnit) -> None:
        if (unit.iteration + 1) % self._every == 0:
            raise ReportingError(f"simulated failure at iteration {unit.iteration}")

    def __repr__(self) -> str:
        return f"FlakyReporter(every={self._every})"


def _sleep_measure(delay_ms: float):
    def measure(unit: MeasurementUnit) -> dict[str, Any]:
        started = time.perf_counter()
        if delay_ms > 0:
            time.sleep(delay_ms / 1000.0)
        return {"response_time_ms": (time.perf_counter() - started) * 1000.0}

    return measure


app = typer.Typer(
    name="run-reporting",
    add_completion=True,
    help="CLI for run-reporting",
)


@app.command("simulate")
def simulate(
    iterations: int = typer.Option(10, "--iterations", "-n", min=1, help="Number of measured iterations."),
    duration_ms: Optional[int] = typer.Option(
        None, "--duration-ms", min=1, help="Bound the run by time instead of iterations."
    ),
    warmup: int = typer.Option(0, "--warmup", min=0, help="Warm-up iterations discarded by reset()."),
    delay_ms: float = typer.Option(1.0, "--delay-ms", min=0.0, help="Simulated work per iteration."),
    fail_every: int = typer.Option(0, "--fail-every", min=0, help="Add a reporter failing every Nth unit."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide reporting diagnostics."),
) -> None:
    """Drive a simulated measurement run through the report manager."""
    console = Console()
    logger = RichConsoleLogger(console)
    hook: LoggingProtocol = NullLogger() if quiet else logger

    if duration_ms is not None:
        period = Period(PeriodType.TIME, duration_ms)
    else:
        period = Period(PeriodType.ITERATION, iterations)

    manager = ReportManager(RunInfo(period), logger=hook)
    console_reporter = ConsoleReporter(logger)
    manager.register_reporter(console_reporter)
    if fail_every:
        manager.register_reporter(_FlakyReporter(fail_every))

    driver = MeasurementDriver(manager, _sleep_measure(delay_ms), logger=hook)
    summary = driver.run(warmup=warmup)

    console.print(
        f"Reported {summary.reported} unit(s) after {summary.warmup} warm-up iteration(s), "
        f"{summary.failed} with reporting failures"
    )
    if not summary.ok:
        raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if not value:
        return

    console = Console()

    try:
        pkg_version = dist_version(DIST_NAME)
        md = metadata(DIST_NAME)
        try:
            pkg_name = md["Name"]
        except KeyError:
            pkg_name = DIST_NAME

        console.print(f"{pkg_name} {pkg_version}")
    except PackageNotFoundError:
        # Running from source without an installed distribution
        console.print(f"{DIST_NAME} 0.0.0+unknown")

    raise typer.Exit()


@app.callback()
def _callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Root command group for run-reporting."""
    # Intentionally empty: keeps `simulate` as a named subcommand.
    pass


if __name__ == "__main__":
    app()
