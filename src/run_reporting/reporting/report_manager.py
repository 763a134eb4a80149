from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from run_reporting.core.measurement_unit import MeasurementUnit
from run_reporting.core.run_lifecycle import RunLifecycleProtocol, run_state_of
from run_reporting.reporting.errors import AggregatedReportingError, ReporterFailure
from run_reporting.reporting.reporter_registry import ReporterRegistry
from run_reporting.utils.logging_protocol import LoggingProtocol, NullLogger

if TYPE_CHECKING:
    from run_reporting.reporting.reporter_protocol import ReporterProtocol


class ReportManager:
    """
    Owns the reporters of a measurement run and fans calls out to them.

    Units are only created while the run lifecycle is running, but are
    reported as long as it is started: the final iteration of a bounded run
    finishes after is_running() already turned False.

    A failing reporter never prevents the others from being called. After a
    dispatch every failure has been sent to the logging hook and the last one
    is raised to the caller as an AggregatedReportingError. The same policy
    applies to start(), stop() and reset().
    """

    def __init__(
        self,
        run_lifecycle: RunLifecycleProtocol | None = None,
        reporters: Iterable[ReporterProtocol] = (),
        logger: LoggingProtocol | None = None,
    ) -> None:
        self._logger: LoggingProtocol = logger or NullLogger()
        self._registry = ReporterRegistry()
        self._run_lifecycle: RunLifecycleProtocol | None = run_lifecycle
        for reporter in reporters:
            self.register_reporter(reporter)

    # ----- run lifecycle -----

    @property
    def run_lifecycle(self) -> RunLifecycleProtocol | None:
        return self._run_lifecycle

    @run_lifecycle.setter
    def run_lifecycle(self, run_lifecycle: RunLifecycleProtocol | None) -> None:
        self.set_run_lifecycle(run_lifecycle)

    def set_run_lifecycle(self, run_lifecycle: RunLifecycleProtocol | None) -> None:
        """Replace the run lifecycle and hand it to every registered reporter."""
        self._logger.report_message(f"A new run lifecycle set: {run_lifecycle!r}")
        self._run_lifecycle = run_lifecycle
        for reporter in self._registry.snapshot():
            reporter.set_run_lifecycle(run_lifecycle)

    def _require_run_lifecycle(self) -> RunLifecycleProtocol:
        if self._run_lifecycle is None:
            raise RuntimeError("run lifecycle not set")
        return self._run_lifecycle

    # ----- measurement units -----

    def new_measurement_unit(self) -> MeasurementUnit | None:
        """Return a unit with a fresh iteration number, or None when the run is not running."""
        run_lifecycle = self._run_lifecycle
        if run_lifecycle is None or not run_lifecycle.is_running():
            return None
        return MeasurementUnit(run_lifecycle.get_next_iteration())

    def report(self, unit: MeasurementUnit) -> None:
        """Dispatch the unit to every registered reporter exactly once."""
        run_lifecycle = self._run_lifecycle
        if run_lifecycle is None or not run_lifecycle.is_started():
            state = run_state_of(run_lifecycle)
            self._logger.report_message(
                f"Skipping measurement unit {unit.iteration}: run is {state.value}"
            )
            return

        self._dispatch("report", lambda reporter: reporter.report(unit))

    # ----- lifecycle fan-out -----

    def reset(self) -> None:
        """Reset the run and all reporters to the zero state (used after warm-up)."""
        self._logger.report_message("Resetting reporting")
        self._require_run_lifecycle().reset()
        self._dispatch("reset", lambda reporter: reporter.reset())

    def start(self) -> None:
        self._logger.report_message("Starting reporting and all reporters")
        # Lifecycle first: reporters may start timers that check is_running().
        self._require_run_lifecycle().start()
        self._dispatch("start", lambda reporter: reporter.start())

    def stop(self) -> None:
        self._logger.report_message("Stopping reporting and all reporters")
        self._require_run_lifecycle().stop()
        self._dispatch("stop", lambda reporter: reporter.stop())

    def _dispatch(self, operation: str, call: Callable[[ReporterProtocol], None]) -> None:
        failures: list[ReporterFailure] = []
        for reporter in self._registry.snapshot():
            try:
                call(reporter)
            except Exception as exc:
                self._logger.report_exception(f"Reporter {reporter!r} failed during {operation}", exc)
                failures.append(ReporterFailure(reporter, operation, exc))

        if failures:
            raise AggregatedReportingError(operation, failures) from failures[-1].error

    # ----- registry -----

    def register_reporter(self, reporter: ReporterProtocol) -> None:
        self._logger.report_message(f"Registering reporter {reporter!r}")
        reporter.set_run_lifecycle(self._run_lifecycle)
        self._registry.add(reporter)

    def unregister_reporter(self, reporter: ReporterProtocol) -> None:
        self._logger.report_message(f"Removing reporter {reporter!r}")
        self._registry.remove(reporter)

    @property
    def reporters(self) -> tuple[ReporterProtocol, ...]:
        """Return a snapshot of the registered reporters."""
        return self._registry.snapshot()
