from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from run_reporting.reporting.errors import AggregatedReportingError
from run_reporting.utils.logging_protocol import LoggingProtocol, NullLogger

if TYPE_CHECKING:
    from run_reporting.core.measurement_unit import MeasurementUnit
    from run_reporting.reporting.report_manager import ReportManager

logger = logging.getLogger(__name__)

MeasureFn = Callable[["MeasurementUnit"], Mapping[str, Any]]


@dataclass(slots=True)
class DriverSummary:
    warmup: int = 0
    reported: int = 0
    failed: int = 0
    reset_failed: bool = False

    @property
    def ok(self) -> bool:
        return self.failed == 0 and not self.reset_failed


class MeasurementDriver:
    """Pulls units from a ReportManager until the run ends and reports each one."""

    def __init__(self, manager: ReportManager, measure: MeasureFn, logger: LoggingProtocol | None = None):
        self._manager = manager
        self._measure = measure
        self._logger: LoggingProtocol = logger or NullLogger()

    def run(self, warmup: int = 0) -> DriverSummary:
        if warmup < 0:
            raise ValueError(f"warmup must be non-negative, got {warmup}")

        summary = DriverSummary()
        logger.info("Starting measurement run (warm-up: %d)", warmup)
        self._manager.start()
        completed = False
        try:
            for _ in range(warmup):
                if not self._iterate(summary):
                    break
                summary.warmup += 1
            if warmup:
                self._logger.report_message(f"Warm-up finished after {summary.warmup} iteration(s)")
                self._reset(summary)

            with self._logger.progress("Measuring") as task:
                while self._iterate(summary):
                    task.advance()
            completed = True
        finally:
            self._stop(raise_errors=completed)

        logger.info(
            "Measurement run finished: %d reported, %d with reporting failures", summary.reported, summary.failed
        )
        return summary

    def _reset(self, summary: DriverSummary) -> None:
        try:
            self._manager.reset()
        except AggregatedReportingError as exc:
            summary.reset_failed = True
            logger.warning("Reset after warm-up failed: %s", exc)
            self._logger.report_warning(f"Reset after warm-up: {exc}")
        summary.reported = summary.failed = 0

    def _stop(self, raise_errors: bool) -> None:
        try:
            self._manager.stop()
        except AggregatedReportingError as exc:
            if raise_errors:
                raise
            # An error from the run itself is already propagating.
            self._logger.report_exception("Stopping reporters after a failed run", exc)

    def _iterate(self, summary: DriverSummary) -> bool:
        unit = self._manager.new_measurement_unit()
        if unit is None:
            return False

        unit = unit.with_results(**self._measure(unit))
        try:
            self._manager.report(unit)
        except AggregatedReportingError as exc:
            summary.failed += 1
            logger.debug("Iteration %d reporting failed", unit.iteration, exc_info=exc)
            self._logger.report_warning(f"Iteration {unit.iteration}: {exc}")
        summary.reported += 1
        return True
