from __future__ import annotations

from typing import TYPE_CHECKING, Any

from run_reporting.reporting.base_reporter import BaseReporter

if TYPE_CHECKING:
    from run_reporting.core.measurement_unit import MeasurementUnit
    from run_reporting.utils import LoggingProtocol


class ConsoleReporter(BaseReporter):
    """Reports each measurement unit as a table row via LoggingProtocol."""

    def __init__(self, logger: LoggingProtocol):
        super().__init__()
        self._logger = logger
        self._reported = 0

    @property
    def reported(self) -> int:
        """Number of units reported since the last reset."""
        return self._reported

    def report_unit(self, unit: MeasurementUnit) -> None:
        row: dict[str, Any] = {"iteration": unit.iteration, **unit.results}
        self._logger.report_table_message(row)
        self._reported += 1

    def reset(self) -> None:
        self._reported = 0
        self._logger.report_message("Console reporter reset")

    def start(self) -> None:
        self._logger.report_message("Console reporter started")

    def stop(self) -> None:
        self._logger.report_message(f"Console reporter stopped after {self._reported} unit(s)")
