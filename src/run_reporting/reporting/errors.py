from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from run_reporting.reporting.reporter_protocol import ReporterProtocol


class ReportingError(Exception):
    """Raised when a reporter cannot process a measurement unit."""


@dataclass(frozen=True, slots=True)
class ReporterFailure:
    """A single reporter's failure during one dispatch."""

    reporter: ReporterProtocol
    operation: str
    error: BaseException


class AggregatedReportingError(ReportingError):
    """One or more reporters failed during a single dispatch.

    Only the last failure is chained as the cause; earlier ones are kept in
    ``failures`` and were already reported through the logging hook.
    """

    def __init__(self, operation: str, failures: Sequence[ReporterFailure]):
        if not failures:
            raise ValueError("AggregatedReportingError requires at least one failure")
        self.operation = operation
        self.failures: tuple[ReporterFailure, ...] = tuple(failures)
        super().__init__(
            f"{len(self.failures)} reporter(s) failed during {operation}: {self.last.error}"
        )

    @property
    def last(self) -> ReporterFailure:
        return self.failures[-1]
