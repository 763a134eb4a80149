from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from run_reporting.reporting.errors import ReportingError

if TYPE_CHECKING:
    from run_reporting.core.measurement_unit import MeasurementUnit
    from run_reporting.core.run_lifecycle import RunLifecycleProtocol


class BaseReporter(ABC):
    """Keeps the run lifecycle reference; subclasses only implement report_unit()."""

    def __init__(self) -> None:
        self._run_lifecycle: RunLifecycleProtocol | None = None

    @property
    def run_lifecycle(self) -> RunLifecycleProtocol | None:
        return self._run_lifecycle

    def set_run_lifecycle(self, run_lifecycle: RunLifecycleProtocol | None) -> None:
        self._run_lifecycle = run_lifecycle

    def report(self, unit: MeasurementUnit) -> None:
        if self._run_lifecycle is None:
            raise ReportingError(f"{type(self).__name__} has no run lifecycle; was it registered?")
        self.report_unit(unit)

    @abstractmethod
    def report_unit(self, unit: MeasurementUnit) -> None: ...

    def reset(self) -> None:
        pass

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
