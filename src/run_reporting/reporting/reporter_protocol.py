from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from run_reporting.core.measurement_unit import MeasurementUnit
    from run_reporting.core.run_lifecycle import RunLifecycleProtocol


@runtime_checkable
class ReporterProtocol(Protocol):
    """Protocol for all measurement reporters."""

    def set_run_lifecycle(self, run_lifecycle: RunLifecycleProtocol | None) -> None:
        """Attach the run lifecycle the reporter measures against."""
        ...

    def report(self, unit: MeasurementUnit) -> None:
        """Consume a measurement unit. Raises ReportingError on failure."""
        ...

    def reset(self) -> None:
        """Discard anything accumulated so far (e.g. after warm-up)."""
        ...

    def start(self) -> None:
        """Begin any background activity."""
        ...

    def stop(self) -> None:
        """Cease any background activity."""
        ...
