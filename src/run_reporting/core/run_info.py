from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum

from run_reporting.core.run_lifecycle import RunState


class PeriodType(Enum):
    ITERATION = "iteration"
    TIME = "time"


@dataclass(frozen=True, slots=True)
class Period:
    """Bound of a measurement run: a number of iterations or milliseconds."""

    period_type: PeriodType
    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError(f"period value must be positive, got {self.value}")


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class RunInfo:
    """
    Thread-safe run lifecycle bounded by a Period.

    The run is *started* between start() and stop(). It is *running* while
    started and the period is not yet exhausted, so the last iteration of a
    run can still be reported after is_running() turned False.
    Once stopped, the run stays stopped: start() and reset() do not revive it.
    """

    def __init__(self, period: Period):
        self._period = period
        self._lock = threading.Lock()
        self._iterations = 0
        self._start_time: float | None = None
        self._end_time: float | None = None
        self._started = False
        self._stopped = False

    @property
    def period(self) -> Period:
        return self._period

    def start(self) -> None:
        with self._lock:
            if self._stopped:
                return
            self._start_time = _now_ms()
            self._end_time = None
            self._started = True

    def stop(self) -> None:
        with self._lock:
            if self._started and not self._stopped:
                self._end_time = _now_ms()
            self._stopped = True

    def reset(self) -> None:
        with self._lock:
            self._iterations = 0
            if self._started and not self._stopped:
                self._start_time = _now_ms()

    def get_next_iteration(self) -> int:
        with self._lock:
            iteration = self._iterations
            self._iterations += 1
            return iteration

    def get_iteration(self) -> int:
        """Return the last issued iteration number, or -1 if none was issued."""
        with self._lock:
            return self._iterations - 1

    def get_run_time(self) -> float:
        """Elapsed milliseconds since start, frozen once the run is stopped."""
        with self._lock:
            return self._run_time_locked()

    def _run_time_locked(self) -> float:
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else _now_ms()
        return max(0.0, end - self._start_time)

    def is_started(self) -> bool:
        with self._lock:
            return self._started and not self._stopped

    def is_stopped(self) -> bool:
        with self._lock:
            return self._stopped

    def is_running(self) -> bool:
        with self._lock:
            if not self._started or self._stopped:
                return False
            if self._period.period_type is PeriodType.ITERATION:
                return self._iterations < self._period.value
            return self._run_time_locked() < self._period.value

    def get_percentage(self) -> float:
        """Progress toward the period bound, in percent (capped at 100)."""
        with self._lock:
            if self._period.period_type is PeriodType.ITERATION:
                progress = self._iterations
            else:
                progress = self._run_time_locked()
            return min(100.0, progress * 100.0 / self._period.value)

    @property
    def state(self) -> RunState:
        if self.is_stopped():
            return RunState.STOPPED
        if self.is_running():
            return RunState.RUNNING
        if self.is_started():
            return RunState.STARTED
        return RunState.NOT_STARTED

    def __repr__(self) -> str:
        return (
            f"RunInfo(period={self._period.period_type.value}:{self._period.value}, "
            f"iteration={self.get_iteration()}, state={self.state.value})"
        )
