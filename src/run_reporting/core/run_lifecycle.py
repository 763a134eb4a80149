from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class RunState(Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    RUNNING = "running"
    STOPPED = "stopped"


@runtime_checkable
class RunLifecycleProtocol(Protocol):
    """Protocol for the object tracking a measurement run and issuing iteration numbers."""

    def is_running(self) -> bool:
        """Whether new iterations may still be produced."""
        ...

    def is_started(self) -> bool:
        """Whether the run was started and not yet stopped."""
        ...

    def get_next_iteration(self) -> int:
        """Issue the next unique iteration number."""
        ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def reset(self) -> None:
        """Return the iteration counter to its zero state."""
        ...


def run_state_of(lifecycle: RunLifecycleProtocol | None) -> RunState:
    """Derive the RunState from the lifecycle predicates."""
    if lifecycle is None:
        return RunState.NOT_STARTED
    if lifecycle.is_running():
        return RunState.RUNNING
    if lifecycle.is_started():
        return RunState.STARTED
    stopped = getattr(lifecycle, "is_stopped", None)
    if callable(stopped) and stopped():
        return RunState.STOPPED
    return RunState.NOT_STARTED
