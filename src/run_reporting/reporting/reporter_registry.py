from __future__ import annotations

import threading
from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from run_reporting.reporting.reporter_protocol import ReporterProtocol


class ReporterRegistry:
    """Thread-safe set of reporters keyed by identity.

    Iteration walks a snapshot taken when it begins, so concurrent add/remove
    never breaks a dispatch in progress and no reporter is visited twice.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reporters: dict[int, ReporterProtocol] = {}

    def add(self, reporter: ReporterProtocol) -> bool:
        """Add the reporter; returns False when this exact object is already present."""
        with self._lock:
            if id(reporter) in self._reporters:
                return False
            self._reporters[id(reporter)] = reporter
            return True

    def remove(self, reporter: ReporterProtocol) -> bool:
        with self._lock:
            return self._reporters.pop(id(reporter), None) is not None

    def snapshot(self) -> tuple[ReporterProtocol, ...]:
        with self._lock:
            return tuple(self._reporters.values())

    def clear(self) -> None:
        with self._lock:
            self._reporters.clear()

    def __contains__(self, reporter: object) -> bool:
        with self._lock:
            return self._reporters.get(id(reporter)) is reporter

    def __iter__(self) -> Iterator[ReporterProtocol]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._reporters)
