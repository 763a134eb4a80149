from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class MeasurementUnit:
    """Immutable record of a single iteration's results."""

    iteration: int
    results: Mapping[str, Any] = field(default_factory=dict, hash=False)
    created_at: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        if self.iteration < 0:
            raise ValueError(f"iteration must be non-negative, got {self.iteration}")
        # Frozen dataclass: bypass __setattr__ to wrap the payload read-only.
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    def with_results(self, **values: Any) -> MeasurementUnit:
        """Return a copy carrying the merged results; this unit is left untouched."""
        return replace(self, results={**self.results, **values})

    def get(self, name: str, default: Any = None) -> Any:
        return self.results.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        return {
            "iteration": self.iteration,
            "created_at": self.created_at,
            "results": dict(self.results),
        }
