from __future__ import annotations

import dataclasses

import pytest

from run_reporting.core import MeasurementUnit


class TestMeasurementUnit:
    def test_defaults(self) -> None:
        unit = MeasurementUnit(3)
        assert unit.iteration == 3
        assert dict(unit.results) == {}
        assert unit.created_at > 0

    def test_negative_iteration_rejected(self) -> None:
        with pytest.raises(ValueError):
            MeasurementUnit(-1)

    def test_is_frozen(self) -> None:
        unit = MeasurementUnit(0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            unit.iteration = 1  # type: ignore[misc]

    def test_results_are_read_only(self) -> None:
        unit = MeasurementUnit(0, {"latency": 1.5})
        with pytest.raises(TypeError):
            unit.results["latency"] = 2.0  # type: ignore[index]

    def test_results_do_not_alias_caller_dict(self) -> None:
        payload = {"latency": 1.5}
        unit = MeasurementUnit(0, payload)
        payload["latency"] = 99.0
        assert unit.get("latency") == 1.5

    def test_with_results_returns_new_unit(self) -> None:
        unit = MeasurementUnit(4, {"a": 1}, created_at=10.0)
        updated = unit.with_results(b=2)

        assert updated is not unit
        assert dict(updated.results) == {"a": 1, "b": 2}
        assert updated.iteration == 4
        assert updated.created_at == 10.0
        assert dict(unit.results) == {"a": 1}

    def test_get_default(self) -> None:
        assert MeasurementUnit(0).get("missing", "n/a") == "n/a"

    def test_to_dict(self) -> None:
        unit = MeasurementUnit(2, {"x": 1}, created_at=5.0)
        assert unit.to_dict() == {"iteration": 2, "created_at": 5.0, "results": {"x": 1}}

    def test_hashable_despite_results(self) -> None:
        unit = MeasurementUnit(1, {"latency": 2.0}, created_at=3.0)
        same = MeasurementUnit(1, {"latency": 9.0}, created_at=3.0)
        assert hash(unit) == hash(same)
        assert {unit: "ok"}[unit] == "ok"
