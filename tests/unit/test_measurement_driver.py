from __future__ import annotations

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from run_reporting.core import MeasurementDriver, MeasurementUnit, Period, PeriodType, RunInfo
from run_reporting.reporting import AggregatedReportingError, BaseReporter, ReportingError, ReportManager
from run_reporting.utils import NullLogger


class _Collecting(BaseReporter):
    def __init__(self, fail_on: set[int] | None = None) -> None:
        super().__init__()
        self.fail_on = fail_on or set()
        self.units: list[MeasurementUnit] = []
        self.resets = 0

    def report_unit(self, unit: MeasurementUnit) -> None:
        self.units.append(unit)
        if unit.iteration in self.fail_on:
            raise ReportingError(f"failed {unit.iteration}")

    def reset(self) -> None:
        self.resets += 1
        self.units.clear()


def _measure(unit: MeasurementUnit) -> dict[str, Any]:
    return {"square": unit.iteration**2}


def _manager(iterations: int, *reporters: BaseReporter) -> tuple[ReportManager, RunInfo]:
    run = RunInfo(Period(PeriodType.ITERATION, iterations))
    return ReportManager(run, reporters=reporters), run


class TestMeasurementDriver:
    def test_reports_every_iteration(self) -> None:
        reporter = _Collecting()
        manager, run = _manager(4, reporter)

        summary = MeasurementDriver(manager, _measure).run()

        assert summary.reported == 4
        assert summary.ok
        assert [u.iteration for u in reporter.units] == [0, 1, 2, 3]
        assert [u.get("square") for u in reporter.units] == [0, 1, 4, 9]
        assert run.is_stopped()

    def test_warmup_is_discarded(self) -> None:
        reporter = _Collecting()
        manager, _ = _manager(3, reporter)

        summary = MeasurementDriver(manager, _measure).run(warmup=2)

        assert summary.warmup == 2
        assert summary.reported == 3
        assert reporter.resets == 1
        assert [u.iteration for u in reporter.units] == [0, 1, 2]

    def test_failures_counted_and_run_continues(self) -> None:
        flaky = _Collecting(fail_on={1})
        healthy = _Collecting()
        manager, _ = _manager(3, flaky, healthy)

        summary = MeasurementDriver(manager, _measure).run()

        assert summary.failed == 1
        assert not summary.ok
        assert len(healthy.units) == 3

    def test_negative_warmup_rejected(self) -> None:
        manager, _ = _manager(1)
        with pytest.raises(ValueError):
            MeasurementDriver(manager, _measure).run(warmup=-1)

    def test_stops_even_when_measure_raises(self) -> None:
        manager, run = _manager(3)

        def explode(unit: MeasurementUnit) -> dict[str, Any]:
            raise KeyError("bad")

        with pytest.raises(KeyError):
            MeasurementDriver(manager, explode).run()
        assert run.is_stopped()


class _BrokenLifecycle(_Collecting):
    def __init__(self, fail_reset: bool = False, fail_stop: bool = False) -> None:
        super().__init__()
        self.fail_reset = fail_reset
        self.fail_stop = fail_stop

    def reset(self) -> None:
        super().reset()
        if self.fail_reset:
            raise ReportingError("reset failed")

    def stop(self) -> None:
        if self.fail_stop:
            raise ReportingError("stop failed")


class TestMeasurementDriverLifecycleFailures:
    def test_measure_error_wins_over_stop_failure(self) -> None:
        logger = MagicMock(spec=NullLogger)
        manager, run = _manager(3, _BrokenLifecycle(fail_stop=True))

        def explode(unit: MeasurementUnit) -> dict[str, Any]:
            raise KeyError("bad")

        with pytest.raises(KeyError):
            MeasurementDriver(manager, explode, logger=logger).run()

        assert run.is_stopped()
        context, exc = logger.report_exception.call_args.args
        assert "Stopping reporters" in context
        assert isinstance(exc, AggregatedReportingError)
        assert exc.operation == "stop"

    def test_stop_failure_after_clean_run_propagates(self) -> None:
        manager, run = _manager(2, _BrokenLifecycle(fail_stop=True))

        with pytest.raises(AggregatedReportingError, match="stop"):
            MeasurementDriver(manager, _measure).run()
        assert run.is_stopped()

    def test_reset_failure_does_not_abort_run(self) -> None:
        broken = _BrokenLifecycle(fail_reset=True)
        healthy = _Collecting()
        manager, _ = _manager(3, broken, healthy)

        summary = MeasurementDriver(manager, _measure).run(warmup=1)

        assert summary.warmup == 1
        assert summary.reported == 3
        assert summary.reset_failed
        assert not summary.ok
        assert healthy.resets == 1
        assert [u.iteration for u in healthy.units] == [0, 1, 2]

    def test_run_diagnostics_go_to_module_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        manager, _ = _manager(2, _BrokenLifecycle(fail_reset=True))

        with caplog.at_level(logging.INFO, logger="run_reporting.core.measurement_driver"):
            MeasurementDriver(manager, _measure).run(warmup=1)

        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("Starting measurement run") for m in messages)
        assert any("Reset after warm-up failed" in m for m in messages)
        assert any(m.startswith("Measurement run finished: 2 reported") for m in messages)
