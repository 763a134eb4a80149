from .measurement_unit import MeasurementUnit
from .run_info import Period, PeriodType, RunInfo
from .run_lifecycle import RunLifecycleProtocol, RunState, run_state_of
from .measurement_driver import DriverSummary, MeasurementDriver

__all__ = [
    "DriverSummary",
    "MeasurementDriver",
    "MeasurementUnit",
    "Period",
    "PeriodType",
    "RunInfo",
    "RunLifecycleProtocol",
    "RunState",
    "run_state_of",
]
