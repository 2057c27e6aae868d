"""Metering and battery-economics engine.

Cumulative meter counters become per-interval deltas, which drive a battery
model and three cost scenarios (no solar, solar, solar with battery).
"""

from .accumulator import DeltaAccumulator
from .battery import BatteryState, BatteryStep, initial_state, step_battery
from .interval import DEFAULT_MAX_INTERVAL, IntervalStatus, classify_interval
from .simulator import RunningState, Simulator
from .tariff import TariffResolver

__all__ = [
    "BatteryState",
    "BatteryStep",
    "DEFAULT_MAX_INTERVAL",
    "DeltaAccumulator",
    "IntervalStatus",
    "RunningState",
    "Simulator",
    "TariffResolver",
    "classify_interval",
    "initial_state",
    "step_battery",
]
