from __future__ import annotations

import logging
from dataclasses import dataclass

from battery_model.io.schema import BatteryConfig

log = logging.getLogger("battery_model.battery")

# float noise from the efficiency round trip when filling to exactly full
OVERCHARGE_TOLERANCE_KWH = 1e-9


@dataclass
class BatteryState:
    charge_level: float


@dataclass(frozen=True)
class BatteryStep:
    grid_import: float  # import still drawn from the grid
    feed_in: float  # export left over after charging
    discharged: float
    charge_draw: float  # grid-side energy used for charging, before efficiency loss
    overcharged: bool = False


def initial_state(battery: BatteryConfig) -> BatteryState:
    """Assume the battery starts holding one hour of discharge unless configured."""
    if battery.initial_charge is not None:
        return BatteryState(charge_level=battery.initial_charge)
    return BatteryState(charge_level=battery.discharge)


def step_battery(
    state: BatteryState,
    battery: BatteryConfig,
    import_kwh: float,
    export_kwh: float,
    interval_hours: float,
    clamp_overcharge: bool = False,
) -> BatteryStep:
    """Apply one interval to the battery: discharge against import, then charge from export.

    The same per-interval rate limit (discharge rate x interval) caps both legs.
    Charging stores charge_draw x efficiency; charge_draw is what the export
    would otherwise have fed in.
    """
    capacity = battery.discharge * interval_hours

    grid_import = import_kwh
    discharged = 0.0
    if import_kwh > 0:
        usable = min(capacity, state.charge_level)
        if import_kwh > usable:
            grid_import = import_kwh - usable
            discharged = usable
        else:
            grid_import = 0.0
            discharged = import_kwh
        state.charge_level -= discharged

    feed_in = export_kwh
    charge_draw = 0.0
    overcharged = False
    if export_kwh > 0:
        room = max(0.0, (battery.size - state.charge_level) / battery.efficiency)
        charge_draw = min(room, capacity)
        if export_kwh > charge_draw:
            feed_in = export_kwh - charge_draw
        else:
            charge_draw = export_kwh
            feed_in = 0.0
        state.charge_level += charge_draw * battery.efficiency
        if state.charge_level > battery.size + OVERCHARGE_TOLERANCE_KWH:
            overcharged = True
            log.warning("Overcharge: battery at %.6f kWh exceeds size %.3f kWh", state.charge_level, battery.size)
            if clamp_overcharge:
                state.charge_level = battery.size

    return BatteryStep(
        grid_import=grid_import,
        feed_in=feed_in,
        discharged=discharged,
        charge_draw=charge_draw,
        overcharged=overcharged,
    )
