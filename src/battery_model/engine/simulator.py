from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional, Union

from battery_model.engine.accumulator import DeltaAccumulator
from battery_model.engine.battery import BatteryState, BatteryStep, initial_state, step_battery
from battery_model.engine.interval import IntervalStatus, classify_interval
from battery_model.engine.tariff import TariffResolver
from battery_model.io.logger import DayLogger
from battery_model.io.meter_csv import MeterFileError, read_meter_file
from battery_model.io.schema import CostPeriod, DayRecord, ModelConfig, Sample
from battery_model.metrics.totals import RunTotals

log = logging.getLogger("battery_model")


@dataclass
class RunningState:
    """Everything carried from one sample to the next for a whole run."""

    battery: BatteryState
    last_timestamp: Optional[datetime] = None
    imp: DeltaAccumulator = field(default_factory=DeltaAccumulator)
    exp: DeltaAccumulator = field(default_factory=DeltaAccumulator)
    gen: DeltaAccumulator = field(default_factory=DeltaAccumulator)
    totals: RunTotals = field(default_factory=RunTotals)

    def reset_accumulators(self) -> None:
        self.imp.reset()
        self.exp.reset()
        self.gen.reset()


@dataclass
class _DayProgress:
    day: Optional[date] = None
    samples: int = 0
    intervals: int = 0
    gaps: int = 0
    consumption_kwh: float = 0.0
    costs_at_start: tuple = (0.0, 0.0, 0.0)


class Simulator:
    """Single forward pass over meter samples, three scenarios in parallel.

    Feed samples in strict time order with process_sample() and close each day
    (one meter file) with end_of_day(), or hand a sorted file list to run().
    """

    def __init__(self, cfg: ModelConfig, day_logger: Optional[DayLogger] = None) -> None:
        self.cfg = cfg
        self.tariff = TariffResolver(cfg.cost, cfg.tariff_lookup)
        self.max_interval = timedelta(minutes=cfg.max_interval_minutes)
        self.state = RunningState(battery=initial_state(cfg.battery))
        self.day_logger = day_logger
        self._day = _DayProgress(costs_at_start=self._costs())

    @property
    def totals(self) -> RunTotals:
        return self.state.totals

    def _costs(self) -> tuple:
        t = self.state.totals
        return (t.no_solar.cost, t.solar.cost, t.solar_battery.cost)

    def process_sample(self, sample: Sample) -> IntervalStatus:
        st = self.state
        st.imp.update(sample.imp)
        st.exp.update(sample.exp)
        st.gen.update(sample.gen)

        status = classify_interval(st.last_timestamp, sample.timestamp, self.max_interval)
        previous = st.last_timestamp
        st.last_timestamp = sample.timestamp
        self._day.samples += 1
        self._day.day = sample.timestamp.date()

        if status is IntervalStatus.FIRST:
            return status
        if status is IntervalStatus.GAP:
            log.warning("Skipping interval of %s before %s", sample.timestamp - previous, sample.timestamp)
            st.reset_accumulators()
            self._day.gaps += 1
            return status

        interval_hours = (sample.timestamp - previous).total_seconds() / 3600.0
        period = self.tariff.period_for(sample.timestamp)
        self.simulate_interval(st.imp.value, st.exp.value, st.gen.value, interval_hours, period)
        self._day.intervals += 1
        return status

    def simulate_interval(
        self,
        import_kwh: float,
        export_kwh: float,
        gen_kwh: float,
        interval_hours: float,
        period: CostPeriod,
    ) -> BatteryStep:
        """Apply one valid interval to all three scenarios using one tariff period."""
        t = self.state.totals

        # generation offsets consumption; only import/export are grid-visible
        consumption = import_kwh + gen_kwh - export_kwh
        t.total_consumption_kwh += consumption
        self._day.consumption_kwh += consumption

        t.no_solar.add_import(consumption, period.kwh)

        t.solar.add_import(import_kwh, period.kwh)
        t.solar.add_export(export_kwh, period.feed_in)

        step = step_battery(
            self.state.battery,
            self.cfg.battery,
            import_kwh,
            export_kwh,
            interval_hours,
            clamp_overcharge=self.cfg.clamp_overcharge,
        )
        t.total_discharge_kwh += step.discharged
        t.total_charge_kwh += step.charge_draw
        t.solar_battery.add_import(step.grid_import, period.kwh)
        t.solar_battery.add_export(step.feed_in, period.feed_in)
        return step

    def end_of_day(self, day: Optional[date] = None, source: str = "", skipped_rows: int = 0) -> DayRecord:
        """Add the daily supply charge to every scenario and count the day."""
        if day is None:
            day = self._day.day
        if day is None and self.state.last_timestamp is not None:
            day = self.state.last_timestamp.date()
        period = self.tariff.period_for(day)
        self.state.totals.add_daily_charge(period.daily)

        before = self._day.costs_at_start
        after = self._costs()
        rec = DayRecord(
            day=day,
            source=source,
            samples=self._day.samples,
            intervals=self._day.intervals,
            gaps=self._day.gaps,
            skipped_rows=skipped_rows,
            consumption_kwh=self._day.consumption_kwh,
            no_solar_cost=after[0] - before[0],
            solar_cost=after[1] - before[1],
            solar_battery_cost=after[2] - before[2],
            battery_kwh=self.state.battery.charge_level,
        )
        self._day = _DayProgress(costs_at_start=after)
        if self.day_logger is not None:
            self.day_logger.append(rec)
        return rec

    def process_file(self, path: Union[str, Path]) -> Optional[DayRecord]:
        """Run one day file. An unusable file is logged and skipped, state untouched."""
        try:
            meter_day = read_meter_file(path)
        except (MeterFileError, OSError, UnicodeDecodeError) as e:
            log.warning("Skipping %s: %s", path, e)
            return None

        for sample in meter_day.samples:
            self.process_sample(sample)
        return self.end_of_day(source=str(path), skipped_rows=meter_day.skipped_rows)

    def run(self, files: Iterable[Union[str, Path]]) -> RunTotals:
        for f in files:
            self.process_file(f)
        return self.state.totals
