from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

DAYS_PER_YEAR = 365.25

SCENARIOS = ("no_solar", "solar", "solar_battery")
SCENARIO_TITLES = {
    "no_solar": "No solar",
    "solar": "Solar",
    "solar_battery": "Solar+battery",
}


@dataclass
class ScenarioTotals:
    cost: float = 0.0  # minor units (cents)
    imported_kwh: float = 0.0
    exported_kwh: float = 0.0

    def add_import(self, kwh: float, rate: float) -> None:
        self.imported_kwh += kwh
        self.cost += kwh * rate

    def add_export(self, kwh: float, feed_in: float) -> None:
        self.exported_kwh += kwh
        self.cost -= kwh * feed_in


@dataclass(frozen=True)
class ScenarioSummary:
    title: str
    cost: float  # major units
    cost_per_year: float
    imported_kwh: float
    exported_kwh: float


@dataclass(frozen=True)
class CostDifference:
    title: str
    total: float
    per_day: float
    per_year: float


@dataclass(frozen=True)
class RunSummary:
    days: int
    years: float
    scenarios: Dict[str, ScenarioSummary]
    differences: Dict[str, CostDifference]
    total_consumption_kwh: float
    total_charge_kwh: float
    total_discharge_kwh: float


@dataclass
class RunTotals:
    """Whole-run aggregates shared by the three scenarios."""

    no_solar: ScenarioTotals = field(default_factory=ScenarioTotals)
    solar: ScenarioTotals = field(default_factory=ScenarioTotals)
    solar_battery: ScenarioTotals = field(default_factory=ScenarioTotals)

    days_processed: int = 0
    total_consumption_kwh: float = 0.0
    total_charge_kwh: float = 0.0
    total_discharge_kwh: float = 0.0

    def scenario(self, name: str) -> ScenarioTotals:
        return getattr(self, name)

    def add_daily_charge(self, daily: float) -> None:
        for name in SCENARIOS:
            self.scenario(name).cost += daily
        self.days_processed += 1

    def snapshot(self) -> dict:
        out = {
            "days_processed": float(self.days_processed),
            "total_consumption_kwh": float(self.total_consumption_kwh),
            "total_charge_kwh": float(self.total_charge_kwh),
            "total_discharge_kwh": float(self.total_discharge_kwh),
        }
        for name in SCENARIOS:
            t = self.scenario(name)
            out[f"{name}_cost"] = float(t.cost)
            out[f"{name}_imported_kwh"] = float(t.imported_kwh)
            out[f"{name}_exported_kwh"] = float(t.exported_kwh)
        return out

    def summarize(self, minor_per_major: float = 100.0) -> RunSummary:
        """Convert costs to major units and derive per-year and pairwise figures.

        With no days processed the rates are reported as 0.
        """
        days = self.days_processed
        years = days / DAYS_PER_YEAR

        def _rate(v: float, n: float) -> float:
            return v / n if n > 0 else 0.0

        costs = {name: self.scenario(name).cost / minor_per_major for name in SCENARIOS}
        scenarios = {
            name: ScenarioSummary(
                title=SCENARIO_TITLES[name],
                cost=costs[name],
                cost_per_year=_rate(costs[name], years),
                imported_kwh=self.scenario(name).imported_kwh,
                exported_kwh=self.scenario(name).exported_kwh,
            )
            for name in SCENARIOS
        }

        differences = {}
        for a, b in (("no_solar", "solar"), ("no_solar", "solar_battery"), ("solar", "solar_battery")):
            diff = costs[a] - costs[b]
            key = f"{a}-{b}"
            differences[key] = CostDifference(
                title=f"{SCENARIO_TITLES[a].lower()}/{SCENARIO_TITLES[b].lower()}",
                total=diff,
                per_day=_rate(diff, days),
                per_year=_rate(diff, years),
            )

        return RunSummary(
            days=days,
            years=years,
            scenarios=scenarios,
            differences=differences,
            total_consumption_kwh=self.total_consumption_kwh,
            total_charge_kwh=self.total_charge_kwh,
            total_discharge_kwh=self.total_discharge_kwh,
        )
