from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

TariffLookup = Literal["dated", "first"]


class BatteryConfig(BaseModel):
    size: float = Field(gt=0, description="Usable battery capacity (kWh)")
    recharge: float = Field(gt=0, le=100, description="Recharge efficiency (%)")
    discharge: float = Field(gt=0, description="Max charge/discharge rate (kWh per hour)")
    initial_charge: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Starting charge (kWh). Defaults to one hour of discharge.",
    )

    @property
    def efficiency(self) -> float:
        return self.recharge / 100.0


class CostPeriod(BaseModel):
    """
    One tariff period. Rates are in minor currency units (e.g. cents).
    A period without a start date applies from the beginning of time.
    """
    start: Optional[date] = None
    daily: float = Field(default=0.0, ge=0.0, description="Daily supply charge")
    kwh: float = Field(ge=0.0, description="Import rate per kWh")
    feed_in: float = Field(default=0.0, ge=0.0, description="Feed-in credit per kWh")

    @field_validator("start", mode="before")
    @classmethod
    def _blank_start(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ModelConfig(BaseModel):
    battery: BatteryConfig
    years: List[int] = Field(default_factory=list)
    cost: List[CostPeriod] = Field(min_length=1)

    max_interval_minutes: float = Field(default=10, gt=0)
    tariff_lookup: TariffLookup = Field(
        default="dated",
        description="'dated' selects the period by start date; 'first' always uses the first period.",
    )
    clamp_overcharge: bool = Field(
        default=False,
        description="Clamp the battery level to its size after an overcharge is detected.",
    )


@dataclass(frozen=True)
class Sample:
    timestamp: datetime
    imp: Union[str, float]
    exp: Union[str, float]
    gen: Union[str, float]


class DayRecord(BaseModel):
    day: Optional[date] = None
    source: str

    samples: int = 0
    intervals: int = 0
    gaps: int = 0
    skipped_rows: int = 0

    consumption_kwh: float = 0.0
    no_solar_cost: float = 0.0
    solar_cost: float = 0.0
    solar_battery_cost: float = 0.0

    battery_kwh: float = 0.0
