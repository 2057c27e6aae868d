from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from battery_model.io.schema import CostPeriod, TariffLookup


class TariffResolver:
    """Map a date to one of the configured cost periods.

    In "dated" mode the period with the latest start on or before the date wins;
    a period without a start always qualifies. Dates before every period fall
    back to the first one. "first" mode always returns the first period.
    """

    def __init__(self, periods: Sequence[CostPeriod], lookup: TariffLookup = "dated") -> None:
        if not periods:
            raise ValueError("At least one cost period is required")
        self.periods: List[CostPeriod] = list(periods)
        self.lookup = lookup

    def resolve(self, when: Optional[Union[date, datetime]]) -> int:
        if self.lookup == "first" or when is None:
            return 0
        day = when.date() if isinstance(when, datetime) else when

        best: Optional[int] = None
        best_start = date.min
        for i, p in enumerate(self.periods):
            start = p.start or date.min
            if start > day:
                continue
            # ties keep the earlier entry
            if best is None or start > best_start:
                best, best_start = i, start
        return 0 if best is None else best

    def period_for(self, when: Optional[Union[date, datetime]]) -> CostPeriod:
        return self.periods[self.resolve(when)]
