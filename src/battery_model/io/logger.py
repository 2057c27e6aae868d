from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import pandas as pd

from battery_model.io.schema import DayRecord


@dataclass
class DayLogger:
    out_path: Path

    def __post_init__(self) -> None:
        self.out_path = Path(self.out_path)
        self._records: List[DayRecord] = []

    @property
    def records(self) -> List[DayRecord]:
        return list(self._records)

    def append(self, rec: DayRecord) -> None:
        self._records.append(rec)

    def to_frame(self) -> pd.DataFrame:
        rows = []
        for r in self._records:
            row = r.model_dump()
            row["day"] = r.day.isoformat() if r.day else ""
            rows.append(row)
        return pd.DataFrame(rows, columns=list(DayRecord.model_fields))

    def flush(self) -> str:
        """Write the per-day CSV. Returns the file path, or "" if nothing was logged."""
        if not self._records:
            return ""
        self.out_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_frame().to_csv(self.out_path, index=False)
        return str(self.out_path)
