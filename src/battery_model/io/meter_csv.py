from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from battery_model.io.schema import Sample

log = logging.getLogger("battery_model.meter_csv")

# Header names written by the meter logger. The first header cell is usually
# commented out, e.g. "#date,time,EXP,IMP,GEN-T,..."
H_DATE = "date"
H_TIME = "time"
H_IMPORT = "IMP"
H_EXPORT = "EXP"
H_GEN = "GEN-T"
REQUIRED_HEADERS = (H_DATE, H_TIME, H_IMPORT, H_EXPORT, H_GEN)

TIME_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S")


class MeterFileError(ValueError):
    """A meter file that cannot be used at all. The caller skips it."""


@dataclass
class MeterDay:
    path: Path
    samples: List[Sample] = field(default_factory=list)
    skipped_rows: int = 0


def discover_files(base_dir: Union[str, Path], years: Iterable[int]) -> List[Path]:
    """
    Collect every regular file under base_dir/<year> for the given years,
    sorted by path. Files are expected to be named by date (yyyy-mm-dd...)
    so the sort is chronological, one file per day.
    """
    base = Path(base_dir)
    files: List[Path] = []
    for year in years:
        year_dir = base / str(year)
        if not year_dir.is_dir():
            raise FileNotFoundError(f"Missing year directory: {year_dir}")
        files.extend(p for p in year_dir.rglob("*") if p.is_file())
    return sorted(files, key=str)


def parse_timestamp(date_s: str, time_s: str) -> Optional[datetime]:
    text = f"{date_s.strip()} {time_s.strip()}"
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _column_index(header: List[str]) -> dict:
    cols = {}
    for i, name in enumerate(header):
        name = name.strip()
        if name.startswith("#"):
            name = name[1:].strip()
        # a repeated header name maps to its last column
        if name in REQUIRED_HEADERS:
            cols[name] = i
    return cols


def read_meter_file(path: Union[str, Path]) -> MeterDay:
    """Read one day of meter samples.

    Raises MeterFileError for an empty file or missing header columns, OSError
    for an unreadable one. Short rows and unparseable timestamps are logged and
    skipped.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        try:
            rows = list(csv.reader(f))
        except csv.Error as e:
            raise MeterFileError(f"{path}: {e}") from e

    # header plus at least one data row
    if len(rows) < 2:
        raise MeterFileError(f"{path}: empty file")

    header = rows[0]
    cols = _column_index(header)
    missing = [h for h in REQUIRED_HEADERS if h not in cols]
    if missing:
        raise MeterFileError(f"{path}: missing required columns {missing}")

    day = MeterDay(path=path)
    for lineno, row in enumerate(rows[1:], start=1):
        if not row:
            continue
        if len(row) < len(header):
            log.warning("%s: %d: mismatch in column count", path, lineno)
            day.skipped_rows += 1
            continue
        ts = parse_timestamp(row[cols[H_DATE]], row[cols[H_TIME]])
        if ts is None:
            log.warning("%s: %d: cannot parse date (%s %s)", path, lineno, row[cols[H_DATE]], row[cols[H_TIME]])
            day.skipped_rows += 1
            continue
        day.samples.append(
            Sample(
                timestamp=ts,
                imp=row[cols[H_IMPORT]],
                exp=row[cols[H_EXPORT]],
                gen=row[cols[H_GEN]],
            )
        )
    return day
