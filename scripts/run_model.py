from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure src/ is importable when running this script without installing the package
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from battery_model.engine.simulator import Simulator
from battery_model.io.config import apply_overrides, load_config
from battery_model.io.logger import DayLogger
from battery_model.io.meter_csv import discover_files
from battery_model.io.report import format_report


def main():
    ap = argparse.ArgumentParser(
        description="Model no-solar, solar and solar+battery costs from historical meter CSV files."
    )

    ap.add_argument("--dir", type=str, default="/var/lib/MeterMan/csv", help="Base directory for CSV files")
    ap.add_argument("--config", type=str, default="costs.yml", help="YAML config file")
    ap.add_argument("--interval", type=float, default=None, help="Max minutes between samples (overrides config)")
    ap.add_argument("--clamp", action="store_true", help="Clamp battery charge to its size on overcharge")
    ap.add_argument("--tariff-lookup", choices=["dated", "first"], default=None, help="Cost period selection")
    ap.add_argument("--daily-csv", type=str, default=None, help="Write per-day results to this CSV file")
    ap.add_argument("--log-level", type=str, default="WARNING")

    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("battery_model")

    try:
        cfg = load_config(args.config)
    except Exception as e:
        log.error("Can't load config %s: %s", args.config, e)
        return 1

    try:
        cfg = apply_overrides(
            cfg,
            max_interval_minutes=args.interval,
            clamp_overcharge=True if args.clamp else None,
            tariff_lookup=args.tariff_lookup,
        )
    except ValueError as e:
        log.error("Invalid option: %s", e)
        return 1

    try:
        files = discover_files(args.dir, cfg.years)
    except OSError as e:
        log.error("%s: %s", args.dir, e)
        return 1

    day_logger = DayLogger(out_path=Path(args.daily_csv)) if args.daily_csv else None
    sim = Simulator(cfg, day_logger=day_logger)
    totals = sim.run(files)

    print(format_report(totals.summarize()))
    if day_logger is not None:
        path = day_logger.flush()
        if path:
            print(f"Daily results: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
