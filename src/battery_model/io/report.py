from __future__ import annotations

from typing import List

from battery_model.metrics.totals import RunSummary


def format_report(summary: RunSummary, currency: str = "$") -> str:
    """Plain-text comparison of the three scenarios."""
    lines: List[str] = []
    lines.append(f"Days: {summary.days}, years: {summary.years:.1f}")
    lines.append("              | Total cost |  Cost PA  |  Import  |  Export  |")
    for s in summary.scenarios.values():
        cost = f"{currency}{s.cost:.2f}"
        pa = f"{currency}{s.cost_per_year:.2f}"
        lines.append(f"{s.title:<14}| {cost:>10} | {pa:>9} | {s.imported_kwh:8.0f} | {s.exported_kwh:8.0f} |")
    lines.append(
        f"Total consumption: {summary.total_consumption_kwh:.0f}kWh, "
        f"battery charging {summary.total_charge_kwh:.0f}kWh, "
        f"battery discharge {summary.total_discharge_kwh:.0f}kWh"
    )
    for d in summary.differences.values():
        lines.append(
            f"Between {d.title}: total {currency}{d.total:.2f}, "
            f"per day: {currency}{d.per_day:.2f}, per year: {currency}{d.per_year:.2f}"
        )
    return "\n".join(lines)
