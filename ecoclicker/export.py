from __future__ import annotations

import csv
import json
from pathlib import Path

from ecoclicker.report import SimulationReport


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Export playthrough data as CSV files.

    Creates three files:
      - {path}_samples.csv
      - {path}_purchases.csv
      - {path}_tiers.csv
    """
    base = str(path)

    with open(f"{base}_samples.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "time", "currency", "harm", "currency_rate", "harm_rate", "tier",
            "power_consumed", "water_consumed", "request_count",
        ])
        for s in report.samples:
            writer.writerow([
                s.time, s.currency, s.harm, s.currency_rate, s.harm_rate, s.tier,
                s.power_consumed, s.water_consumed, s.request_count,
            ])

    with open(f"{base}_purchases.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "upgrade_id", "price", "currency_after", "harm_after"])
        for p in report.purchases:
            writer.writerow([p.time, p.upgrade_id, p.price, p.currency_after, p.harm_after])

    with open(f"{base}_tiers.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "from_tier", "to_tier", "label"])
        for ev in report.tier_events:
            writer.writerow([ev.time, ev.from_tier, ev.to_tier, ev.label])


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Export the full report as JSON."""
    data = {
        "game": report.game_name,
        "strategy": report.strategy_description,
        "total_time": report.total_time,
        "final_state": report.final_state,
        "total_clicks": report.total_clicks,
        "purchase_count": len(report.purchases),
        "purchases_per_minute": report.purchases_per_minute,
        "max_purchase_gap": report.max_purchase_gap,
        "mean_purchase_gap": report.mean_purchase_gap,
        "peak_harm": report.peak_harm,
        "tier_first_reached": report.tier_first_reached,
        "time_in_tier": {str(k): v for k, v in report.time_in_tier.items()},
        "purchases": [
            {"time": p.time, "upgrade_id": p.upgrade_id, "price": p.price}
            for p in report.purchases
        ],
        "tier_events": [
            {"time": ev.time, "from": ev.from_tier, "to": ev.to_tier, "label": ev.label}
            for ev in report.tier_events
        ],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
