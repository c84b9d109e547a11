from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ecoclicker.metrics import MetricsCollector, PurchaseEvent, Sample, TierEvent


@dataclass
class SimulationReport:
    """Container for playthrough results and derived metrics."""

    game_name: str = ""
    strategy_description: str = ""
    total_time: float = 0.0
    final_state: dict[str, Any] = field(default_factory=dict)

    # Raw metrics
    samples: list[Sample] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)
    tier_events: list[TierEvent] = field(default_factory=list)
    total_clicks: int = 0

    # Derived metrics
    purchase_gaps: list[float] = field(default_factory=list)
    max_purchase_gap: float = 0.0
    mean_purchase_gap: float = 0.0
    purchases_per_minute: float = 0.0
    peak_harm: float = 0.0
    tier_first_reached: dict[str, float] = field(default_factory=dict)
    time_in_tier: dict[int, float] = field(default_factory=dict)

    @property
    def final_tier_label(self) -> str:
        return self.final_state.get("tier", {}).get("label", "")

    def purchase_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for p in self.purchases:
            counts[p.upgrade_id] = counts.get(p.upgrade_id, 0) + 1
        return counts

    def currency_series(self) -> list[tuple[float, float]]:
        """Return (time, currency) series."""
        return [(s.time, s.currency) for s in self.samples]

    def harm_series(self) -> list[tuple[float, float]]:
        """Return (time, harm) series."""
        return [(s.time, s.harm) for s in self.samples]


def _time_in_tier(
    tier_events: list[TierEvent], total_time: float, initial_tier: int
) -> dict[int, float]:
    spans: dict[int, float] = {}
    current, since = initial_tier, 0.0
    for ev in tier_events:
        spans[current] = spans.get(current, 0.0) + ev.time - since
        current, since = ev.to_tier, ev.time
    spans[current] = spans.get(current, 0.0) + max(0.0, total_time - since)
    return spans


def build_report(
    collector: MetricsCollector,
    game_name: str,
    strategy_description: str,
    total_time: float,
    final_state: dict[str, Any],
    initial_tier: int = 0,
) -> SimulationReport:
    """Build a SimulationReport from collected metrics."""
    # Purchase gaps
    purchase_gaps: list[float] = []
    purchase_times = sorted(p.time for p in collector.purchases)
    if purchase_times:
        purchase_gaps.append(purchase_times[0])  # gap from t=0 to first purchase
        for i in range(1, len(purchase_times)):
            purchase_gaps.append(purchase_times[i] - purchase_times[i - 1])

    max_gap = max(purchase_gaps) if purchase_gaps else 0.0
    mean_gap = (sum(purchase_gaps) / len(purchase_gaps)) if purchase_gaps else 0.0
    ppm = (len(collector.purchases) / total_time * 60.0) if total_time > 0 else 0.0

    peak_harm = max((s.harm for s in collector.samples), default=0.0)
    peak_harm = max(peak_harm, final_state.get("harm", 0.0))

    first_reached: dict[str, float] = {}
    for ev in collector.tier_events:
        first_reached.setdefault(ev.label, ev.time)

    return SimulationReport(
        game_name=game_name,
        strategy_description=strategy_description,
        total_time=total_time,
        final_state=final_state,
        samples=collector.samples,
        purchases=collector.purchases,
        tier_events=collector.tier_events,
        total_clicks=collector.total_clicks,
        purchase_gaps=purchase_gaps,
        max_purchase_gap=max_gap,
        mean_purchase_gap=mean_gap,
        purchases_per_minute=ppm,
        peak_harm=peak_harm,
        tier_first_reached=first_reached,
        time_in_tier=_time_in_tier(collector.tier_events, total_time, initial_tier),
    )
