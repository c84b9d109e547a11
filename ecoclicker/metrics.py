from __future__ import annotations

from dataclasses import dataclass

from ecoclicker.snapshot import StateSnapshot


@dataclass
class Sample:
    time: float
    currency: float
    harm: float
    currency_rate: float
    harm_rate: float
    tier: int
    power_consumed: float
    water_consumed: float
    request_count: float


@dataclass
class PurchaseEvent:
    time: float
    upgrade_id: str
    price: int
    currency_after: float
    harm_after: float


@dataclass
class TierEvent:
    time: float
    from_tier: int
    to_tier: int
    label: str


class MetricsCollector:
    """Collects playthrough metrics at configurable intervals."""

    def __init__(self, snapshot_interval: float = 1.0) -> None:
        self.snapshot_interval = snapshot_interval
        self._last_sample_time: float = -1.0

        self.samples: list[Sample] = []
        self.purchases: list[PurchaseEvent] = []
        self.tier_events: list[TierEvent] = []
        self.total_clicks: int = 0

    def record_tick(self, snapshot: StateSnapshot, force: bool = False) -> None:
        """Record a sample if enough simulated time has passed."""
        t = snapshot.elapsed_seconds
        if force or t - self._last_sample_time >= self.snapshot_interval:
            self.samples.append(
                Sample(
                    time=t,
                    currency=snapshot.currency,
                    harm=snapshot.harm,
                    currency_rate=snapshot.rates.currency_rate,
                    harm_rate=snapshot.rates.harm_rate,
                    tier=snapshot.tier.index,
                    power_consumed=snapshot.power_consumed,
                    water_consumed=snapshot.water_consumed,
                    request_count=snapshot.request_count,
                )
            )
            self._last_sample_time = t

    def record_purchase(
        self, snapshot: StateSnapshot, upgrade_id: str, price: int
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=snapshot.elapsed_seconds,
                upgrade_id=upgrade_id,
                price=price,
                currency_after=snapshot.currency,
                harm_after=snapshot.harm,
            )
        )

    def record_tier_change(
        self, time: float, from_tier: int, to_tier: int, label: str
    ) -> None:
        self.tier_events.append(TierEvent(time, from_tier, to_tier, label))

    def record_clicks(self, count: int) -> None:
        self.total_clicks += count
