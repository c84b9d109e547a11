from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ecoclicker.catalog import Category, EffectKind
from ecoclicker.composition import DerivedRates
from ecoclicker.ledger import SimClock
from ecoclicker.tiers import HarmTier


@dataclass(frozen=True)
class UpgradeStatus:
    """Read-only snapshot of one upgrade for query results."""

    id: str
    display_name: str
    category: Category
    kind: EffectKind
    count: int
    current_price: int
    max_level: int | None
    purchasable: bool
    affordable: bool


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only view of a GameState at one instant."""

    currency: float
    harm: float
    total_earned: float
    power_consumed: float
    water_consumed: float
    request_count: float
    clock: SimClock
    rates: DerivedRates
    tier: HarmTier
    tick_count: int
    elapsed_seconds: float
    upgrades: tuple[UpgradeStatus, ...] = ()
    real_world: dict[str, float] = field(default_factory=dict)

    def upgrade(self, upgrade_id: str) -> UpgradeStatus | None:
        for status in self.upgrades:
            if status.id == upgrade_id:
                return status
        return None

    def count(self, upgrade_id: str) -> int:
        status = self.upgrade(upgrade_id)
        return status.count if status else 0

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form. Derived rates are included for display only."""
        return {
            "currency": self.currency,
            "harm": self.harm,
            "total_earned": self.total_earned,
            "power_consumed": self.power_consumed,
            "water_consumed": self.water_consumed,
            "request_count": self.request_count,
            "real_world": dict(self.real_world),
            "clock": {
                "day": self.clock.day,
                "hour": self.clock.hour,
                "minute": self.clock.minute,
            },
            "tick_count": self.tick_count,
            "counts": {u.id: u.count for u in self.upgrades},
            "rates": {
                "currency_rate": self.rates.currency_rate,
                "harm_rate": self.rates.harm_rate,
                "click_power": self.rates.click_power,
                "multipliers": dict(self.rates.multipliers),
            },
            "tier": {"index": self.tier.index, "label": self.tier.label},
        }
