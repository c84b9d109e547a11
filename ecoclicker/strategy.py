from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ecoclicker.catalog import Category
from ecoclicker.snapshot import StateSnapshot, UpgradeStatus


@dataclass
class ClickProfile:
    """Configures click behavior for strategies."""

    clicks_per_second: float = 0.0
    # Stop clicking once passive income reaches this rate.
    until_currency_rate: float | None = None

    def rate(self, snapshot: StateSnapshot) -> float:
        if (
            self.until_currency_rate is not None
            and snapshot.rates.currency_rate >= self.until_currency_rate
        ):
            return 0.0
        return self.clicks_per_second


class Strategy(ABC):
    """Base class for playthrough strategies."""

    def __init__(self, click_profile: ClickProfile | None = None) -> None:
        self.click_profile = click_profile

    @abstractmethod
    def decide_purchases(self, snapshot: StateSnapshot) -> list[str]:
        """Return ordered list of upgrade IDs to buy."""
        ...

    def clicks_per_second(self, snapshot: StateSnapshot) -> float:
        if self.click_profile is None:
            return 0.0
        return self.click_profile.rate(snapshot)

    @abstractmethod
    def describe(self) -> str: ...


def _cheapest(candidates: list[UpgradeStatus]) -> list[str]:
    if not candidates:
        return []
    best = min(candidates, key=lambda u: u.current_price)
    return [best.id]


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable upgrade, whatever it does."""

    def decide_purchases(self, snapshot: StateSnapshot) -> list[str]:
        return _cheapest([u for u in snapshot.upgrades if u.affordable])

    def describe(self) -> str:
        return "GreedyCheapest"


class EcoBalanced(Strategy):
    """Grow like GreedyCheapest, but switch to mitigation and efficiency
    upgrades whenever harm sits above *max_tier*."""

    GREEN = (Category.MITIGATION, Category.EFFICIENCY)

    def __init__(
        self,
        click_profile: ClickProfile | None = None,
        max_tier: int = 1,
    ) -> None:
        super().__init__(click_profile)
        self.max_tier = max_tier

    def decide_purchases(self, snapshot: StateSnapshot) -> list[str]:
        affordable = [u for u in snapshot.upgrades if u.affordable]
        if snapshot.tier.index <= self.max_tier:
            return _cheapest(affordable)
        green = [u for u in affordable if u.category in self.GREEN]
        # Save up for mitigation rather than grow harm further.
        return _cheapest(green)

    def describe(self) -> str:
        return f"EcoBalanced(max_tier={self.max_tier})"


class PriorityList(Strategy):
    """Buy upgrades in a fixed order of preference."""

    def __init__(
        self,
        priorities: list[str],
        click_profile: ClickProfile | None = None,
    ) -> None:
        super().__init__(click_profile)
        self.priorities = priorities

    def decide_purchases(self, snapshot: StateSnapshot) -> list[str]:
        for uid in self.priorities:
            status = snapshot.upgrade(uid)
            if status is not None and status.affordable:
                return [uid]
        return []

    def describe(self) -> str:
        return f"PriorityList({self.priorities})"
