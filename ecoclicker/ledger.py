from __future__ import annotations

from dataclasses import dataclass, field

from ecoclicker.catalog import POWER, REQUESTS, WATER

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


@dataclass(frozen=True)
class SimClock:
    """In-game calendar position. Day numbering starts at 1."""

    day: int = 1
    hour: int = 0
    minute: int = 0

    @classmethod
    def normalized(cls, day: int = 1, hour: int = 0, minute: int = 0) -> SimClock:
        """Build a clock from possibly out-of-range parts, rolling over
        excess minutes and hours. Days below 1 and negative times are clamped."""
        total = max(0, int(hour) * MINUTES_PER_HOUR + int(minute))
        return cls(day=max(1, int(day))).advanced(total)

    def advanced(self, minutes: int) -> SimClock:
        total = self.minute + int(minutes)
        hours, minute = divmod(total, MINUTES_PER_HOUR)
        days, hour = divmod(self.hour + hours, HOURS_PER_DAY)
        return SimClock(day=self.day + days, hour=hour, minute=minute)

    def __str__(self) -> str:
        return f"Day {self.day}, {self.hour:02d}:{self.minute:02d}"


@dataclass
class ResourceLedger:
    """Mutable accumulators for every resource the game tracks.

    Currency and harm are clamped at zero. The sub-resource counters only ever
    grow; the negative part of a delta is dropped.
    """

    currency: float = 0.0
    harm: float = 0.0
    total_earned: float = 0.0
    power_consumed: float = 0.0
    water_consumed: float = 0.0
    request_count: float = 0.0
    real_world: dict[str, float] = field(default_factory=dict)
    clock: SimClock = field(default_factory=SimClock)

    def add_currency(self, delta: float) -> None:
        self.currency = max(0.0, self.currency + delta)
        if delta > 0:
            self.total_earned += delta

    def add_harm(self, delta: float) -> None:
        self.harm = max(0.0, self.harm + delta)

    def spend_currency(self, amount: float) -> bool:
        """Debit exactly *amount*. Returns False, untouched, if short."""
        if amount < 0 or self.currency < amount:
            return False
        self.currency -= amount
        return True

    def add_power(self, delta: float) -> None:
        self.power_consumed += max(0.0, delta)

    def add_water(self, delta: float) -> None:
        self.water_consumed += max(0.0, delta)

    def add_requests(self, delta: float) -> None:
        self.request_count += max(0.0, delta)

    def add_sub_resource(self, channel: str, delta: float) -> None:
        """Dispatch to the monotonic counter backing *channel*."""
        adder = {
            POWER: self.add_power,
            WATER: self.add_water,
            REQUESTS: self.add_requests,
        }.get(channel)
        if adder is None:
            raise KeyError(f"Unknown sub-resource channel: {channel!r}")
        adder(delta)

    def add_real_world(self, channel: str, delta: float) -> None:
        self.real_world[channel] = self.real_world.get(channel, 0.0) + max(0.0, delta)

    def advance_clock(self, minutes: int) -> None:
        self.clock = self.clock.advanced(minutes)
