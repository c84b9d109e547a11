from __future__ import annotations

import math

from ecoclicker.catalog import UpgradeDef


def price_of(definition: UpgradeDef, count: int) -> int:
    """Price of the next unit: floor(base_price * growth_factor^count)."""
    return math.floor(definition.base_price * definition.growth_factor ** count)


def is_purchasable(definition: UpgradeDef, count: int) -> bool:
    """False once an upgrade with a max_level has reached it."""
    return definition.max_level is None or count < definition.max_level


def time_to_afford(price: float, currency: float, rate: float) -> float | None:
    """Seconds until *price* is affordable at *rate*. None if never."""
    if currency >= price:
        return 0.0
    if rate <= 0:
        return None
    return (price - currency) / rate
