from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ecoclicker.catalog import (
    CLICK,
    CURRENCY,
    HARM,
    MULTIPLIER_CHANNELS,
    Category,
    EffectKind,
    UpgradeCatalog,
)


@dataclass(frozen=True)
class DerivedRates:
    """Rates and multipliers derived from the owned upgrade counts."""

    currency_rate: float = 0.0
    harm_rate: float = 0.0
    click_power: float = 1.0
    multipliers: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(
            {c: 1.0 for c in MULTIPLIER_CHANNELS}
        )
    )

    def multiplier(self, channel: str) -> float:
        return self.multipliers.get(channel, 1.0)


def compose(
    catalog: UpgradeCatalog,
    counts: Mapping[str, int],
    base_click_power: float = 1.0,
) -> DerivedRates:
    """Compute derived rates from scratch for the given owned counts.

    Production and mitigation upgrades add ``magnitude * count`` to their
    rate channels. Efficiency upgrades multiply ``1 + magnitude * count``
    into their channel multiplier, so two different -10% upgrades give 0.81,
    not 0.8. Instant effects never contribute.
    """
    currency_rate = 0.0
    harm_rate = 0.0
    click_power = base_click_power
    multipliers = {c: 1.0 for c in MULTIPLIER_CHANNELS}

    for udef in catalog:
        count = counts.get(udef.id, 0)
        if count <= 0 or udef.kind is EffectKind.INSTANT:
            continue
        if udef.category is Category.EFFICIENCY:
            for channel, magnitude in udef.effects.items():
                multipliers[channel] = multipliers.get(channel, 1.0) * (
                    1.0 + magnitude * count
                )
        else:
            currency_rate += udef.effect(CURRENCY) * count
            harm_rate += udef.effect(HARM) * count
            click_power += udef.effect(CLICK) * count

    return DerivedRates(
        currency_rate=currency_rate,
        harm_rate=harm_rate,
        click_power=click_power,
        multipliers=MappingProxyType(multipliers),
    )
