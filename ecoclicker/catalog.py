from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Iterator, Mapping

CURRENCY = "currency"
HARM = "harm"
CLICK = "click"
POWER = "power"
WATER = "water"
REQUESTS = "requests"

MULTIPLIER_CHANNELS: tuple[str, ...] = (POWER, WATER, REQUESTS)


class Category(Enum):
    PRODUCTION = auto()
    MITIGATION = auto()
    EFFICIENCY = auto()


class EffectKind(Enum):
    PASSIVE = auto()
    INSTANT = auto()


# Channels each (category, kind) combination may carry.
ALLOWED_CHANNELS: dict[tuple[Category, EffectKind], frozenset[str]] = {
    (Category.PRODUCTION, EffectKind.PASSIVE): frozenset({CURRENCY, HARM, CLICK}),
    (Category.PRODUCTION, EffectKind.INSTANT): frozenset({CURRENCY, HARM}),
    (Category.MITIGATION, EffectKind.PASSIVE): frozenset({HARM}),
    (Category.MITIGATION, EffectKind.INSTANT): frozenset({HARM}),
    (Category.EFFICIENCY, EffectKind.PASSIVE): frozenset(MULTIPLIER_CHANNELS),
}


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of a purchasable upgrade."""

    id: str
    base_price: float
    category: Category
    kind: EffectKind = EffectKind.PASSIVE
    effects: Mapping[str, float] = field(default_factory=dict)
    growth_factor: float = 1.15
    max_level: int | None = None
    display_name: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)
        object.__setattr__(self, "effects", MappingProxyType(dict(self.effects)))

    def effect(self, channel: str) -> float:
        return self.effects.get(channel, 0.0)

    def problems(self) -> list[str]:
        """Return everything wrong with this definition (empty when valid)."""
        errors: list[str] = []
        if self.base_price <= 0:
            errors.append(f"Upgrade {self.id!r} must have a positive base_price")
        if self.growth_factor <= 0:
            errors.append(f"Upgrade {self.id!r} must have a positive growth_factor")
        if self.max_level is not None and self.max_level < 0:
            errors.append(f"Upgrade {self.id!r} has a negative max_level")

        allowed = ALLOWED_CHANNELS.get((self.category, self.kind))
        if allowed is None:
            errors.append(
                f"Upgrade {self.id!r}: {self.category.name} upgrades cannot be "
                f"{self.kind.name}"
            )
            return errors

        for channel, magnitude in self.effects.items():
            if channel not in allowed:
                errors.append(
                    f"Upgrade {self.id!r}: channel {channel!r} is not valid for "
                    f"{self.category.name}/{self.kind.name}"
                )
            elif self.category is Category.MITIGATION and magnitude >= 0:
                errors.append(
                    f"Upgrade {self.id!r}: mitigation effects must be negative"
                )
            elif self.category is Category.EFFICIENCY and magnitude < 0:
                if self.max_level is None:
                    errors.append(
                        f"Upgrade {self.id!r}: negative {channel!r} multiplier "
                        f"needs a max_level"
                    )
                elif 1.0 + magnitude * self.max_level <= 0:
                    errors.append(
                        f"Upgrade {self.id!r}: {channel!r} multiplier reaches zero "
                        f"at max_level {self.max_level}"
                    )
        return errors


class Upgrade:
    """Constructors for the legal upgrade variants."""

    @staticmethod
    def production(
        id: str,
        base_price: float,
        currency: float = 0.0,
        harm: float = 0.0,
        click: float = 0.0,
        instant: bool = False,
        **kwargs,
    ) -> UpgradeDef:
        """Generates currency (and usually harm) per owned unit.

        With ``instant=True`` the currency/harm values are applied once at
        purchase time instead of per second.
        """
        effects = {CURRENCY: currency, HARM: harm, CLICK: click}
        return UpgradeDef(
            id=id,
            base_price=base_price,
            category=Category.PRODUCTION,
            kind=EffectKind.INSTANT if instant else EffectKind.PASSIVE,
            effects={k: v for k, v in effects.items() if v},
            **kwargs,
        )

    @staticmethod
    def mitigation(
        id: str,
        base_price: float,
        harm: float,
        instant: bool = False,
        **kwargs,
    ) -> UpgradeDef:
        """Reduces harm, per second when passive or once when instant."""
        return UpgradeDef(
            id=id,
            base_price=base_price,
            category=Category.MITIGATION,
            kind=EffectKind.INSTANT if instant else EffectKind.PASSIVE,
            effects={HARM: -abs(harm)},
            **kwargs,
        )

    @staticmethod
    def efficiency(
        id: str,
        base_price: float,
        multipliers: Mapping[str, float],
        **kwargs,
    ) -> UpgradeDef:
        """Scales sub-resource draw by ``(1 + magnitude * count)`` per channel."""
        return UpgradeDef(
            id=id,
            base_price=base_price,
            category=Category.EFFICIENCY,
            kind=EffectKind.PASSIVE,
            effects=dict(multipliers),
            **kwargs,
        )


class UpgradeCatalog:
    """Immutable, ordered collection of upgrade definitions."""

    def __init__(self, upgrades: list[UpgradeDef] | tuple[UpgradeDef, ...]) -> None:
        self._upgrades: tuple[UpgradeDef, ...] = tuple(upgrades)
        self._by_id: dict[str, UpgradeDef] = {u.id: u for u in self._upgrades}

    def __iter__(self) -> Iterator[UpgradeDef]:
        return iter(self._upgrades)

    def __len__(self) -> int:
        return len(self._upgrades)

    def __contains__(self, upgrade_id: object) -> bool:
        return upgrade_id in self._by_id

    def get(self, upgrade_id: str) -> UpgradeDef | None:
        return self._by_id.get(upgrade_id)

    def ids(self) -> list[str]:
        return [u.id for u in self._upgrades]

    def by_category(self, category: Category) -> list[UpgradeDef]:
        return [u for u in self._upgrades if u.category is category]

    def validate(self) -> list[str]:
        errors: list[str] = []
        seen: set[str] = set()
        for u in self._upgrades:
            if u.id in seen:
                errors.append(f"Duplicate upgrade ID: {u.id!r}")
            seen.add(u.id)
            errors.extend(u.problems())
        return errors
