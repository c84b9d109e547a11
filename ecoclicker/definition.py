from __future__ import annotations

from dataclasses import dataclass, field

from ecoclicker.catalog import MULTIPLIER_CHANNELS, UpgradeCatalog, UpgradeDef
from ecoclicker.tiers import DEFAULT_LABELS, DEFAULT_MAX_HARM, DEFAULT_THRESHOLDS


@dataclass
class GameConfig:
    """Top-level game configuration."""

    name: str = "Untitled"
    tick_rate: int = 10
    minutes_per_tick: int = 1
    base_click_power: float = 1.0
    click_harm: float = 0.1
    initial_currency: float = 0.0
    max_harm: float = DEFAULT_MAX_HARM
    tier_thresholds: tuple[float, ...] = DEFAULT_THRESHOLDS
    tier_labels: tuple[str, ...] = DEFAULT_LABELS
    # Per-second draw of each sub-resource, scaled by its channel multiplier.
    resource_base_rates: dict[str, float] = field(default_factory=dict)
    # Illustrative real-world counters; fixed rates, never multiplied.
    real_world_rates: dict[str, float] = field(default_factory=dict)


@dataclass
class GameDefinition:
    """Complete static definition of a game: config plus upgrade catalog."""

    config: GameConfig = field(default_factory=GameConfig)
    upgrades: list[UpgradeDef] = field(default_factory=list)

    catalog: UpgradeCatalog = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.catalog = UpgradeCatalog(self.upgrades)

    def get_upgrade(self, id: str) -> UpgradeDef | None:
        return self.catalog.get(id)

    def validate(self) -> list[str]:
        """Check for definition errors. Returns list of error messages."""
        errors = self.catalog.validate()
        cfg = self.config

        if cfg.tick_rate <= 0:
            errors.append(f"tick_rate must be positive, got {cfg.tick_rate}")
        if cfg.minutes_per_tick < 0:
            errors.append(
                f"minutes_per_tick cannot be negative, got {cfg.minutes_per_tick}"
            )
        if cfg.max_harm <= 0:
            errors.append(f"max_harm must be positive, got {cfg.max_harm}")
        if list(cfg.tier_thresholds) != sorted(cfg.tier_thresholds):
            errors.append("tier_thresholds must be ascending")
        if len(cfg.tier_labels) != len(cfg.tier_thresholds) + 1:
            errors.append(
                f"Expected {len(cfg.tier_thresholds) + 1} tier labels, "
                f"got {len(cfg.tier_labels)}"
            )
        for channel, rate in cfg.resource_base_rates.items():
            if channel not in MULTIPLIER_CHANNELS:
                errors.append(f"Unknown sub-resource channel {channel!r}")
            if rate < 0:
                errors.append(f"Base rate for {channel!r} cannot be negative")
        for channel, rate in cfg.real_world_rates.items():
            if rate < 0:
                errors.append(f"Real-world rate for {channel!r} cannot be negative")

        return errors
