"""AI vs. the Planet: grow an AI business without cooking the world."""
from __future__ import annotations

from ecoclicker.catalog import POWER, REQUESTS, WATER, Upgrade
from ecoclicker.definition import GameConfig, GameDefinition


def define_game() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(
            name="AI vs. the Planet",
            tick_rate=10,
            minutes_per_tick=1,
            base_click_power=1.0,
            click_harm=0.1,
            max_harm=1000.0,
            tier_labels=("balanced", "strained", "critical", "catastrophic"),
            resource_base_rates={POWER: 2.0, WATER: 0.5, REQUESTS: 20.0},
            # Illustrative global figures per in-game second.
            real_world_rates={"kwh": 12.0, "litres": 3.0},
        ),
        upgrades=[
            # AI upgrades: income, at a cost to the planet
            Upgrade.production(
                "algo-opt", 50, currency=0.5, harm=0.3,
                display_name="Algorithm optimisation",
            ),
            Upgrade.production(
                "new-gpu", 150, currency=2.0, harm=1.0,
                display_name="New GPU",
            ),
            Upgrade.production(
                "server-cluster", 800, currency=10.0, harm=6.0,
                display_name="Server cluster",
            ),
            Upgrade.production(
                "data-center", 2000, currency=30.0, harm=15.0,
                display_name="Additional data center",
            ),
            Upgrade.production(
                "prompt-tuning", 100, click=1.0, growth_factor=1.5, max_level=10,
                display_name="Prompt tuning",
                description="+1 per click",
            ),
            # Eco upgrades
            Upgrade.mitigation(
                "plant-tree", 40, harm=0.1,
                display_name="Plant a tree",
            ),
            Upgrade.mitigation(
                "solar-panel", 100, harm=0.3,
                display_name="Install a solar panel",
            ),
            Upgrade.mitigation(
                "windmill", 400, harm=1.0,
                display_name="Wind turbine",
            ),
            Upgrade.mitigation(
                "thermal-recycling", 200, harm=5.0, instant=True,
                display_name="Server heat recycling",
                description="-5g CO2 immediately",
            ),
            # Efficiency upgrades: compound reductions in resource draw
            Upgrade.efficiency(
                "liquid-cooling", 300, {WATER: -0.1, POWER: -0.05}, max_level=5,
                display_name="Closed-loop liquid cooling",
            ),
            Upgrade.efficiency(
                "model-distillation", 600, {POWER: -0.15}, max_level=4,
                display_name="Model distillation",
            ),
            Upgrade.efficiency(
                "response-cache", 250, {REQUESTS: -0.2}, max_level=3,
                display_name="Response cache",
            ),
        ],
    )
