# ecoclicker — Idle Clicker Simulation Engine with an Environmental Cost

from ecoclicker.catalog import (
    CLICK,
    CURRENCY,
    HARM,
    MULTIPLIER_CHANNELS,
    POWER,
    REQUESTS,
    WATER,
    Category,
    EffectKind,
    Upgrade,
    UpgradeCatalog,
    UpgradeDef,
)
from ecoclicker.pricing import price_of, is_purchasable, time_to_afford
from ecoclicker.ledger import ResourceLedger, SimClock
from ecoclicker.composition import DerivedRates, compose
from ecoclicker.economy import OwnedUpgrade, PurchaseFailure, PurchaseResult, UpgradeEconomy
from ecoclicker.tiers import HarmTier, classify
from ecoclicker.definition import GameConfig, GameDefinition
from ecoclicker.commands import PrimaryAction, Purchase, Tick
from ecoclicker.scheduler import TickScheduler, apply_tick
from ecoclicker.snapshot import StateSnapshot, UpgradeStatus
from ecoclicker.state import GameState
from ecoclicker.strategy import (
    Strategy,
    ClickProfile,
    GreedyCheapest,
    EcoBalanced,
    PriorityList,
)
from ecoclicker.metrics import MetricsCollector
from ecoclicker.simulation import Simulation
from ecoclicker.report import SimulationReport, build_report
from ecoclicker.formatting import format_text_report
from ecoclicker.logsetup import LoggerConfig, init_logger

__all__ = [
    # Channels
    "CURRENCY",
    "HARM",
    "CLICK",
    "POWER",
    "WATER",
    "REQUESTS",
    "MULTIPLIER_CHANNELS",
    # Catalog
    "Category",
    "EffectKind",
    "Upgrade",
    "UpgradeDef",
    "UpgradeCatalog",
    # Pricing
    "price_of",
    "is_purchasable",
    "time_to_afford",
    # Ledger
    "ResourceLedger",
    "SimClock",
    # Composition
    "DerivedRates",
    "compose",
    # Economy
    "OwnedUpgrade",
    "PurchaseFailure",
    "PurchaseResult",
    "UpgradeEconomy",
    # Tiers
    "HarmTier",
    "classify",
    # Definition
    "GameConfig",
    "GameDefinition",
    # Commands & scheduling
    "PrimaryAction",
    "Purchase",
    "Tick",
    "TickScheduler",
    "apply_tick",
    # State
    "GameState",
    "StateSnapshot",
    "UpgradeStatus",
    # Strategy
    "Strategy",
    "ClickProfile",
    "GreedyCheapest",
    "EcoBalanced",
    "PriorityList",
    # Simulation
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    "format_text_report",
    # Logging
    "LoggerConfig",
    "init_logger",
]
