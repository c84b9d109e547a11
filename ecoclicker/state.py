from __future__ import annotations

import logging
import time
from typing import Any, Callable

from ecoclicker.commands import PrimaryAction, Purchase, Tick, TICK, Command
from ecoclicker.composition import DerivedRates
from ecoclicker.definition import GameDefinition
from ecoclicker.economy import PurchaseResult, UpgradeEconomy
from ecoclicker.ledger import ResourceLedger, SimClock
from ecoclicker.pricing import is_purchasable
from ecoclicker.scheduler import TickScheduler, apply_tick
from ecoclicker.snapshot import StateSnapshot, UpgradeStatus
from ecoclicker.tiers import HarmTier, classify

log = logging.getLogger(__name__)

Listener = Callable[[], None]


class GameState:
    """One isolated game session.

    Every mutation, whether a player command or a scheduler tick, goes
    through :meth:`dispatch` and runs to completion before listeners are
    told the state changed.
    """

    def __init__(
        self,
        definition: GameDefinition,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        errors = definition.validate()
        if errors:
            raise ValueError(
                "Invalid GameDefinition:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.definition = definition
        self.config = definition.config
        self.ledger = ResourceLedger(currency=self.config.initial_currency)
        self.economy = UpgradeEconomy(
            definition.catalog, self.ledger, self.config.base_click_power
        )
        self.scheduler = TickScheduler(self.dispatch, clock=clock)
        self.tick_count = 0
        self._listeners: list[Listener] = []
        self._handlers: dict[type, Callable[[Any], tuple[Any, bool]]] = {
            PrimaryAction: self._handle_primary_action,
            Purchase: self._handle_purchase,
            Tick: self._handle_tick,
        }

    # ── Command entry point ──────────────────────────────────────────

    def dispatch(self, command: Command) -> Any:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command: {command!r}")
        result, changed = handler(command)
        if changed:
            self._notify()
        return result

    def perform_primary_action(self) -> float:
        """Click once. Returns the currency earned."""
        return self.dispatch(PrimaryAction())

    def purchase(self, upgrade_id: str) -> PurchaseResult:
        return self.dispatch(Purchase(upgrade_id))

    def tick(self) -> None:
        self.dispatch(TICK)

    def advance(self, seconds: float) -> int:
        """Run the ticks covering *seconds* of simulated time. Returns count."""
        ticks = round(seconds * self.config.tick_rate)
        self.scheduler.run_ticks(ticks)
        return ticks

    # ── Scheduler lifecycle ──────────────────────────────────────────

    def start_scheduler(self, period_ms: float = 100.0) -> None:
        self.scheduler.start(period_ms)

    def stop_scheduler(self) -> None:
        self.scheduler.stop()

    # ── Notifications ────────────────────────────────────────────────

    def on_state_changed(self, callback: Listener) -> Callable[[], None]:
        """Register *callback*; returns a function that unregisters it."""
        self._listeners.append(callback)

        def _unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unsubscribe

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def rates(self) -> DerivedRates:
        return self.economy.rates

    @property
    def elapsed_seconds(self) -> float:
        return self.tick_count / self.config.tick_rate

    def tier(self) -> HarmTier:
        return classify(
            self.ledger.harm,
            max_harm=self.config.max_harm,
            thresholds=self.config.tier_thresholds,
            labels=self.config.tier_labels,
        )

    def upgrade_statuses(self) -> tuple[UpgradeStatus, ...]:
        statuses = []
        for udef in self.definition.catalog:
            owned = self.economy.owned[udef.id]
            purchasable = is_purchasable(udef, owned.count)
            statuses.append(
                UpgradeStatus(
                    id=udef.id,
                    display_name=udef.display_name,
                    category=udef.category,
                    kind=udef.kind,
                    count=owned.count,
                    current_price=owned.current_price,
                    max_level=udef.max_level,
                    purchasable=purchasable,
                    affordable=purchasable
                    and self.ledger.currency >= owned.current_price,
                )
            )
        return tuple(statuses)

    def get_state(self) -> StateSnapshot:
        ledger = self.ledger
        return StateSnapshot(
            currency=ledger.currency,
            harm=ledger.harm,
            total_earned=ledger.total_earned,
            power_consumed=ledger.power_consumed,
            water_consumed=ledger.water_consumed,
            request_count=ledger.request_count,
            real_world=dict(ledger.real_world),
            clock=ledger.clock,
            rates=self.rates,
            tier=self.tier(),
            tick_count=self.tick_count,
            elapsed_seconds=self.elapsed_seconds,
            upgrades=self.upgrade_statuses(),
        )

    # ── Restore ──────────────────────────────────────────────────────

    def restore(self, data: dict[str, Any]) -> None:
        """Load ledger values and owned counts from ``StateSnapshot.to_dict()``.

        Derived rates in *data* are ignored and recomputed from the counts.
        """
        ledger = self.ledger
        ledger.currency = max(0.0, float(data.get("currency", 0.0)))
        ledger.harm = max(0.0, float(data.get("harm", 0.0)))
        ledger.total_earned = max(0.0, float(data.get("total_earned", 0.0)))
        ledger.power_consumed = max(0.0, float(data.get("power_consumed", 0.0)))
        ledger.water_consumed = max(0.0, float(data.get("water_consumed", 0.0)))
        ledger.request_count = max(0.0, float(data.get("request_count", 0.0)))
        ledger.real_world = {
            k: max(0.0, float(v)) for k, v in data.get("real_world", {}).items()
        }
        ledger.clock = SimClock.normalized(**data.get("clock", {}))
        self.tick_count = int(data.get("tick_count", 0))
        self.economy.restore_counts(data.get("counts", {}))
        log.info("Restored state at %s", ledger.clock)
        self._notify()

    # ── Handlers ─────────────────────────────────────────────────────

    def _handle_primary_action(self, _command: PrimaryAction) -> tuple[float, bool]:
        earned = self.rates.click_power
        self.ledger.add_currency(earned)
        self.ledger.add_harm(self.config.click_harm)
        return earned, True

    def _handle_purchase(self, command: Purchase) -> tuple[PurchaseResult, bool]:
        result = self.economy.purchase(command.upgrade_id)
        return result, result.ok

    def _handle_tick(self, _command: Tick) -> tuple[None, bool]:
        apply_tick(self.ledger, self.rates, self.config)
        self.tick_count += 1
        return None, True

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()
