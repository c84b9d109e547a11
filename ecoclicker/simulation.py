from __future__ import annotations

import logging
import math

from ecoclicker.definition import GameDefinition
from ecoclicker.metrics import MetricsCollector
from ecoclicker.report import SimulationReport, build_report
from ecoclicker.state import GameState
from ecoclicker.strategy import Strategy

log = logging.getLogger(__name__)

MAX_PURCHASES_PER_TICK = 100


class Simulation:
    """Plays a game definition headlessly for a fixed stretch of simulated time."""

    def __init__(
        self,
        definition: GameDefinition,
        strategy: Strategy,
        duration: float,
        snapshot_interval: float = 1.0,
    ) -> None:
        self.definition = definition
        self.strategy = strategy
        self.duration = duration

        self.game = GameState(definition)
        self.collector = MetricsCollector(snapshot_interval=snapshot_interval)
        self._click_budget = 0.0
        self._initial_tier = self.game.tier().index
        self._tier = self._initial_tier
        self.game.on_state_changed(self._watch_tier)

    def run(self) -> SimulationReport:
        game = self.game
        tick_rate = self.definition.config.tick_rate
        dt = 1.0 / tick_rate
        total_ticks = round(self.duration * tick_rate)

        self.collector.record_tick(game.get_state())
        for _ in range(total_ticks):
            # 1. Advance time
            game.tick()

            # 2. Process clicks
            self._click(dt)

            # 3. Evaluate purchases
            self._buy()

            # 4. Record metrics
            snapshot = game.get_state()
            self.collector.record_tick(snapshot)

            # Safety: NaN/Inf detection
            if math.isnan(snapshot.currency) or math.isinf(snapshot.currency):
                log.error(
                    "Aborting at %.1fs: currency is %s",
                    snapshot.elapsed_seconds, snapshot.currency,
                )
                break

        final = game.get_state()
        self.collector.record_tick(
            final, force=self.collector.samples[-1].time < final.elapsed_seconds
        )
        log.info(
            "%s finished at %s: %.2f currency, %.2f harm (%s)",
            self.strategy.describe(), final.clock, final.currency, final.harm,
            final.tier.label,
        )
        return build_report(
            collector=self.collector,
            game_name=self.definition.config.name,
            strategy_description=self.strategy.describe(),
            total_time=final.elapsed_seconds,
            final_state=final.to_dict(),
            initial_tier=self._initial_tier,
        )

    def _click(self, dt: float) -> None:
        cps = self.strategy.clicks_per_second(self.game.get_state())
        self._click_budget += cps * dt
        clicks = int(self._click_budget)
        if clicks <= 0:
            return
        self._click_budget -= clicks
        for _ in range(clicks):
            self.game.perform_primary_action()
        self.collector.record_clicks(clicks)

    def _buy(self) -> None:
        for _ in range(MAX_PURCHASES_PER_TICK):
            wanted = self.strategy.decide_purchases(self.game.get_state())
            bought = False
            for upgrade_id in wanted:
                result = self.game.purchase(upgrade_id)
                if result.ok:
                    self.collector.record_purchase(
                        self.game.get_state(), upgrade_id, result.price
                    )
                    bought = True
            if not bought:
                return

    def _watch_tier(self) -> None:
        tier = self.game.tier()
        if tier.index != self._tier:
            self.collector.record_tier_change(
                self.game.elapsed_seconds, self._tier, tier.index, tier.label
            )
            log.debug("Harm tier %d -> %d (%s)", self._tier, tier.index, tier.label)
            self._tier = tier.index
