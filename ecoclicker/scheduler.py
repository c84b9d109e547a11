from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Callable

from ecoclicker.commands import TICK, Command

if TYPE_CHECKING:
    from ecoclicker.composition import DerivedRates
    from ecoclicker.definition import GameConfig
    from ecoclicker.ledger import ResourceLedger

log = logging.getLogger(__name__)


def apply_tick(
    ledger: ResourceLedger, rates: DerivedRates, config: GameConfig
) -> None:
    """Fold one tick's worth of passive effects into the ledger."""
    tick_rate = config.tick_rate
    ledger.add_currency(rates.currency_rate / tick_rate)
    ledger.add_harm(rates.harm_rate / tick_rate)
    ledger.advance_clock(config.minutes_per_tick)
    for channel, base_rate in config.resource_base_rates.items():
        ledger.add_sub_resource(
            channel, base_rate * rates.multiplier(channel) / tick_rate
        )
    for channel, rate in config.real_world_rates.items():
        ledger.add_real_world(channel, rate / tick_rate)


class TickScheduler:
    """Fixed-period tick driver.

    Every elapsed period becomes one discrete Tick command, run back-to-back
    when the driver falls behind, so a stall never turns into a single
    scaled-up tick.
    """

    def __init__(
        self,
        dispatch: Callable[[Command], object],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._dispatch = dispatch
        self._clock = clock
        self.period: float | None = None
        self._next_deadline: float | None = None
        self._task: asyncio.Task | None = None

    @property
    def armed(self) -> bool:
        return self._next_deadline is not None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self, period_ms: float) -> None:
        """Start measuring elapsed periods from now, without a background task."""
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        self.period = period_ms / 1000.0
        self._next_deadline = self._clock() + self.period

    def start(self, period_ms: float) -> None:
        """Pump ticks from a task on the running asyncio loop."""
        if self.running:
            return
        loop = asyncio.get_running_loop()
        self.arm(period_ms)
        self._task = loop.create_task(self._run())
        log.info("Scheduler started (%.0f ms period)", period_ms)

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
            log.info("Scheduler stopped")
        self._next_deadline = None

    def pump(self, now: float | None = None) -> int:
        """Run one tick per whole period elapsed since the last one."""
        if self._next_deadline is None:
            return 0
        if now is None:
            now = self._clock()
        ran = 0
        # A listener may stop the scheduler mid-catch-up.
        while self._next_deadline is not None and now >= self._next_deadline:
            self._next_deadline += self.period
            self._dispatch(TICK)
            ran += 1
        if ran > 1:
            log.debug("Caught up %d ticks", ran)
        return ran

    def run_ticks(self, count: int) -> None:
        for _ in range(count):
            self._dispatch(TICK)

    async def _run(self) -> None:
        while self._next_deadline is not None:
            await asyncio.sleep(max(0.0, self._next_deadline - self._clock()))
            try:
                self.pump()
            except Exception:
                log.exception("Tick failed; scheduler keeps running")
