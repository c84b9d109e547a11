from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from ecoclicker.catalog import CURRENCY, HARM, EffectKind, UpgradeCatalog, UpgradeDef
from ecoclicker.composition import DerivedRates, compose
from ecoclicker.ledger import ResourceLedger
from ecoclicker.pricing import is_purchasable, price_of

log = logging.getLogger(__name__)


class PurchaseFailure(Enum):
    NOT_FOUND = auto()
    INSUFFICIENT_FUNDS = auto()
    MAX_LEVEL_REACHED = auto()


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a purchase attempt."""

    ok: bool
    upgrade_id: str
    reason: PurchaseFailure | None = None
    price: int = 0


@dataclass
class OwnedUpgrade:
    """Mutable ownership record for one catalog entry."""

    count: int = 0
    current_price: int = 0

    def set_count(self, definition: UpgradeDef, count: int) -> None:
        self.count = count
        self.current_price = price_of(definition, count)


class UpgradeEconomy:
    """Prices and sells upgrades against a ledger."""

    def __init__(
        self,
        catalog: UpgradeCatalog,
        ledger: ResourceLedger,
        base_click_power: float = 1.0,
    ) -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.base_click_power = base_click_power
        self.owned: dict[str, OwnedUpgrade] = {}
        for udef in catalog:
            owned = OwnedUpgrade()
            owned.set_count(udef, 0)
            self.owned[udef.id] = owned
        self.rates: DerivedRates = self.recompute_rates()

    def counts(self) -> dict[str, int]:
        return {uid: o.count for uid, o in self.owned.items()}

    def count(self, upgrade_id: str) -> int:
        owned = self.owned.get(upgrade_id)
        return owned.count if owned else 0

    def recompute_rates(self) -> DerivedRates:
        self.rates = compose(self.catalog, self.counts(), self.base_click_power)
        return self.rates

    def can_purchase(self, upgrade_id: str) -> bool:
        udef = self.catalog.get(upgrade_id)
        if udef is None:
            return False
        owned = self.owned[upgrade_id]
        return (
            is_purchasable(udef, owned.count)
            and self.ledger.currency >= owned.current_price
        )

    def purchase(self, upgrade_id: str) -> PurchaseResult:
        """Buy one unit of *upgrade_id*.

        Business-rule rejections come back as a failed PurchaseResult and
        leave the ledger, counts and rates untouched.
        """
        udef = self.catalog.get(upgrade_id)
        if udef is None:
            log.warning("Purchase of unknown upgrade %r", upgrade_id)
            return PurchaseResult(False, upgrade_id, PurchaseFailure.NOT_FOUND)

        owned = self.owned[upgrade_id]
        if not is_purchasable(udef, owned.count):
            log.debug("%s is at max level %s", upgrade_id, udef.max_level)
            return PurchaseResult(False, upgrade_id, PurchaseFailure.MAX_LEVEL_REACHED)

        price = price_of(udef, owned.count)
        if not self.ledger.spend_currency(price):
            return PurchaseResult(
                False, upgrade_id, PurchaseFailure.INSUFFICIENT_FUNDS, price
            )

        owned.set_count(udef, owned.count + 1)

        if udef.kind is EffectKind.INSTANT:
            self._apply_instant(udef)

        self.recompute_rates()
        log.debug(
            "Bought %s #%d for %d (next %d)",
            upgrade_id, owned.count, price, owned.current_price,
        )
        return PurchaseResult(True, upgrade_id, price=price)

    def restore_counts(self, counts: dict[str, int]) -> None:
        """Overwrite owned counts and replay effect composition."""
        for uid, owned in self.owned.items():
            udef = self.catalog.get(uid)
            count = max(0, int(counts.get(uid, 0)))
            if udef.max_level is not None:
                count = min(count, udef.max_level)
            owned.set_count(udef, count)
        self.recompute_rates()

    def _apply_instant(self, udef: UpgradeDef) -> None:
        """Apply a one-shot currency/harm delta."""
        currency = udef.effect(CURRENCY)
        if currency:
            self.ledger.add_currency(currency)
        harm = udef.effect(HARM)
        if harm:
            self.ledger.add_harm(harm)
