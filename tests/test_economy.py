"""Tests for economy module."""
import pytest

from ecoclicker.catalog import POWER, Upgrade, UpgradeCatalog
from ecoclicker.economy import PurchaseFailure, UpgradeEconomy
from ecoclicker.ledger import ResourceLedger


def _make_economy(currency: float = 0.0) -> UpgradeEconomy:
    catalog = UpgradeCatalog([
        Upgrade.production("u1", 50, currency=1.0, harm=0.5),
        Upgrade.production("bonus", 10, currency=25.0, instant=True),
        Upgrade.mitigation("recycle", 20, harm=5.0, instant=True),
        Upgrade.efficiency("cooling", 30, {POWER: -0.1}, max_level=1),
    ])
    return UpgradeEconomy(catalog, ResourceLedger(currency=currency))


def test_initial_owned():
    eco = _make_economy()
    assert eco.counts() == {"u1": 0, "bonus": 0, "recycle": 0, "cooling": 0}
    assert eco.owned["u1"].current_price == 50


def test_purchase_success():
    eco = _make_economy(currency=50)
    result = eco.purchase("u1")
    assert result.ok
    assert result.reason is None
    assert result.price == 50
    assert eco.ledger.currency == 0.0
    assert eco.count("u1") == 1
    assert eco.owned["u1"].current_price == 57


def test_rates_updated_before_return():
    eco = _make_economy(currency=50)
    eco.purchase("u1")
    assert eco.rates.currency_rate == pytest.approx(1.0)
    assert eco.rates.harm_rate == pytest.approx(0.5)


def test_not_found():
    eco = _make_economy(currency=1000)
    result = eco.purchase("missing")
    assert not result.ok
    assert result.reason is PurchaseFailure.NOT_FOUND
    assert eco.ledger.currency == 1000


def test_not_found_is_logged(caplog):
    eco = _make_economy()
    with caplog.at_level("WARNING", logger="ecoclicker.economy"):
        eco.purchase("missing")
    assert "missing" in caplog.text


def test_insufficient_funds_is_atomic():
    eco = _make_economy(currency=49)
    rates_before = eco.rates
    result = eco.purchase("u1")
    assert not result.ok
    assert result.reason is PurchaseFailure.INSUFFICIENT_FUNDS
    assert result.price == 50
    assert eco.ledger.currency == 49
    assert eco.count("u1") == 0
    assert eco.owned["u1"].current_price == 50
    assert eco.rates is rates_before


def test_max_level_reached():
    eco = _make_economy(currency=1000)
    assert eco.purchase("cooling").ok
    rates_before = eco.rates
    currency_before = eco.ledger.currency
    result = eco.purchase("cooling")
    assert result.reason is PurchaseFailure.MAX_LEVEL_REACHED
    assert eco.count("cooling") == 1
    assert eco.ledger.currency == currency_before
    assert eco.rates is rates_before


def test_instant_currency_grant():
    eco = _make_economy(currency=10)
    eco.purchase("bonus")
    assert eco.ledger.currency == pytest.approx(25.0)
    assert eco.rates.currency_rate == 0.0


def test_instant_harm_reduction_clamps():
    eco = _make_economy(currency=20)
    eco.ledger.add_harm(3.0)
    eco.purchase("recycle")
    assert eco.ledger.harm == 0.0
    assert eco.rates.harm_rate == 0.0


def test_can_purchase():
    eco = _make_economy(currency=30)
    assert eco.can_purchase("cooling")
    assert not eco.can_purchase("u1")
    assert not eco.can_purchase("missing")
    eco.purchase("cooling")
    assert not eco.can_purchase("cooling")


def test_restore_counts_replays_composition():
    eco = _make_economy()
    eco.restore_counts({"u1": 4, "cooling": 7, "unknown": 3})
    assert eco.count("u1") == 4
    assert eco.count("cooling") == 1  # capped at max_level
    assert eco.owned["u1"].current_price == 87
    assert eco.rates.currency_rate == pytest.approx(4.0)
    assert eco.rates.multiplier(POWER) == pytest.approx(0.9)
