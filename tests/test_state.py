"""Tests for state module."""
import random

import pytest

from ecoclicker.catalog import POWER, REQUESTS, WATER, Category, Upgrade
from ecoclicker.commands import PrimaryAction, Purchase
from ecoclicker.definition import GameConfig, GameDefinition
from ecoclicker.economy import PurchaseFailure
from ecoclicker.ledger import SimClock
from ecoclicker.state import GameState


def _make_definition(**config) -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Test", **config),
        upgrades=[
            Upgrade.production("u1", 50, currency=1.0, harm=0.5),
            Upgrade.production("prompts", 20, click=1.0, max_level=3),
            Upgrade.mitigation("tree", 40, harm=0.1),
            Upgrade.mitigation("recycle", 30, harm=5.0, instant=True),
            Upgrade.efficiency("cooling", 25, {WATER: -0.1, POWER: -0.1}, max_level=5),
        ],
    )


def test_invalid_definition_raises():
    defn = GameDefinition(
        upgrades=[Upgrade.efficiency("bad", 10, {POWER: -0.1})],
    )
    with pytest.raises(ValueError, match="bad"):
        GameState(defn)


def test_initial_state():
    state = GameState(_make_definition()).get_state()
    assert state.currency == 0.0
    assert state.harm == 0.0
    assert state.clock == SimClock(1, 0, 0)
    assert state.tick_count == 0
    assert state.tier.label == "balanced"
    assert [u.id for u in state.upgrades] == ["u1", "prompts", "tree", "recycle", "cooling"]
    assert all(u.count == 0 for u in state.upgrades)


def test_initial_currency_from_config():
    game = GameState(_make_definition(initial_currency=75))
    assert game.get_state().currency == 75


def test_end_to_end_scenario():
    game = GameState(_make_definition())

    earned = game.perform_primary_action()
    assert earned == 1.0
    state = game.get_state()
    assert state.currency == pytest.approx(1.0)
    assert state.harm == pytest.approx(0.1)

    result = game.purchase("u1")
    assert not result.ok
    assert result.reason is PurchaseFailure.INSUFFICIENT_FUNDS
    assert game.get_state() == state

    game.ledger.add_currency(49)
    result = game.purchase("u1")
    assert result.ok
    state = game.get_state()
    assert state.currency == 0.0
    status = state.upgrade("u1")
    assert status.count == 1
    assert status.current_price == 57


def test_click_power_from_upgrades():
    game = GameState(_make_definition(initial_currency=100))
    game.purchase("prompts")
    game.purchase("prompts")
    assert game.perform_primary_action() == pytest.approx(3.0)


def test_click_harm_configurable():
    game = GameState(_make_definition(click_harm=0.5))
    for _ in range(4):
        game.perform_primary_action()
    assert game.ledger.harm == pytest.approx(2.0)


def test_dispatch_commands():
    game = GameState(_make_definition(initial_currency=50))
    assert game.dispatch(PrimaryAction()) == 1.0
    result = game.dispatch(Purchase("u1"))
    assert result.ok


def test_dispatch_unknown_command():
    game = GameState(_make_definition())
    with pytest.raises(TypeError):
        game.dispatch("click")


def test_advance_runs_ticks():
    game = GameState(_make_definition(initial_currency=50))
    game.purchase("u1")
    assert game.advance(3.0) == 30
    assert game.ledger.currency == pytest.approx(3.0)
    assert game.ledger.harm == pytest.approx(1.5)


class TestNotifications:
    def test_fired_after_successful_mutations(self):
        game = GameState(_make_definition(initial_currency=50))
        calls = []
        game.on_state_changed(lambda: calls.append(game.get_state()))
        game.perform_primary_action()
        game.purchase("u1")
        game.tick()
        assert len(calls) == 3
        # listeners see the completed mutation
        assert calls[1].upgrade("u1").count == 1
        assert calls[1].rates.currency_rate == pytest.approx(1.0)

    def test_not_fired_on_rejected_purchase(self):
        game = GameState(_make_definition())
        calls = []
        game.on_state_changed(lambda: calls.append(1))
        game.purchase("u1")
        game.purchase("nope")
        assert calls == []

    def test_unsubscribe(self):
        game = GameState(_make_definition())
        calls = []
        unsubscribe = game.on_state_changed(lambda: calls.append(1))
        game.perform_primary_action()
        unsubscribe()
        unsubscribe()
        game.perform_primary_action()
        assert calls == [1]


class TestSnapshot:
    def test_upgrade_status(self):
        game = GameState(_make_definition(initial_currency=60))
        state = game.get_state()
        u1 = state.upgrade("u1")
        assert u1.category is Category.PRODUCTION
        assert u1.affordable
        assert u1.purchasable
        assert state.upgrade("missing") is None
        assert state.count("missing") == 0

    def test_maxed_upgrade_not_affordable(self):
        game = GameState(_make_definition(initial_currency=1000))
        for _ in range(3):
            assert game.purchase("prompts").ok
        status = game.get_state().upgrade("prompts")
        assert not status.purchasable
        assert not status.affordable
        assert game.purchase("prompts").reason is PurchaseFailure.MAX_LEVEL_REACHED

    def test_snapshot_is_detached(self):
        game = GameState(_make_definition())
        state = game.get_state()
        game.perform_primary_action()
        assert state.currency == 0.0

    def test_rates_are_read_only(self):
        game = GameState(_make_definition(resource_base_rates={POWER: 10.0}))
        state = game.get_state()
        with pytest.raises(TypeError):
            state.rates.multipliers[POWER] = 0.0
        game.advance(1.0)
        assert game.ledger.power_consumed == pytest.approx(10.0)

    def test_to_dict(self):
        game = GameState(_make_definition(initial_currency=50))
        game.purchase("u1")
        data = game.get_state().to_dict()
        assert data["counts"]["u1"] == 1
        assert data["clock"] == {"day": 1, "hour": 0, "minute": 0}
        assert data["rates"]["currency_rate"] == pytest.approx(1.0)
        assert data["tier"]["label"] == "balanced"


class TestRestore:
    def _played(self) -> GameState:
        game = GameState(
            _make_definition(
                initial_currency=500,
                resource_base_rates={POWER: 1.0, REQUESTS: 3.0},
                real_world_rates={"kwh": 2.0},
            )
        )
        for uid in ("u1", "u1", "tree", "cooling", "cooling", "prompts"):
            assert game.purchase(uid).ok
        game.advance(12.5)
        for _ in range(7):
            game.perform_primary_action()
        return game

    def test_round_trip(self):
        game = self._played()
        data = game.get_state().to_dict()

        restored = GameState(game.definition)
        restored.restore(data)
        assert restored.rates == game.rates
        assert restored.get_state().to_dict() == data

    def test_rates_replayed_not_read(self):
        game = self._played()
        data = game.get_state().to_dict()
        data["rates"]["currency_rate"] = 999.0

        restored = GameState(game.definition)
        restored.restore(data)
        assert restored.rates.currency_rate == pytest.approx(2.0)
        assert restored.rates.multiplier(WATER) == pytest.approx(0.8)

    def test_out_of_range_values_are_normalized(self):
        game = GameState(_make_definition())
        game.restore({
            "clock": {"day": 0, "hour": 30, "minute": 99},
            "total_earned": -1.0,
            "power_consumed": -5.0,
            "real_world": {"kwh": -2.0},
        })
        assert game.ledger.clock == SimClock(day=2, hour=7, minute=39)
        assert game.ledger.total_earned == 0.0
        assert game.ledger.power_consumed == 0.0
        assert game.ledger.real_world == {"kwh": 0.0}

    def test_restore_notifies(self):
        game = GameState(_make_definition())
        calls = []
        game.on_state_changed(lambda: calls.append(1))
        game.restore({"currency": 5.0})
        assert calls == [1]
        assert game.ledger.currency == 5.0


def test_non_negativity_under_random_play():
    rng = random.Random(1234)
    game = GameState(_make_definition(initial_currency=200))
    ids = game.definition.catalog.ids() + ["missing"]
    for _ in range(3000):
        op = rng.random()
        if op < 0.3:
            game.perform_primary_action()
        elif op < 0.5:
            game.purchase(rng.choice(ids))
        elif op < 0.55:
            game.ledger.add_harm(-rng.uniform(0, 10))
        elif op < 0.6:
            game.ledger.spend_currency(rng.uniform(0, 100))
        else:
            game.tick()
        assert game.ledger.currency >= 0
        assert game.ledger.harm >= 0
