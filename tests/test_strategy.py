"""Tests for strategy module."""
from ecoclicker.catalog import Upgrade
from ecoclicker.definition import GameConfig, GameDefinition
from ecoclicker.state import GameState
from ecoclicker.strategy import ClickProfile, EcoBalanced, GreedyCheapest


def _game(currency: float = 1000) -> GameState:
    return GameState(
        GameDefinition(
            config=GameConfig(name="Test", initial_currency=currency),
            upgrades=[
                Upgrade.production("gpu", 10, currency=1.0, harm=2.0),
                Upgrade.mitigation("tree", 40, harm=1.0),
                Upgrade.mitigation("windmill", 80, harm=3.0),
            ],
        )
    )


def test_greedy_picks_cheapest_affordable():
    game = _game()
    assert GreedyCheapest().decide_purchases(game.get_state()) == ["gpu"]


def test_greedy_nothing_affordable():
    game = _game(currency=5)
    assert GreedyCheapest().decide_purchases(game.get_state()) == []


def test_eco_balanced_grows_when_clean():
    game = _game()
    assert EcoBalanced(max_tier=1).decide_purchases(game.get_state()) == ["gpu"]


def test_eco_balanced_mitigates_when_dirty():
    game = _game()
    game.ledger.add_harm(600)  # tier 2
    assert EcoBalanced(max_tier=1).decide_purchases(game.get_state()) == ["tree"]


def test_eco_balanced_saves_for_mitigation():
    game = _game(currency=20)
    game.ledger.add_harm(900)
    assert EcoBalanced(max_tier=1).decide_purchases(game.get_state()) == []


def test_click_profile():
    game = _game()
    assert GreedyCheapest().clicks_per_second(game.get_state()) == 0.0
    strategy = GreedyCheapest(ClickProfile(clicks_per_second=4.0))
    assert strategy.clicks_per_second(game.get_state()) == 4.0


def test_describe():
    assert EcoBalanced(max_tier=2).describe() == "EcoBalanced(max_tier=2)"
