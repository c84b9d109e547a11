"""Integration test with the AI vs. the Planet example game."""
import sys
import os

import pytest

# Ensure examples can be imported
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from examples.ai_vs_planet import define_game
from ecoclicker.catalog import Category
from ecoclicker.formatting import format_text_report
from ecoclicker.simulation import Simulation
from ecoclicker.state import GameState
from ecoclicker.strategy import ClickProfile, EcoBalanced, GreedyCheapest


def test_game_validates():
    defn = define_game()
    errors = defn.validate()
    assert errors == [], f"Validation errors: {errors}"


def test_catalog_shape():
    catalog = define_game().catalog
    assert len(catalog) == 12
    assert len(catalog.by_category(Category.PRODUCTION)) == 5
    assert len(catalog.by_category(Category.MITIGATION)) == 4
    assert len(catalog.by_category(Category.EFFICIENCY)) == 3


def test_thermal_recycling_is_instant():
    game = GameState(define_game())
    game.ledger.currency = 200.0
    game.ledger.add_harm(12.0)
    assert game.purchase("thermal-recycling").ok
    state = game.get_state()
    assert state.harm == pytest.approx(7.0)
    assert state.rates.harm_rate == 0.0


def test_eco_balanced_playthrough():
    strategy = EcoBalanced(
        click_profile=ClickProfile(clicks_per_second=5.0), max_tier=1
    )
    report = Simulation(define_game(), strategy, duration=600).run()
    final = report.final_state

    assert report.total_time == pytest.approx(600.0)
    assert len(report.purchases) > 0
    assert final["currency"] >= 0
    assert final["harm"] >= 0
    assert 0 < final["power_consumed"] <= 2.0 * 600 + 1e-6
    # Real-world counters ignore efficiency multipliers.
    assert final["real_world"]["kwh"] == pytest.approx(12.0 * 600)
    assert "AI vs. the Planet Playthrough" in format_text_report(report)


def test_greedy_buys_a_tree_first():
    strategy = GreedyCheapest(click_profile=ClickProfile(clicks_per_second=5.0))
    report = Simulation(define_game(), strategy, duration=30).run()
    first = report.purchases[0]
    assert first.upgrade_id == "plant-tree"
    assert first.time == pytest.approx(8.0)
