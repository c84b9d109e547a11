"""Tests for the command-line interface."""
import json
import sys
import os

import pytest

# Ensure examples can be imported
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ecoclicker.cli import build_parser, build_strategy, load_game, main
from ecoclicker.strategy import EcoBalanced, GreedyCheapest


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0
    assert "simulate" in capsys.readouterr().out


def test_parser_defaults():
    args = build_parser().parse_args(["simulate", "examples.ai_vs_planet"])
    assert args.strategy == "greedy_cheapest"
    assert args.duration == 3600
    assert args.cps == 0.0


def test_build_strategy():
    greedy = build_strategy("greedy_cheapest", 0.0)
    assert isinstance(greedy, GreedyCheapest)
    assert greedy.click_profile is None

    eco = build_strategy("eco_balanced", 2.0, max_tier=2)
    assert isinstance(eco, EcoBalanced)
    assert eco.max_tier == 2
    assert eco.click_profile.clicks_per_second == 2.0


def test_load_game_without_define_game():
    with pytest.raises(SystemExit) as exc:
        load_game("ecoclicker.pricing")
    assert exc.value.code == 1


def test_simulate(tmp_path, capsys, restore_logging):
    out_json = tmp_path / "run.json"
    main([
        "--settings", str(tmp_path / "settings.json"),
        "simulate", "examples.ai_vs_planet",
        "--duration", "30", "--cps", "5",
        "--export-json", str(out_json),
    ])
    out = capsys.readouterr().out
    assert "AI vs. the Planet Playthrough" in out
    assert "Strategy: GreedyCheapest" in out
    data = json.loads(out_json.read_text())
    assert data["total_time"] == pytest.approx(30.0)
