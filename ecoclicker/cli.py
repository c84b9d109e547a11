from __future__ import annotations

import argparse
import asyncio
import importlib
import logging
import sys
from pathlib import Path

from ecoclicker.definition import GameDefinition
from ecoclicker.formatting import format_harm, format_number, format_text_report
from ecoclicker.logsetup import LoggerConfig, init_logger
from ecoclicker.simulation import Simulation
from ecoclicker.state import GameState
from ecoclicker.strategy import ClickProfile, EcoBalanced, GreedyCheapest, Strategy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecoclicker",
        description="ecoclicker — idle clicker simulation CLI",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the log level from the settings file",
    )
    parser.add_argument(
        "--settings",
        default="settings.json",
        help="JSON settings file with logLevel/logChannels (default: settings.json)",
    )
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Run a headless playthrough")
    sim.add_argument("game_module", help="Python module with define_game()")
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=["greedy_cheapest", "eco_balanced"],
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument("--cps", type=float, default=0.0, help="Clicks per second")
    sim.add_argument(
        "--max-tier",
        type=int,
        default=1,
        help="Harm tier eco_balanced tries to stay at or below",
    )
    sim.add_argument(
        "--duration", type=float, default=3600, help="Simulated seconds to play"
    )
    sim.add_argument(
        "--snapshot-interval", type=float, default=1.0, help="Seconds between samples"
    )
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    watch = sub.add_parser("watch", help="Run the real-time scheduler and print state")
    watch.add_argument("game_module", help="Python module with define_game()")
    watch.add_argument(
        "--seconds", type=float, default=5.0, help="Wall-clock seconds to run"
    )
    watch.add_argument(
        "--period-ms", type=float, default=100.0, help="Tick period in milliseconds"
    )
    watch.add_argument("--cps", type=float, default=0.0, help="Clicks per second")

    return parser


def load_game(module_path: str) -> GameDefinition:
    """Import module and call define_game()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_game"):
        print(f"Error: module {module_path!r} has no define_game() function")
        sys.exit(1)
    return mod.define_game()


def build_strategy(name: str, cps: float, max_tier: int = 1) -> Strategy:
    click_profile = ClickProfile(clicks_per_second=cps) if cps > 0 else None
    if name == "eco_balanced":
        return EcoBalanced(click_profile=click_profile, max_tier=max_tier)
    return GreedyCheapest(click_profile=click_profile)


def _configure_logging(args: argparse.Namespace) -> None:
    config = LoggerConfig.from_settings(Path(args.settings))
    if args.log_level:
        config.level = getattr(logging, args.log_level)
    init_logger(config)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args)
    definition = load_game(args.game_module)

    if args.command == "simulate":
        _run_simulate(definition, args)
    elif args.command == "watch":
        asyncio.run(_watch(definition, args.seconds, args.period_ms, args.cps))


def _run_simulate(definition: GameDefinition, args: argparse.Namespace) -> None:
    strategy = build_strategy(args.strategy, args.cps, args.max_tier)
    sim = Simulation(
        definition=definition,
        strategy=strategy,
        duration=args.duration,
        snapshot_interval=args.snapshot_interval,
    )
    report = sim.run()
    print(format_text_report(report))

    if args.export_csv:
        from ecoclicker.export import export_csv
        export_csv(report, args.export_csv)
        print(f"\nCSV exported to {args.export_csv}_*.csv")

    if args.export_json:
        from ecoclicker.export import export_json
        export_json(report, args.export_json)
        print(f"\nJSON exported to {args.export_json}")

    if args.plot:
        from ecoclicker.visualization import plot_simulation
        cfg = definition.config
        bands = [cfg.max_harm * t / 100.0 for t in cfg.tier_thresholds]
        plot_simulation(report, args.plot, harm_bands=bands)
        print(f"\nPlot saved to {args.plot}")


async def _watch(
    definition: GameDefinition, seconds: float, period_ms: float, cps: float
) -> None:
    """Drive a live session from the asyncio scheduler for *seconds*."""
    game = GameState(definition)
    last_second = -1

    def _print_status() -> None:
        nonlocal last_second
        state = game.get_state()
        whole = int(state.elapsed_seconds)
        if whole == last_second:
            return
        last_second = whole
        print(
            f"[{state.clock}] ${format_number(state.currency)} "
            f"(+{state.rates.currency_rate:.1f}/s)  "
            f"{format_harm(state.harm)} {state.tier.label}"
        )

    game.on_state_changed(_print_status)
    game.start_scheduler(period_ms)
    try:
        elapsed = 0.0
        click_budget = 0.0
        step = period_ms / 1000.0
        while elapsed < seconds:
            await asyncio.sleep(step)
            elapsed += step
            click_budget += cps * step
            while click_budget >= 1.0:
                game.perform_primary_action()
                click_budget -= 1.0
    finally:
        game.stop_scheduler()
