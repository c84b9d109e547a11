"""MCP server wrapping a GameState for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from ecoclicker.definition import GameDefinition
from ecoclicker.pricing import time_to_afford
from ecoclicker.state import GameState

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the active game definition and session."""

    definition: GameDefinition
    game: GameState


def _rates_dict(holder: _GameHolder) -> dict[str, Any]:
    rates = holder.game.rates
    return {
        "currency_rate": round(rates.currency_rate, 4),
        "harm_rate": round(rates.harm_rate, 4),
        "click_power": round(rates.click_power, 4),
        "multipliers": {k: round(v, 4) for k, v in rates.multipliers.items()},
    }


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    defn = holder.definition
    cfg = defn.config
    return {
        "name": cfg.name,
        "tick_rate": cfg.tick_rate,
        "minutes_per_tick": cfg.minutes_per_tick,
        "click_harm": cfg.click_harm,
        "max_harm": cfg.max_harm,
        "tiers": list(cfg.tier_labels),
        "upgrades": [
            {
                "id": u.id,
                "display_name": u.display_name,
                "category": u.category.name.lower(),
                "kind": u.kind.name.lower(),
            }
            for u in defn.catalog
        ],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    state = holder.game.get_state()
    return {
        "clock": str(state.clock),
        "elapsed_seconds": round(state.elapsed_seconds, 2),
        "currency": round(state.currency, 2),
        "total_earned": round(state.total_earned, 2),
        "harm": round(state.harm, 2),
        "tier": {"index": state.tier.index, "label": state.tier.label},
        "power_consumed": round(state.power_consumed, 2),
        "water_consumed": round(state.water_consumed, 2),
        "request_count": round(state.request_count, 2),
        "real_world": {k: round(v, 2) for k, v in state.real_world.items()},
        "rates": _rates_dict(holder),
        "upgrades": {u.id: u.count for u in state.upgrades},
    }


def _tool_get_available_purchases(holder: _GameHolder) -> dict[str, Any]:
    state = holder.game.get_state()
    result = []
    for u in state.upgrades:
        if not u.purchasable:
            continue
        wait = time_to_afford(u.current_price, state.currency, state.rates.currency_rate)
        entry: dict[str, Any] = {
            "id": u.id,
            "display_name": u.display_name,
            "category": u.category.name.lower(),
            "count": u.count,
            "price": u.current_price,
            "affordable": u.affordable,
            "time_to_afford": round(wait, 2) if wait is not None else None,
        }
        if u.max_level is not None:
            entry["max_level"] = u.max_level
        result.append(entry)
    return {"purchases": result}


def _tool_get_upgrade_info(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    udef = holder.definition.get_upgrade(upgrade_id)
    if udef is None:
        return {"error": f"Unknown upgrade: {upgrade_id!r}"}

    status = holder.game.get_state().upgrade(upgrade_id)
    result: dict[str, Any] = {
        "id": udef.id,
        "display_name": udef.display_name,
        "description": udef.description,
        "category": udef.category.name.lower(),
        "kind": udef.kind.name.lower(),
        "effects": dict(udef.effects),
        "base_price": udef.base_price,
        "growth_factor": udef.growth_factor,
        "count": status.count,
        "price": status.current_price,
        "affordable": status.affordable,
    }
    if udef.max_level is not None:
        result["max_level"] = udef.max_level
    return result


def _tool_purchase(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    result = holder.game.purchase(upgrade_id)
    if result.ok:
        return {
            "success": True,
            "upgrade_id": upgrade_id,
            "price": result.price,
            "new_count": holder.game.economy.count(upgrade_id),
            "rates": _rates_dict(holder),
        }
    response: dict[str, Any] = {"success": False, "reason": result.reason.name}
    if result.price:
        response["price"] = result.price
    return response


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0.0
    for _ in range(count):
        total += holder.game.perform_primary_action()
    state = holder.game.get_state()
    return {
        "clicks": count,
        "total_earned": round(total, 2),
        "new_balance": round(state.currency, 2),
        "harm": round(state.harm, 2),
    }


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    tier_before = holder.game.tier()
    ticks = holder.game.advance(seconds)
    state = holder.game.get_state()

    result: dict[str, Any] = {
        "waited": seconds,
        "ticks": ticks,
        "clock": str(state.clock),
        "currency": round(state.currency, 2),
        "harm": round(state.harm, 2),
        "tier": state.tier.label,
    }
    if state.tier.index != tier_before.index:
        result["tier_changed_from"] = tier_before.label
    return result


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    holder.game.stop_scheduler()
    holder.game = GameState(holder.definition)
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(definition: GameDefinition) -> FastMCP:
    """Create an MCP server wrapping a GameState for the given definition."""
    holder = _GameHolder(
        definition=definition,
        game=GameState(definition),
    )

    mcp = FastMCP(
        name=f"ecoclicker: {definition.config.name}",
    )

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: config, harm tiers and the upgrade catalog."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current state: currency, harm and tier, resource draw, rates, counts."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_available_purchases() -> dict[str, Any]:
        """Get all upgrades below max level with price and time-to-afford."""
        return _tool_get_available_purchases(holder)

    @mcp.tool()
    def get_upgrade_info(upgrade_id: str) -> dict[str, Any]:
        """Get detailed info for one upgrade: effects, pricing, ownership."""
        return _tool_get_upgrade_info(holder, upgrade_id)

    @mcp.tool()
    def purchase(upgrade_id: str) -> dict[str, Any]:
        """Buy one unit of an upgrade. Returns success or the rejection reason."""
        return _tool_purchase(holder, upgrade_id)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Perform the primary action N times (max 1000)."""
        return _tool_click(holder, count)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance simulated time (max 86400s), one tick at a time."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
