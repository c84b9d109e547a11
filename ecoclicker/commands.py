from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PrimaryAction:
    """Player click: earn click power, emit a little harm."""


@dataclass(frozen=True)
class Purchase:
    upgrade_id: str


@dataclass(frozen=True)
class Tick:
    """One fixed period of simulated time."""


TICK = Tick()

Command = PrimaryAction | Purchase | Tick
