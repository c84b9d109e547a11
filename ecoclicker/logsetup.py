"""Logging configuration with per-module channel toggles."""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

ROOT_LOGGER = "ecoclicker"

DEFAULT_CHANNELS: dict[str, bool] = {
    "economy": True,
    "scheduler": False,
    "state": True,
    "simulation": True,
}


@dataclass
class LoggerConfig:
    """Configuration for runtime logging."""

    level: int = logging.INFO
    channels: dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_CHANNELS))

    @classmethod
    def from_settings(cls, settings_path: Path) -> LoggerConfig:
        """Read ``logLevel`` and ``logChannels`` from a JSON settings file.

        A missing or unreadable file yields the defaults.
        """
        if not settings_path.exists():
            return cls()
        try:
            data = json.loads(settings_path.read_text())
        except json.JSONDecodeError:
            return cls()
        level_name = str(data.get("logLevel", "INFO")).upper()
        level = getattr(logging, level_name, logging.INFO)
        channels = dict(DEFAULT_CHANNELS)
        channels.update(data.get("logChannels", {}))
        return cls(level=level, channels=channels)


def channel_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def set_enabled(name: str, enabled: bool) -> None:
    channel_logger(name).disabled = not enabled


def init_logger(
    config: LoggerConfig | None = None,
    settings_path: Path | None = None,
) -> logging.Logger:
    """Configure the ``ecoclicker`` logger tree and return its root."""
    if config is None:
        config = LoggerConfig.from_settings(settings_path or Path("settings.json"))

    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        root.addHandler(handler)
    root.setLevel(config.level)
    for name, enabled in config.channels.items():
        set_enabled(name, enabled)
    return root
