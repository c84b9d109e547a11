import logging

import pytest

from ecoclicker.logsetup import DEFAULT_CHANNELS, ROOT_LOGGER, channel_logger


@pytest.fixture
def restore_logging():
    """Undo init_logger() side effects on the shared logger tree."""
    root = logging.getLogger(ROOT_LOGGER)
    level, handlers = root.level, list(root.handlers)
    disabled = {name: channel_logger(name).disabled for name in DEFAULT_CHANNELS}
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers
    for name, flag in disabled.items():
        channel_logger(name).disabled = flag
