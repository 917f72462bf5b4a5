import os
import sys
from datetime import datetime

import pytest

# Ensure Python path includes project root for `import calengine`
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from calengine.calendar_store import CalendarStore  # noqa: E402
from calengine.config import Config  # noqa: E402
from calengine.event import Event  # noqa: E402
from calshell.dispatcher import CommandDispatcher  # noqa: E402


@pytest.fixture
def store():
    return CalendarStore()


@pytest.fixture
def meeting():
    """Team Meeting, Monday 2023-05-15 10:00 to 11:00."""
    return Event("Team Meeting", datetime(2023, 5, 15, 10, 0), datetime(2023, 5, 15, 11, 0))


@pytest.fixture
def config(tmp_path):
    cfg = Config()
    cfg.export.directory = tmp_path
    return cfg


@pytest.fixture
def dispatcher(store, config):
    return CommandDispatcher(store, config)
