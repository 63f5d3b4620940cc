"""Shared fixtures for DD Switch tests.

Every test gets its own managed-tool home (with an empty ``configs`` root)
and its own app home, so nothing touches the real user directories.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dd_switch.config import ConfigManager
from dd_switch.core.context import AppContext
from dd_switch.core.services import ActiveConfigTracker, ConfigStore, Importer, SettingsResolver
from dd_switch.core.state_store import StateStore

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

FIXED_CLOCK = 1700000000.0


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point per-user directories at the temp dir and reset the config singleton."""
    monkeypatch.setenv("DD_SWITCH_HOME", str(tmp_path / "dd_home"))
    monkeypatch.delenv("DD_SWITCH_FACTORY_HOME", raising=False)
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture
def factory_home(tmp_path):
    home = tmp_path / "factory"
    (home / "configs").mkdir(parents=True)
    return home


@pytest.fixture
def app_home(tmp_path):
    return tmp_path / "app"


@pytest.fixture
def context(factory_home, app_home):
    resolver = SettingsResolver(factory_home)
    state = StateStore(app_home / "state.yml")
    store = ConfigStore(resolver, state)
    tracker = ActiveConfigTracker(store, state, resolver)
    importer = Importer(store, tracker, clock=lambda: FIXED_CLOCK)
    return AppContext(resolver=resolver, state=state, store=store, tracker=tracker, importer=importer)


@pytest.fixture
def store(context):
    return context.store


@pytest.fixture
def tracker(context):
    return context.tracker


@pytest.fixture
def importer(context):
    return context.importer


@pytest.fixture
def state(context):
    return context.state


@pytest.fixture
def make_entries(store):
    """Create entries with given content; returns {name: path}."""
    def factory(contents):
        paths = {}
        for name, content in contents.items():
            path = store.create(name)
            store.save(path, content)
            paths[name] = path
        return paths
    return factory
