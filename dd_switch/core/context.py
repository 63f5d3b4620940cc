from __future__ import annotations

"""Application context wiring the core services together.

:func:`create_app_context` builds every service from :class:`ConfigManager`
settings; tests pass explicit directories instead.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dd_switch.config import ConfigManager, get_app_home
from dd_switch.core.services.active_tracker import ActiveConfigTracker
from dd_switch.core.services.config_store import ConfigStore
from dd_switch.core.services.importer import Importer
from dd_switch.core.services.settings_resolver import SettingsResolver, default_factory_home
from dd_switch.core.state_store import StateStore

__all__ = ["AppContext", "create_app_context"]

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """The services one front-end instance works with."""

    resolver: SettingsResolver
    state: StateStore
    store: ConfigStore
    tracker: ActiveConfigTracker
    importer: Importer


def create_app_context(
    factory_home: Optional[Path] = None,
    app_home: Optional[Path] = None,
    config: Optional[ConfigManager] = None,
) -> AppContext:
    """Build services; explicit directories take precedence over configuration."""
    config = config or ConfigManager()
    paths = config.get_paths()
    entries = config.get_entries_config()

    home = Path(factory_home) if factory_home else default_factory_home(paths.get("factory_home", "~/.factory"))
    resolver = SettingsResolver(
        home,
        configs_subdir=paths.get("configs_subdir", "configs"),
        live_settings_files=paths.get("live_settings_files") or ("settings.json", "config.json"),
    )
    state = StateStore(Path(app_home or get_app_home()) / paths.get("state_file", "state.yml"))
    store = ConfigStore(
        resolver,
        state,
        extension=entries.get("extension", ".json"),
        template=entries.get("template"),
        duplicate_suffix=entries.get("duplicate_suffix", "-copy"),
    )
    tracker = ActiveConfigTracker(store, state, resolver)
    importer = Importer(store, tracker, prefix=entries.get("import_prefix", "imported_"))

    logger.info("Context ready: root=%s live=%s state=%s", store.root, tracker.live_path, state.path)
    return AppContext(resolver=resolver, state=state, store=store, tracker=tracker, importer=importer)
