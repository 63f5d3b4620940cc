"""Services for managing and switching configuration entries."""

from .settings_resolver import SettingsResolver, default_factory_home
from .config_store import ConfigStore
from .active_tracker import ActiveConfigTracker
from .importer import Importer
from . import model_format

__all__ = [
    "SettingsResolver",
    "default_factory_home",
    "ConfigStore",
    "ActiveConfigTracker",
    "Importer",
    "model_format",
]
