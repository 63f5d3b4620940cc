"""Configuration files (YAML) and the helpers that load them.

`ConfigManager` reads the defaults packaged in this folder and merges them
with user overrides from the per-user application directory.
"""

from .manager import ConfigManager, get_app_home

__all__ = [
    "ConfigManager",
    "get_app_home",
]
