from __future__ import annotations

"""Configuration loading and access helpers.

Declarative application settings (managed tool paths, entry template, window
geometry, logging) live in YAML files packaged with *dd_switch*. They are
merged with user overrides located in the per-user application directory.

On Windows: ``%LOCALAPPDATA%\\DDSwitch\\config\\*.yml``
On Unix: ``~/.dd_switch/config/*.yml``

Missing PyYAML falls back to embedded Python dictionaries so the switcher
still starts with sensible defaults.
"""

import copy
import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager", "get_app_home"]


def get_app_home() -> Path:
    """Return the per-user application directory (state, user config)."""
    override = os.environ.get("DD_SWITCH_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    if os.name == 'nt':  # Windows
        local_appdata = os.environ.get('LOCALAPPDATA')
        if local_appdata:
            return Path(local_appdata) / "DDSwitch"
        return Path.home() / "AppData" / "Local" / "DDSwitch"
    return Path.home() / ".dd_switch"


def _get_user_config_dir() -> Path:
    return get_app_home() / "config"


def _read_packaged(filename: str) -> str:
    return pkg_resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")


def _ensure_user_configs_exist(user_config_dir: Path, default_filenames: Dict[str, str]) -> None:
    """Copy default config files to user directory if they don't exist."""
    try:
        user_config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Could not create user config directory %s: %s", user_config_dir, e)
        return

    for filename in default_filenames.values():
        user_config_path = user_config_dir / filename
        if user_config_path.exists():
            continue
        try:
            user_config_path.write_text(_read_packaged(filename), encoding='utf-8')
            logger.info("Created user config: %s", user_config_path)
        except (FileNotFoundError, OSError) as e:
            logger.warning("Could not copy default config %s: %s", filename, e)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class _Singleton(type):
    _instance: "ConfigManager" | None = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance

    def reset(cls) -> None:
        """Drop the cached instance (tests, or after the user edits YAML)."""
        cls._instance = None


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "app": "app.yml",
        "logging": "logging.yml",
    }

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._ensure_loaded()

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_paths(self) -> Dict[str, Any]:
        return dict(self._data.get("app", {}).get("paths", {}))

    def get_entries_config(self) -> Dict[str, Any]:
        return dict(self._data.get("app", {}).get("entries", {}))

    def get_ui_config(self) -> Dict[str, Any]:
        return dict(self._data.get("app", {}).get("ui", {}))

    def get_logging_config(self) -> Dict[str, Any]:
        # dictConfig mutates handler dicts; hand out a copy
        return copy.deepcopy(self._data.get("logging", {}))

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return  # already loaded

        try:
            import yaml  # type: ignore
        except ModuleNotFoundError:
            logger.warning("PyYAML not installed – falling back to built-in defaults")
            self._data = self._builtin_defaults()
            return

        startup_summary = []

        user_config_dir = _get_user_config_dir()
        _ensure_user_configs_exist(user_config_dir, self._DEFAULT_FILENAMES)

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = dict(self._builtin_defaults().get(key, {}))
            status = "builtin"

            # 1. packaged default
            try:
                packaged_data = yaml.safe_load(_read_packaged(filename)) or {}
                merged_cfg = _deep_merge(merged_cfg, packaged_data)
                status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
            except yaml.YAMLError as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                status = "invalid"

            # 2. user overrides
            user_path = user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    if isinstance(user_data, dict):
                        merged_cfg = _deep_merge(merged_cfg, user_data)
                        if status == "loaded":
                            status = "loaded+overrides"
                except (OSError, yaml.YAMLError) as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.info("Config startup: %s", " | ".join(startup_summary))

    @staticmethod
    def _builtin_defaults() -> Dict[str, Dict[str, Any]]:
        """Return the minimum needed to start without packaged YAML."""
        return {
            "app": {
                "paths": {
                    "factory_home": "~/.factory",
                    "configs_subdir": "configs",
                    "live_settings_files": ["settings.json", "config.json"],
                    "state_file": "state.yml",
                },
                "entries": {
                    "extension": ".json",
                    "template": {"customModels": []},
                    "duplicate_suffix": "-copy",
                    "import_prefix": "imported_",
                },
                "ui": {
                    "title": "DD Switch",
                    "width": 560,
                    "height": 640,
                    "theme": "light",
                    "status_timeout_ms": 2000,
                },
            },
            "logging": {},
        }
