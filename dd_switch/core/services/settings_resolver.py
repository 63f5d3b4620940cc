from __future__ import annotations

"""Resolution of the configuration root and of the live settings file."""

import logging
import os
from pathlib import Path
from typing import Optional, Sequence

__all__ = ["SettingsResolver", "default_factory_home"]

logger = logging.getLogger(__name__)


def default_factory_home(configured: str = "~/.factory") -> Path:
    """Home directory of the switched tool; ``DD_SWITCH_FACTORY_HOME`` wins."""
    env = os.environ.get("DD_SWITCH_FACTORY_HOME", "").strip()
    return Path(env or configured).expanduser()


class SettingsResolver:
    """Computes effective paths from the user override and platform defaults.

    ``resolve`` is pure: it neither creates nor checks directories. Use
    ``exists`` to decide whether to warn about a configured root.
    """

    def __init__(
        self,
        factory_home: Path,
        configs_subdir: str = "configs",
        live_settings_files: Sequence[str] = ("settings.json", "config.json"),
    ) -> None:
        if not live_settings_files:
            raise ValueError("live_settings_files must name at least one file")
        self.factory_home = Path(factory_home).expanduser().absolute()
        self.configs_subdir = configs_subdir
        self.live_settings_files = tuple(live_settings_files)

    @property
    def default_root(self) -> Path:
        return self.factory_home / self.configs_subdir

    def resolve(self, user_override: Optional[str]) -> Path:
        """Return the trimmed override (made absolute) when non-empty, else the default root."""
        if user_override is not None:
            text = str(user_override).strip()
            if text:
                return Path(text).expanduser().absolute()
        return self.default_root

    @staticmethod
    def exists(root: Optional[Path]) -> bool:
        """Existence check that never raises (bad paths count as missing)."""
        if root is None:
            return False
        try:
            return Path(root).is_dir()
        except (OSError, ValueError):
            return False

    def live_settings_path(self) -> Path:
        """Live settings file the tool reads.

        First existing candidate wins; when none exists, the last candidate is
        the one ``apply`` creates.
        """
        for filename in self.live_settings_files:
            candidate = self.factory_home / filename
            if candidate.is_file():
                return candidate
        return self.factory_home / self.live_settings_files[-1]
