from __future__ import annotations

"""Persisted app state record.

A single YAML file in the per-user application directory holds the side
tables that live outside the configuration root:

- ``root_override``: user-chosen configuration root (or null)
- ``order``: entry names in display order
- ``active``: path of the entry last applied (the active marker)

Writes are atomic. A corrupt file is moved aside once (``state.yml.bak.<ts>``)
and defaults are used so the app still starts; an unreadable file raises
ReadError so a transient I/O failure never overwrites the record.
"""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Optional

import yaml

from dd_switch.core.exceptions import ReadError, WriteError
from dd_switch.core.models import AppState
from dd_switch.core.utils import atomic_write_text

__all__ = ["StateStore"]

logger = logging.getLogger(__name__)


class StateStore:
    """Load/save :class:`AppState` as YAML.

    The file is re-read on every :meth:`load`; callers mutate through
    :meth:`update` so each change is a read-modify-write of the whole record.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppState:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return AppState()
        except OSError as exc:
            raise ReadError("Could not read app state", str(self._path), exc) from exc
        try:
            data = yaml.safe_load(raw.decode("utf-8")) or {}
            if not isinstance(data, dict):
                raise ValueError(f"{self._path.name} root is not a mapping")
            return AppState.from_dict(data)
        except (ValueError, TypeError, yaml.YAMLError) as exc:
            logger.warning("State file %s unreadable (%s); using defaults", self._path, exc)
            self._move_corrupt_aside()
            return AppState()

    def save(self, state: AppState) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            text = yaml.safe_dump(state.to_dict(), sort_keys=False, allow_unicode=True)
            atomic_write_text(self._path, text)
        except OSError as exc:
            raise WriteError("Could not save app state", str(self._path), exc) from exc

    def update(self, mutate: Callable[[AppState], None]) -> AppState:
        """Load, apply *mutate* in place, save, and return the new state."""
        state = self.load()
        mutate(state)
        self.save(state)
        return state

    # Convenience accessors ------------------------------------------------
    def get_root_override(self) -> Optional[str]:
        return self.load().root_override

    def get_active(self) -> Optional[str]:
        return self.load().active

    def _move_corrupt_aside(self) -> None:
        # Moved rather than copied so later loads see no file and back up nothing
        ts = time.strftime("%Y%m%d_%H%M%S")
        bak = self._path.with_name(f"{self._path.name}.bak.{ts}")
        try:
            os.replace(self._path, bak)
            logger.info("Moved corrupt state file to %s", bak)
        except OSError as exc:
            logger.warning("Could not move corrupt state file %s aside: %s", self._path, exc)
