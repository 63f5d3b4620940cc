from __future__ import annotations

"""Activation of a configuration entry.

The switched tool always reads one fixed live settings file, so applying an
entry is a full byte copy into that file, never a link. The active marker
(path of the applied entry) is stored in the app state record and is only
updated once the copy has succeeded.

The tracker does not watch files: after editing the active entry the caller
applies it again (the controller does this on save).
"""

import logging
from pathlib import Path
from typing import Optional

from dd_switch.core.exceptions import NotFoundError, ReadError, WriteError
from dd_switch.core.models import AppState, SyncStatus
from dd_switch.core.services.config_store import ConfigStore
from dd_switch.core.services.settings_resolver import SettingsResolver
from dd_switch.core.state_store import StateStore
from dd_switch.core.utils import atomic_write_bytes

__all__ = ["ActiveConfigTracker"]

logger = logging.getLogger(__name__)


class ActiveConfigTracker:
    """Tracks the applied entry and copies it to the live settings file."""

    def __init__(self, store: ConfigStore, state: StateStore, resolver: SettingsResolver) -> None:
        self.store = store
        self.state = state
        self.resolver = resolver
        self._logger = logging.getLogger(f"{__name__}.ActiveConfigTracker")

    @property
    def live_path(self) -> Path:
        return self.resolver.live_settings_path()

    def get_active(self) -> Optional[str]:
        """Path of the active entry, or None when unset or dangling."""
        marker = self.state.get_active()
        if not marker:
            return None
        entry = self.store.find_entry(marker)
        if entry is None:
            self._logger.debug("Active marker %s no longer matches an entry", marker)
            return None
        return entry.path

    def apply(self, path: str) -> None:
        """Copy the entry at *path* into the live file and mark it active."""
        entry = self.store.find_entry(path)
        if entry is None:
            raise NotFoundError("Configuration is not a current entry", str(path))

        try:
            data = Path(entry.path).read_bytes()
        except FileNotFoundError as exc:
            raise NotFoundError("Configuration not found", entry.path, exc) from exc
        except OSError as exc:
            raise ReadError("Could not read configuration", entry.path, exc) from exc

        target = self.live_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_bytes(target, data)
        except OSError as exc:
            raise WriteError("Could not write live settings file", str(target), exc) from exc

        def mutate(state: AppState) -> None:
            state.active = entry.path

        self.state.update(mutate)
        self._logger.info("Applied config '%s' -> %s (%d bytes)", entry.name, target, len(data))

    def sync_status(self) -> str:
        """Compare the live file with the active entry (see :class:`SyncStatus`)."""
        active = self.get_active()
        if active is None:
            return SyncStatus.NO_ACTIVE
        live = self.live_path
        if not live.is_file():
            return SyncStatus.LIVE_MISSING
        try:
            same = Path(active).read_bytes() == live.read_bytes()
        except OSError as exc:
            self._logger.warning("Could not compare %s with %s: %s", active, live, exc)
            return SyncStatus.DRIFTED
        return SyncStatus.IN_SYNC if same else SyncStatus.DRIFTED

    def find_matching_entry(self) -> Optional[str]:
        """First entry (display order) whose bytes equal the live file, if any.

        Lets the UI offer to adopt an unmanaged live file; the marker is left
        untouched.
        """
        live = self.live_path
        if not live.is_file() or not self.store.check_root_exists():
            return None
        try:
            live_bytes = live.read_bytes()
        except OSError as exc:
            self._logger.warning("Could not read live settings %s: %s", live, exc)
            return None
        for entry in self.store.list_entries():
            try:
                if Path(entry.path).read_bytes() == live_bytes:
                    return entry.path
            except OSError:
                continue
        return None
