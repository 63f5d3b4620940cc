from __future__ import annotations

"""Bootstrap the managed set from the tool's existing live settings file."""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from dd_switch.core.exceptions import ConfigSwitchError, NotFoundError, ReadError
from dd_switch.core.models import AppState
from dd_switch.core.services.active_tracker import ActiveConfigTracker
from dd_switch.core.services.config_store import ConfigStore
from dd_switch.core.utils import next_available_name

__all__ = ["Importer"]

logger = logging.getLogger(__name__)


class Importer:
    """Snapshots the live settings file into a new, active entry."""

    def __init__(
        self,
        store: ConfigStore,
        tracker: ActiveConfigTracker,
        prefix: str = "imported_",
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.store = store
        self.tracker = tracker
        self.prefix = prefix
        self._clock = clock or time.time

    def import_current(self) -> str:
        """Create an entry byte-identical to the live file, mark it active, return its path."""
        live = self.tracker.live_path
        if not live.is_file():
            raise NotFoundError("No live settings file to import", str(live))
        try:
            content = live.read_bytes().decode("utf-8")
        except FileNotFoundError as exc:
            raise NotFoundError("No live settings file to import", str(live), exc) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError("Could not read live settings file", str(live), exc) from exc

        taken = {n.casefold() for n in self.store.names()}
        name = next_available_name(f"{self.prefix}{int(self._clock())}", lambda n: n.casefold() in taken)
        path = self.store.create(name)
        try:
            self.store.save(path, content)
        except ConfigSwitchError:
            self.store.discard(path)
            raise

        def mutate(state: AppState) -> None:
            state.active = path

        self.store.state.update(mutate)
        logger.info("Imported %s as '%s'", live, Path(path).stem)
        return path
