from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from dd_switch.core.context import AppContext
from dd_switch.core.exceptions import ConfigSwitchError
from dd_switch.core.models import ConfigEntry, SyncStatus
from dd_switch.core.services import model_format

__all__ = ["OperationResult", "SwitchController"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Result of a user action.

    Attributes
    ----------
    success
        Whether the operation completed successfully.
    message
        Human-readable summary suitable for the status bar or a dialog.
    details
        Optional structured details (new path, error kind, ...).
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None


class SwitchController:
    """Coordinates UI actions with the core services.

    Every mutating action returns an :class:`OperationResult`; core
    exceptions are logged and turned into failed results so the view only
    has to show ``result.message``. Views re-query :meth:`list_configs` and
    :meth:`get_active` after each action.

    No Tkinter code belongs in this module.
    """

    def __init__(self, context: AppContext) -> None:
        self.context = context
        self.store = context.store
        self.tracker = context.tracker
        self.importer = context.importer

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    @staticmethod
    def _failure(action: str, exc: ConfigSwitchError) -> OperationResult:
        logger.warning("%s failed: %s", action, exc)
        return OperationResult(
            False,
            f"{action} failed: {exc}",
            {"error": type(exc).__name__, "path": exc.path},
        )

    # ---------------------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------------------

    def list_configs(self) -> List[ConfigEntry]:
        """Entries in display order; empty when the root is unavailable."""
        try:
            return self.store.list_entries()
        except ConfigSwitchError as exc:
            logger.warning("Listing configs failed: %s", exc)
            return []

    def get_active(self) -> Optional[str]:
        try:
            return self.tracker.get_active()
        except ConfigSwitchError as exc:
            logger.warning("Reading active marker failed: %s", exc)
            return None

    def read(self, path: str) -> OperationResult:
        try:
            content = self.store.read(path)
        except ConfigSwitchError as exc:
            return self._failure("Open", exc)
        return OperationResult(True, "", {"content": content})

    def get_settings(self) -> Dict[str, Optional[str]]:
        try:
            return self.store.get_settings()
        except ConfigSwitchError as exc:
            logger.warning("Reading settings failed: %s", exc)
            return {"root": None}

    def check_root_exists(self) -> bool:
        try:
            return self.store.check_root_exists()
        except ConfigSwitchError as exc:
            logger.warning("Root check failed: %s", exc)
            return False

    def effective_root(self) -> str:
        try:
            return str(self.store.root)
        except ConfigSwitchError:
            return str(self.context.resolver.default_root)

    def sync_status(self) -> str:
        try:
            return self.tracker.sync_status()
        except ConfigSwitchError as exc:
            logger.warning("Sync check failed: %s", exc)
            return SyncStatus.NO_ACTIVE

    # ---------------------------------------------------------------------------------
    # Actions
    # ---------------------------------------------------------------------------------

    def create(self, name: str) -> OperationResult:
        try:
            path = self.store.create(name)
        except ConfigSwitchError as exc:
            return self._failure("Create", exc)
        return OperationResult(True, f"Created: {Path(path).stem}", {"path": path})

    def save(self, path: str, content: str) -> OperationResult:
        """Save content; the live file is refreshed when *path* is the active entry."""
        try:
            self.store.save(path, content)
            reapplied = self._is_active(path)
            if reapplied:
                self.tracker.apply(path)
        except ConfigSwitchError as exc:
            return self._failure("Save", exc)
        warning = model_format.validate_json(content)
        message = f"Saved: {Path(path).stem}"
        if warning:
            message += f" (warning: not valid JSON: {warning})"
        return OperationResult(True, message, {"path": path, "reapplied": reapplied, "json_error": warning})

    def rename(self, path: str, new_name: str) -> OperationResult:
        try:
            new_path = self.store.rename(path, new_name)
        except ConfigSwitchError as exc:
            return self._failure("Rename", exc)
        return OperationResult(True, f"Renamed to: {Path(new_path).stem}", {"path": new_path})

    def delete(self, path: str) -> OperationResult:
        try:
            self.store.delete(path)
        except ConfigSwitchError as exc:
            return self._failure("Delete", exc)
        return OperationResult(True, f"Deleted: {Path(path).stem}", {"path": path})

    def duplicate(self, path: str) -> OperationResult:
        try:
            new_path = self.store.duplicate(path)
        except ConfigSwitchError as exc:
            return self._failure("Duplicate", exc)
        return OperationResult(True, f"Duplicated: {Path(new_path).stem}", {"path": new_path})

    def reorder(self, names: List[str]) -> OperationResult:
        try:
            self.store.reorder(names)
        except ConfigSwitchError as exc:
            return self._failure("Reorder", exc)
        return OperationResult(True, "Order saved", {"order": list(names)})

    def apply(self, path: str) -> OperationResult:
        try:
            self.tracker.apply(path)
        except ConfigSwitchError as exc:
            return self._failure("Apply", exc)
        return OperationResult(True, f"Applied: {Path(path).stem}", {"path": path, "live": str(self.tracker.live_path)})

    def import_current(self) -> OperationResult:
        try:
            path = self.importer.import_current()
        except ConfigSwitchError as exc:
            return self._failure("Import", exc)
        return OperationResult(True, f"Imported current settings as: {Path(path).stem}", {"path": path})

    def adopt_live(self) -> OperationResult:
        """Mark the entry matching the live file as active (no copy needed)."""
        try:
            match = self.tracker.find_matching_entry()
            if match is None:
                return OperationResult(False, "No configuration matches the live settings file")
            self.tracker.apply(match)
        except ConfigSwitchError as exc:
            return self._failure("Adopt", exc)
        return OperationResult(True, f"Active: {Path(match).stem}", {"path": match})

    def normalize(self, path: str) -> OperationResult:
        """Rewrite the entry's model list to canonical form and save it."""
        try:
            content = model_format.normalize_document(self.store.read(path))
        except ConfigSwitchError as exc:
            return self._failure("Normalize", exc)
        result = self.save(path, content)
        if not result.success:
            return result
        return OperationResult(True, f"Normalized: {Path(path).stem}", {"path": path, "content": content})

    def set_root(self, path: Optional[str]) -> OperationResult:
        try:
            self.store.set_root(path)
        except ConfigSwitchError as exc:
            return self._failure("Save settings", exc)
        root = self.effective_root()
        if not self.check_root_exists():
            return OperationResult(True, f"Settings saved, but folder does not exist: {root}", {"root": root, "exists": False})
        return OperationResult(True, "Settings saved", {"root": root, "exists": True})

    def ensure_root(self) -> OperationResult:
        try:
            root = self.store.ensure_root()
        except ConfigSwitchError as exc:
            return self._failure("Open config folder", exc)
        return OperationResult(True, "", {"root": str(root)})

    def _is_active(self, path: str) -> bool:
        active = self.tracker.get_active()
        entry = self.store.find_entry(path)
        return active is not None and entry is not None and entry.path == active
