from __future__ import annotations

"""File-backed store of named configuration entries.

Each entry is one ``*.json`` file directly under the configuration root; its
name is the filename stem. The display order and the active marker live in
the app state record (:class:`~dd_switch.core.state_store.StateStore`) and
are reconciled on every mutation, so after any call returns the persisted
order names exactly the entries on disk.

Content is opaque text. Nothing here parses JSON; see
:mod:`dd_switch.core.services.model_format` for the explicit normalisation
action.

Examples
--------
    store = ConfigStore(resolver, StateStore(state_path))
    path = store.create("claude")
    store.save(path, '{"customModels": []}')
    [e.name for e in store.list_entries()]   # ['claude']
"""

import json
import logging
import os
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dd_switch.core.exceptions import (
    AlreadyExistsError,
    ConfigSwitchError,
    DuplicateFailedError,
    InvalidNameError,
    InvalidOrderError,
    NotFoundError,
    ReadError,
    StorageUnavailableError,
    WriteError,
)
from dd_switch.core.models import AppState, ConfigEntry
from dd_switch.core.services.settings_resolver import SettingsResolver
from dd_switch.core.state_store import StateStore
from dd_switch.core.utils import (
    atomic_write_text,
    next_available_name,
    safe_filename,
    same_file,
)

__all__ = ["ConfigStore", "same_path"]

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE: Dict[str, Any] = {"customModels": []}


def same_path(a: Optional[str], b: Optional[str]) -> bool:
    """Compare two path strings after normalisation (no file-system access)."""
    if not a or not b:
        return False
    return os.path.normcase(os.path.abspath(a)) == os.path.normcase(os.path.abspath(b))


def _reconcile_order(order: Iterable[str], current: Iterable[str]) -> List[str]:
    """Keep known names in their order, drop stale ones, append new ones sorted."""
    current_set = set(current)
    kept: List[str] = []
    for name in order:
        if name in current_set and name not in kept:
            kept.append(name)
    kept.extend(sorted(n for n in current_set if n not in kept))
    return kept


class ConfigStore:
    """Owns the entry files under the configuration root."""

    def __init__(
        self,
        resolver: SettingsResolver,
        state: StateStore,
        extension: str = ".json",
        template: Optional[Dict[str, Any]] = None,
        duplicate_suffix: str = "-copy",
    ) -> None:
        self.resolver = resolver
        self.state = state
        self.extension = extension
        self.template = DEFAULT_TEMPLATE if template is None else template
        self.duplicate_suffix = duplicate_suffix
        self._logger = logging.getLogger(f"{__name__}.ConfigStore")

    # -------------------------------------------------------------------------
    # Root and settings
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Path:
        return self.resolver.resolve(self.state.get_root_override())

    def get_settings(self) -> Dict[str, Optional[str]]:
        """User-facing settings: the root override (None when using the default)."""
        return {"root": self.state.get_root_override()}

    def set_root(self, path: Optional[str]) -> None:
        """Persist a root override; blank clears it. The directory is not created."""
        text = (path or "").strip() or None

        def mutate(state: AppState) -> None:
            state.root_override = text
            new_root = self.resolver.resolve(text)
            if self.resolver.exists(new_root):
                state.order = _reconcile_order(state.order, self._scan(new_root))

        self.state.update(mutate)
        self._logger.info("Config root set to %s", text or f"default ({self.resolver.default_root})")

    def check_root_exists(self) -> bool:
        return self.resolver.exists(self.root)

    def ensure_root(self) -> Path:
        """Create the default root if missing; an override is never created."""
        root = self.root
        if self.resolver.exists(root):
            return root
        if self.state.get_root_override():
            raise StorageUnavailableError("Configured root directory does not exist", str(root))
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailableError("Could not create config root", str(root), exc) from exc
        self._logger.info("Created config root %s", root)
        return root

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_entries(self) -> List[ConfigEntry]:
        """Entries in persisted display order; unknown entries follow, sorted by name."""
        root = self._require_root()
        files = self._scan(root)
        order = _reconcile_order(self.state.load().order, files)
        return [ConfigEntry.from_path(files[name]) for name in order]

    def names(self) -> List[str]:
        return [entry.name for entry in self.list_entries()]

    def find_entry(self, path: str) -> Optional[ConfigEntry]:
        """Return the entry at *path* if it is a current entry of the root."""
        if not path:
            return None
        root = self.root
        if not self.resolver.exists(root):
            return None
        candidate = Path(path)
        files = self._scan(root)
        entry_path = files.get(candidate.stem)
        if entry_path is None:
            return None
        if same_path(str(entry_path), str(candidate)) or same_file(entry_path, candidate):
            return ConfigEntry.from_path(entry_path)
        return None

    def read(self, path: str) -> str:
        """Return raw file content, decoded as UTF-8 with newlines untouched."""
        p = Path(path)
        if not p.is_file():
            raise NotFoundError("Configuration not found", str(p))
        try:
            return p.read_bytes().decode("utf-8")
        except FileNotFoundError as exc:
            raise NotFoundError("Configuration not found", str(p), exc) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError("Could not read configuration", str(p), exc) from exc

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, name: str) -> str:
        """Create an entry holding the template payload; return its path."""
        stem = self._stem_for(name)
        root = self._require_root()
        files = self._scan(root)
        path = root / f"{stem}{self.extension}"
        if self._is_taken(stem, files) or path.exists():
            raise AlreadyExistsError(f"A configuration named '{stem}' already exists", str(path))

        payload = json.dumps(self.template, indent=2, ensure_ascii=False) + "\n"
        self._write(path, payload)

        def mutate(state: AppState) -> None:
            order = [n for n in state.order if n != stem] + [stem]
            state.order = _reconcile_order(order, self._scan(root))

        self.state.update(mutate)
        self._logger.info("Created config '%s' at %s", stem, path)
        return str(path)

    def save(self, path: str, content: str) -> None:
        """Overwrite the entry content; the text is not validated."""
        entry = self._require_entry(path)
        p = Path(entry.path)
        self._write(p, content)
        self._logger.info("Saved config %s (%d chars)", p, len(content))

    def rename(self, old_path: str, new_name: str) -> str:
        """Move the entry file to a new name; order and active marker follow."""
        stem = self._stem_for(new_name)
        old = Path(self._require_entry(old_path).path)
        new = old.with_name(f"{stem}{self.extension}")
        if new.name == old.name:
            return str(old)

        root = old.parent
        others = {n: p for n, p in self._scan(root).items() if n != old.stem}
        case_variant = same_file(old, new)
        if not case_variant and (self._is_taken(stem, others) or new.exists()):
            raise AlreadyExistsError(f"A configuration named '{stem}' already exists", str(new))

        try:
            os.replace(old, new)
        except OSError as exc:
            raise WriteError("Could not rename configuration", str(old), exc) from exc

        def mutate(state: AppState) -> None:
            state.order = [stem if n == old.stem else n for n in state.order]
            if same_path(state.active, str(old)):
                state.active = str(new)
            state.order = _reconcile_order(state.order, self._scan(root))

        self.state.update(mutate)
        self._logger.info("Renamed config '%s' -> '%s'", old.stem, stem)
        return str(new)

    def delete(self, path: str) -> None:
        """Remove the entry; a matching active marker is cleared.

        Only entries of the current root are deleted. Any other path raises
        NotFoundError after dropping stale references to it from the side
        tables; the file itself is never touched.
        """
        entry = self.find_entry(path)
        p = Path(entry.path) if entry is not None else Path(path)
        missing = entry is None
        if not missing:
            try:
                p.unlink()
            except FileNotFoundError:
                missing = True
            except OSError as exc:
                raise WriteError("Could not delete configuration", str(p), exc) from exc

        root = self.root

        def mutate(state: AppState) -> None:
            if same_path(str(p.parent), str(root)):
                state.order = [n for n in state.order if n != p.stem]
            if same_path(state.active, str(p)):
                state.active = None
            if self.resolver.exists(root):
                state.order = _reconcile_order(state.order, self._scan(root))

        self.state.update(mutate)
        if missing:
            raise NotFoundError("Configuration not found", str(p))
        self._logger.info("Deleted config '%s'", p.stem)

    def duplicate(self, path: str) -> str:
        """Copy an entry to ``<name>-copy`` (``-copy-1``, ``-copy-2`` on collision)."""
        source = Path(self._require_entry(path).path)
        content = self.read(str(source))
        root = self._require_root()
        files = self._scan(root)
        new_name = next_available_name(
            f"{source.stem}{self.duplicate_suffix}",
            lambda n: self._is_taken(n, files) or (root / f"{n}{self.extension}").exists(),
        )

        new_path = self.create(new_name)
        try:
            self.save(new_path, content)
        except ConfigSwitchError as exc:
            self.discard(new_path)
            raise DuplicateFailedError(f"Could not duplicate '{source.stem}'", str(source), exc) from exc
        self._logger.info("Duplicated config '%s' -> '%s'", source.stem, new_name)
        return new_path

    def reorder(self, names: List[str]) -> None:
        """Persist *names* as the display order; must be a permutation of current names."""
        files = self._scan(self._require_root())
        names = list(names)
        duplicates = sorted(n for n, count in Counter(names).items() if count > 1)
        missing = sorted(set(files) - set(names))
        unexpected = sorted(set(names) - set(files))
        if duplicates or missing or unexpected:
            self._logger.warning(
                "Reorder rejected: missing=%s unexpected=%s duplicates=%s", missing, unexpected, duplicates
            )
            raise InvalidOrderError(
                "Order must list every configuration exactly once",
                missing=missing,
                unexpected=unexpected,
                duplicates=duplicates,
            )

        def mutate(state: AppState) -> None:
            state.order = names

        self.state.update(mutate)
        self._logger.info("Reordered %d configs", len(names))

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _require_root(self) -> Path:
        root = self.root
        if not self.resolver.exists(root):
            raise StorageUnavailableError("Config root directory does not exist", str(root))
        return root

    def _require_entry(self, path: str) -> ConfigEntry:
        entry = self.find_entry(path)
        if entry is None:
            raise NotFoundError("Configuration not found", str(path))
        return entry

    def _scan(self, root: Path) -> Dict[str, Path]:
        """Map stem -> path for entry files directly under *root*."""
        try:
            children = list(root.iterdir())
        except OSError as exc:
            raise StorageUnavailableError("Config root is not readable", str(root), exc) from exc
        files: Dict[str, Path] = {}
        ext = self.extension.lower()
        for child in children:
            if child.name.startswith(".") or child.suffix.lower() != ext:
                continue
            if child.is_file():
                files[child.stem] = child
        return files

    def _stem_for(self, name: str) -> str:
        stem = safe_filename(name, self.extension)
        if stem is None:
            raise InvalidNameError("Configuration name must not be empty", name=str(name or ""))
        return stem

    @staticmethod
    def _is_taken(stem: str, files: Dict[str, Path]) -> bool:
        # Case-insensitive so the result does not depend on the file system
        folded = stem.casefold()
        return any(n.casefold() == folded for n in files)

    def _write(self, path: Path, content: str) -> None:
        try:
            atomic_write_text(path, content)
        except OSError as exc:
            raise WriteError("Could not write configuration", str(path), exc) from exc

    def discard(self, path: str) -> None:
        """Best-effort removal of a half-created entry."""
        try:
            self.delete(path)
        except ConfigSwitchError as exc:
            self._logger.warning("Cleanup of %s failed: %s", path, exc)
