from __future__ import annotations

"""Plain data types shared by the core services and the UI."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

__all__ = ["ConfigEntry", "AppState", "SyncStatus"]


@dataclass(frozen=True)
class ConfigEntry:
    """One named, file-backed configuration.

    ``name`` is the filename stem and doubles as the key used by the order
    list; ``path`` is absolute.
    """

    name: str
    path: str

    @classmethod
    def from_path(cls, path: Path) -> "ConfigEntry":
        return cls(name=path.stem, path=str(path))

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "path": self.path}


@dataclass
class AppState:
    """Persisted side tables: root override, display order and active marker."""

    root_override: Optional[str] = None
    order: List[str] = field(default_factory=list)
    active: Optional[str] = None
    schema_version: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppState":
        order = data.get("order") or []
        if not isinstance(order, list):
            order = []
        root = data.get("root_override")
        active = data.get("active")
        return cls(
            root_override=str(root) if root else None,
            order=[str(n) for n in order],
            active=str(active) if active else None,
            schema_version=int(data.get("schema_version") or 1),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "root_override": self.root_override,
            "order": list(self.order),
            "active": self.active,
        }


class SyncStatus:
    """Relationship between the live settings file and the active entry."""

    NO_ACTIVE = "no_active"
    IN_SYNC = "in_sync"
    DRIFTED = "drifted"
    LIVE_MISSING = "live_missing"
