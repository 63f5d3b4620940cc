# -*- coding: utf-8 -*-
"""Application version detection.

``get_app_version()`` prefers the ``version.txt`` written by the packaging
script, then the installed distribution metadata, and finally ``vdev``.
"""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Optional

_CACHED_VERSION: Optional[str] = None


def _prefixed(text: str) -> str:
    return text if text.startswith("v") else f"v{text}"


def get_app_version() -> str:
    """Return the application version string (e.g., ``v1.2.3``)."""
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    version_file = Path(__file__).resolve().parent.parent / "version.txt"
    try:
        text = version_file.read_text(encoding="ascii", errors="ignore").strip()
    except OSError:
        text = ""
    if not text:
        try:
            text = metadata.version("dd-switch")
        except metadata.PackageNotFoundError:
            text = ""

    _CACHED_VERSION = _prefixed(text) if text else "vdev"
    return _CACHED_VERSION
