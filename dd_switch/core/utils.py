from __future__ import annotations

"""Simple reusable helper functions.

Name helpers are side-effect-free. :func:`atomic_write_bytes` is the single
place where files are written, so every write in the toolkit goes through a
temp file and ``os.replace``.
"""

from pathlib import Path
from typing import Callable, Optional
import logging
import os
import re
import uuid

__all__ = [
    "safe_filename",
    "next_available_name",
    "atomic_write_bytes",
    "atomic_write_text",
    "same_file",
]

logger = logging.getLogger(__name__)

# Path separators, Windows-reserved characters and control characters
_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')


def safe_filename(name: str, extension: str = ".json") -> Optional[str]:
    """Return a file-system-safe stem for *name*, or None if nothing usable is left.

    Examples:
        >>> safe_filename("  claude prod ")
        'claude prod'
        >>> safe_filename("openai/gpt-4")
        'openai_gpt-4'
        >>> safe_filename("work.json")
        'work'
        >>> safe_filename("   ") is None
        True
    """
    if not isinstance(name, str):
        return None
    text = name.strip()
    if extension and text.lower().endswith(extension.lower()):
        text = text[: -len(extension)].strip()
    text = _UNSAFE_CHARS.sub("_", text)
    # Windows drops trailing dots/spaces silently; do it up front
    text = text.rstrip(". ")
    if not text or text in {".", ".."}:
        return None
    return text


def next_available_name(base: str, is_taken: Callable[[str], bool]) -> str:
    """Return *base*, or the first ``base-N`` (N = 1, 2, ...) not taken.

    >>> next_available_name("x-copy", {"x-copy"}.__contains__)
    'x-copy-1'
    """
    if not is_taken(base):
        return base
    counter = 1
    while is_taken(f"{base}-{counter}"):
        counter += 1
    return f"{base}-{counter}"


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write *data* to *path* via a sibling temp file and ``os.replace``.

    The temp file is removed if the write fails. OSError propagates.
    """
    path = Path(path)
    tmp = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.tmp")
    try:
        with open(tmp, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except OSError:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        except OSError as cleanup_exc:
            logger.warning("Could not remove temp file %s: %s", tmp, cleanup_exc)
        raise


def atomic_write_text(path: Path, text: str) -> None:
    atomic_write_bytes(path, text.encode("utf-8"))


def same_file(a: Path, b: Path) -> bool:
    """True when both paths exist and point at the same file."""
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False
