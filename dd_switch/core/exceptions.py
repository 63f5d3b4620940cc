from __future__ import annotations

"""Exception classes for configuration switching.

Core services raise these; the presentation controller catches
:class:`ConfigSwitchError` and turns it into a user-facing message. Nothing
in the core retries or swallows them.
"""

from typing import Optional

__all__ = [
    "ConfigSwitchError",
    "NotFoundError",
    "InvalidNameError",
    "AlreadyExistsError",
    "StorageUnavailableError",
    "ReadError",
    "WriteError",
    "InvalidOrderError",
    "DuplicateFailedError",
    "InvalidContentError",
]


class ConfigSwitchError(Exception):
    """Base exception for all configuration switching errors.

    Carries the path the operation was working on (if any) and the low-level
    exception that caused it, so logs can show both.
    """

    def __init__(self, message: str, path: Optional[str] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        if self.path:
            return f"{super().__str__()} [{self.path}]"
        return super().__str__()


class NotFoundError(ConfigSwitchError):
    """Raised when an entry, path or the live settings file is missing."""


class InvalidNameError(ConfigSwitchError):
    """Raised when a name is empty (after trimming) or cannot form a filename."""

    def __init__(self, message: str, name: str = "", cause: Optional[BaseException] = None) -> None:
        super().__init__(message, None, cause)
        self.name = name


class AlreadyExistsError(ConfigSwitchError):
    """Raised when a create/rename target collides with an existing entry."""


class StorageUnavailableError(ConfigSwitchError):
    """Raised when the configuration root is missing or unreadable."""


class ReadError(ConfigSwitchError):
    """Raised on I/O failure while reading an entry or the live file."""


class WriteError(ConfigSwitchError):
    """Raised on I/O failure while writing, moving or removing files."""


class InvalidOrderError(ConfigSwitchError):
    """Raised when a reorder payload is not a permutation of current entry names."""

    def __init__(self, message: str, missing: Optional[list[str]] = None,
                 unexpected: Optional[list[str]] = None,
                 duplicates: Optional[list[str]] = None) -> None:
        super().__init__(message)
        self.missing = missing or []
        self.unexpected = unexpected or []
        self.duplicates = duplicates or []


class DuplicateFailedError(ConfigSwitchError):
    """Raised when duplicating an entry fails part way.

    The partially created copy has been removed (best effort) before this is
    raised.
    """


class InvalidContentError(ConfigSwitchError):
    """Raised when entry content must be parsed (normalisation) and is not valid JSON."""
