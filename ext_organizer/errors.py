"""Exception hierarchy for ExtOrganizer."""
from __future__ import annotations

from pathlib import Path


class ExtOrganizerError(Exception):
    """Base error for the project."""


class UsageError(ExtOrganizerError):
    """Raised when the command line is incomplete or malformed."""


class InvalidSourceError(ExtOrganizerError):
    """Raised when the source path is missing or is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Not a directory: {path}")
        self.path = path


class DestinationCreateError(ExtOrganizerError):
    """Raised when the extension folder cannot be created."""

    def __init__(self, path: Path, reason: OSError) -> None:
        super().__init__(f"Could not create {path}: {reason}")
        self.path = path
        self.reason = reason


class MoveError(ExtOrganizerError):
    """Raised when a single file cannot be relocated."""

    def __init__(self, source: Path, reason: str) -> None:
        super().__init__(f"{source.name}: {reason}")
        self.source = source
        self.reason = reason


__all__ = [
    "ExtOrganizerError",
    "UsageError",
    "InvalidSourceError",
    "DestinationCreateError",
    "MoveError",
]
