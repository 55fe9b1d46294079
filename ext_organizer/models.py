"""Dataclasses shared across ExtOrganizer modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import UsageError


class CollisionPolicy(str, Enum):
    """What to do when the destination already holds a file of the same name."""

    RENAME = "rename"
    FAIL = "fail"
    OVERWRITE = "overwrite"


class MoveStatus(str, Enum):
    MOVED = "moved"
    FAILED = "failed"


def normalize_extension(raw: str) -> str:
    """Strip one leading ``.`` and lowercase *raw*.

    >>> normalize_extension(".MOV")
    'mov'
    """

    ext = raw[1:] if raw.startswith(".") else raw
    ext = ext.lower()
    if not ext:
        raise UsageError(f"Invalid extension: {raw!r}")
    if "." in ext:
        raise UsageError(f"Only the last extension can be matched: {raw!r}")
    if "/" in ext or "\\" in ext:
        raise UsageError(f"Extension must not contain a path separator: {raw!r}")
    return ext


@dataclass(frozen=True, slots=True)
class ScanRequest:
    """Source directory and the normalized extension to collect."""

    source: Path
    extension: str

    @classmethod
    def from_cli(cls, directory: str, extension: str) -> "ScanRequest":
        return cls(source=Path(directory).expanduser(), extension=normalize_extension(extension))


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of relocating one file."""

    source: Path
    status: MoveStatus
    destination: Path | None = None
    reason: str | None = None

    @property
    def moved(self) -> bool:
        return self.status is MoveStatus.MOVED

    @classmethod
    def success(cls, source: Path, destination: Path) -> "MoveOutcome":
        return cls(source=source, status=MoveStatus.MOVED, destination=destination)

    @classmethod
    def failure(cls, source: Path, reason: str) -> "MoveOutcome":
        return cls(source=source, status=MoveStatus.FAILED, reason=reason)


@dataclass(slots=True)
class RelocationSummary:
    """Aggregated outcomes produced by :func:`~ext_organizer.relocator.move_all`."""

    destination: Path
    outcomes: list[MoveOutcome] = field(default_factory=list)

    @property
    def moved_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.moved)


@dataclass(frozen=True, slots=True)
class NotificationRequest:
    title: str
    body: str
    icon: str
