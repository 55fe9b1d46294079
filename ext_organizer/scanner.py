"""Depth-limited discovery of files matching an extension."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import InvalidSourceError
from .logger import log_event

LOGGER_NAME = "ext_organizer.scanner"


def extension_of(name: str) -> str:
    """Return the lowercased extension of *name* without the leading dot.

    Dotfiles such as ``.bashrc`` have no extension.
    """

    return Path(name).suffix[1:].lower()


def validate_source(source: Path) -> Path:
    if not source.is_dir():
        raise InvalidSourceError(source)
    return source


def _list_entries(source: Path) -> list[os.DirEntry]:
    """Read the entries of *source*; an unreadable directory is an invalid source."""

    try:
        with os.scandir(source) as it:
            return list(it)
    except OSError as exc:
        raise InvalidSourceError(source) from exc


def discover(source: Path, extension: str, *, logger: logging.Logger | None = None) -> list[Path]:
    """Return the regular files directly inside *source* whose extension is *extension*.

    Matching is case-insensitive. Subdirectories are never entered, and
    directories (including symlinks to directories) are never candidates.
    Entries are returned in the order the filesystem enumerates them.
    """

    logger = logger or logging.getLogger(LOGGER_NAME)
    validate_source(source)
    wanted = extension.lower()
    source = source.absolute()

    matches: list[Path] = []
    for entry in _list_entries(source):
        try:
            if not entry.is_file():
                continue
        except OSError:
            continue
        if extension_of(entry.name) != wanted:
            continue
        matches.append(Path(entry.path))
        log_event(
            logger,
            level=logging.DEBUG,
            action="scan.match",
            message=f"Matched {entry.name}",
            extra={"path": entry.path},
        )

    log_event(
        logger,
        level=logging.INFO,
        action="scan.done",
        message=f"Found {len(matches)} .{wanted} file(s)",
        extra={"path": source, "count": len(matches)},
    )
    return matches


__all__ = ["discover", "extension_of", "validate_source"]
