"""Confirmation, destination setup and the per-file move loop."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

from rich.console import Console

from . import console as term
from .errors import DestinationCreateError, MoveError
from .logger import log_event
from .models import CollisionPolicy, MoveOutcome, RelocationSummary

LOGGER_NAME = "ext_organizer.relocator"
AFFIRMATIVE = "s"

LineReader = Callable[[], str]


def _logger(logger: logging.Logger | None) -> logging.Logger:
    return logger or logging.getLogger(LOGGER_NAME)


def confirm(
    match_count: int,
    extension: str,
    source: Path,
    *,
    read_line: LineReader | None = None,
    console: Console | None = None,
) -> bool:
    """Print what was found and ask once whether to move it.

    Only ``s`` (trimmed, any case) counts as consent. Anything else, including
    an empty line or end of input, is a refusal.
    """

    out = console or term.stdout
    read_line = read_line or sys.stdin.readline
    out.print(
        f"\n{term.styled('FOUND:', 'bold bright_green')} "
        f"{term.styled(match_count, 'yellow')} {term.styled('.' + extension, 'cyan')} "
        f"files in {term.styled(source, 'blue')}"
    )
    out.print(f"{term.styled('Move these files?', 'bold')} {term.escape('[s/N]')}: ", end="")
    answer = read_line() or ""
    return answer.strip().lower() == AFFIRMATIVE


def ensure_destination(
    source: Path,
    extension: str,
    *,
    console: Console | None = None,
    logger: logging.Logger | None = None,
) -> Path:
    """Return ``source/extension``, creating it (non-recursively) if needed."""

    destination = source / extension
    if destination.is_dir():
        return destination
    try:
        destination.mkdir()
    except OSError as exc:
        raise DestinationCreateError(destination, exc) from exc
    log_event(
        _logger(logger),
        level=logging.INFO,
        action="relocate.mkdir",
        message=f"Created {destination}",
        extra={"path": destination},
    )
    (console or term.stdout).print(f"{term.styled('OK:', 'green')} created folder {term.escape(str(destination))}")
    return destination


def unique_path(target: Path) -> Path:
    """Return *target*, or the first free ``stem_N.suffix`` next to it."""

    candidate = target
    counter = 1
    while candidate.exists():
        candidate = target.with_name(f"{target.stem}_{counter}{target.suffix}")
        counter += 1
    return candidate


def move_one(source: Path, destination: Path, policy: CollisionPolicy = CollisionPolicy.RENAME) -> Path:
    """Rename *source* into the *destination* directory and return the new path."""

    target = destination / source.name
    if target.exists():
        if policy is CollisionPolicy.FAIL:
            raise MoveError(source, "destination already exists")
        if policy is CollisionPolicy.RENAME:
            target = unique_path(target)
    try:
        if policy is CollisionPolicy.OVERWRITE:
            return source.replace(target)
        return source.rename(target)
    except OSError as exc:
        raise MoveError(source, exc.strerror or str(exc)) from exc


def move_all(
    matches: Sequence[Path],
    destination: Path,
    *,
    policy: CollisionPolicy = CollisionPolicy.RENAME,
    console: Console | None = None,
    error_console: Console | None = None,
    logger: logging.Logger | None = None,
) -> RelocationSummary:
    """Move every match into *destination*; one failure never stops the rest."""

    out = console or term.stdout
    err = error_console or term.stderr
    logger = _logger(logger)
    summary = RelocationSummary(destination=destination)

    for source in matches:
        try:
            moved_to = move_one(source, destination, policy)
        except MoveError as exc:
            summary.outcomes.append(MoveOutcome.failure(source, exc.reason))
            err.print(f"  {term.styled('✘', 'red')} {term.escape(source.name)}: {term.escape(exc.reason)}")
            log_event(
                logger,
                level=logging.WARNING,
                action="relocate.move_failed",
                message=str(exc),
                extra={"path": source, "reason": exc.reason},
            )
            continue
        summary.outcomes.append(MoveOutcome.success(source, moved_to))
        out.print(f"  {term.styled('✔', 'green')} {term.escape(moved_to.name)}")
        log_event(
            logger,
            level=logging.INFO,
            action="relocate.move",
            message=f"Moved {source} -> {moved_to}",
            extra={"path": source, "destination": moved_to},
        )
    return summary


__all__ = ["AFFIRMATIVE", "confirm", "ensure_destination", "move_all", "move_one", "unique_path"]
