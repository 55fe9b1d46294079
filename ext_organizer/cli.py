"""Command line interface for ExtOrganizer."""
from __future__ import annotations

import argparse
import logging
from typing import NoReturn

from . import console as term
from .errors import DestinationCreateError, InvalidSourceError, UsageError
from .logger import configure_logging, log_event
from .models import CollisionPolicy, NotificationRequest, ScanRequest
from .notifier import NotificationDispatcher
from .relocator import LineReader, confirm, ensure_destination, move_all
from .scanner import discover

PROG = "ext-organizer"
NOTIFICATION_TITLE = "File Organizer"
SUCCESS_ICON = "folder-download"
IDLE_ICON = "info"
# Console output is the only user-facing channel; structured events stay off it.
CLI_LOG_LEVEL = logging.CRITICAL


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def main(
    argv: list[str] | None = None,
    *,
    read_line: LineReader | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> int:
    logger = configure_logging(level=CLI_LOG_LEVEL)
    try:
        request = parse_request(argv)
    except UsageError as exc:
        _print_usage(str(exc))
        return 2
    return run(request, read_line=read_line, dispatcher=dispatcher, logger=logger)


def parse_request(argv: list[str] | None = None) -> ScanRequest:
    parser = _build_parser()
    args, _extra = parser.parse_known_args(argv)
    return ScanRequest.from_cli(args.directory, args.extension)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog=PROG,
        description="Move every file with the given extension into a subfolder named after it.",
    )
    parser.add_argument("directory", help="Directory to scan (not recursive)")
    parser.add_argument("extension", help="Extension to collect, with or without the leading dot")
    return parser


def run(
    request: ScanRequest,
    *,
    read_line: LineReader | None = None,
    dispatcher: NotificationDispatcher | None = None,
    policy: CollisionPolicy = CollisionPolicy.RENAME,
    logger: logging.Logger | None = None,
) -> int:
    """Discover, confirm, move and notify. Returns the process exit code."""

    logger = logger or logging.getLogger("ext_organizer")
    ext = request.extension

    try:
        matches = discover(request.source, ext)
    except InvalidSourceError as exc:
        term.stderr.print(term.styled("Error: source directory is missing or not a directory.", "bold red"))
        log_event(logger, level=logging.ERROR, action="scan.invalid_source", message=str(exc), extra={"path": exc.path})
        return 1

    if not matches:
        term.stdout.print(f"{term.styled('info:', 'blue')} no files found with extension {term.styled('.' + ext, 'yellow')}")
        _notify(dispatcher, 0, ext)
        return 0

    if not confirm(len(matches), ext, request.source, read_line=read_line):
        term.stdout.print(term.styled("Operation cancelled by user.", "yellow"))
        log_event(logger, level=logging.INFO, action="relocate.declined", message="User declined", extra={"count": len(matches)})
        return 0

    try:
        destination = ensure_destination(request.source, ext)
    except DestinationCreateError as exc:
        term.stderr.print(f"{term.styled('Error:', 'bold red')} {term.escape(str(exc))}")
        log_event(logger, level=logging.ERROR, action="relocate.mkdir_failed", message=str(exc), extra={"path": exc.path})
        return 1

    summary = move_all(matches, destination, policy=policy)
    moved = summary.moved_count
    term.stdout.print(
        f"\n{term.styled('DONE:', 'bold white on green')} moved {term.styled(moved, 'bold yellow')} "
        f"files to folder {term.styled(ext, 'cyan')}."
    )
    _notify(dispatcher, moved, ext)
    return 0


def build_notification(moved: int, extension: str) -> NotificationRequest:
    if moved > 0:
        return NotificationRequest(
            NOTIFICATION_TITLE,
            f"Success! Moved {moved} files to folder '{extension}'.",
            SUCCESS_ICON,
        )
    return NotificationRequest(NOTIFICATION_TITLE, "No files were moved.", IDLE_ICON)


def _notify(dispatcher: NotificationDispatcher | None, moved: int, extension: str) -> None:
    (dispatcher or NotificationDispatcher()).dispatch(build_notification(moved, extension))


def _print_usage(detail: str) -> None:
    term.stderr.print(
        f"{term.styled('Error:', 'bold bright_red')} {term.styled('Usage:', 'yellow')} "
        f"{PROG} <directory> <extension>"
    )
    if detail:
        term.stderr.print(term.escape(detail))
    term.stderr.print(f"Example: {term.styled(PROG, 'cyan')} ~/Downloads .MOV")

