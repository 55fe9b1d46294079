"""Desktop notifications with an ordered fallback chain.

The dispatcher walks its backends in priority order and stops at the first
one that reports success:

1. the native cross-desktop API (:mod:`plyer`)
2. ``notify-send``
3. ``kdialog``
4. ``zenity``
5. a highlighted line on the console, which always succeeds

External utilities are probed before they are run; a missing tool, a failing
probe, a spawn error or a non-zero exit status all simply move on to the next
backend. Nothing is ever raised to the caller.
"""
from __future__ import annotations

import logging
import shutil
import subprocess
import warnings
from typing import Callable, Iterable, Sequence

from plyer import notification
from rich.console import Console

from . import console as term
from .logger import log_event
from .models import NotificationRequest

LOGGER_NAME = "ext_organizer.notifier"
EXPIRE_SECONDS = 5
APP_NAME = "File Organizer"

Probe = Callable[[str], bool]
Runner = Callable[[Sequence[str]], int]
NativeNotify = Callable[..., object]


def which_probe(program: str) -> bool:
    """Return True when *program* is found on ``PATH``."""

    return shutil.which(program) is not None


def run_quietly(argv: Sequence[str]) -> int:
    """Run *argv* to completion with its output captured; return the exit status."""

    completed = subprocess.run(list(argv), capture_output=True, check=False)
    return completed.returncode


class Backend:
    """One way of showing a notification."""

    name = "backend"

    def attempt(self, title: str, body: str, icon: str) -> bool:
        raise NotImplementedError


class NativeBackend(Backend):
    name = "native"

    def __init__(self, notify: NativeNotify | None = None) -> None:
        self._notify = notify

    def attempt(self, title: str, body: str, icon: str) -> bool:
        # plyer warns on stderr when python-dbus is missing.
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            notify = self._notify or notification.notify
            notify(
                title=title,
                message=body,
                app_name=APP_NAME,
                app_icon=icon,
                timeout=EXPIRE_SECONDS,
            )
        return True


class CommandBackend(Backend):
    """Run an external utility, provided the probe finds it first."""

    def __init__(
        self,
        program: str,
        build_args: Callable[[str, str, str], list[str]],
        *,
        probe: Probe | None = None,
        runner: Runner | None = None,
    ) -> None:
        self.program = program
        self.name = program
        self._build_args = build_args
        self._probe = probe or which_probe
        self._runner = runner or run_quietly

    def available(self) -> bool:
        try:
            return bool(self._probe(self.program))
        except Exception:  # noqa: BLE001 - a broken probe means "not installed"
            return False

    def attempt(self, title: str, body: str, icon: str) -> bool:
        if not self.available():
            return False
        argv = [self.program, *self._build_args(title, body, icon)]
        return self._runner(argv) == 0


class ConsoleBackend(Backend):
    """Terminal fallback; always reports success."""

    name = "console"

    def __init__(self, console: Console | None = None) -> None:
        self._console = console

    def attempt(self, title: str, body: str, icon: str) -> bool:
        out = self._console or term.stdout
        out.print(
            f"\n{term.styled('NOTIFICATION:', 'bold bright_yellow')} "
            f"{term.escape(title)}: {term.escape(body)}"
        )
        return True


def notify_send_args(title: str, body: str, icon: str) -> list[str]:
    return [title, body, "--icon", icon, "--expire-time", str(EXPIRE_SECONDS * 1000)]


def kdialog_args(title: str, body: str, icon: str) -> list[str]:
    return ["--title", title, "--passivepopup", body, str(EXPIRE_SECONDS)]


def zenity_args(title: str, body: str, icon: str) -> list[str]:
    return ["--info", "--title", title, "--text", body, "--timeout", str(EXPIRE_SECONDS)]


def default_backends(
    *,
    probe: Probe | None = None,
    runner: Runner | None = None,
    native: NativeNotify | None = None,
    console: Console | None = None,
) -> list[Backend]:
    """Build the standard chain: native, notify-send, kdialog, zenity, console."""

    return [
        NativeBackend(native),
        CommandBackend("notify-send", notify_send_args, probe=probe, runner=runner),
        CommandBackend("kdialog", kdialog_args, probe=probe, runner=runner),
        CommandBackend("zenity", zenity_args, probe=probe, runner=runner),
        ConsoleBackend(console),
    ]


class NotificationDispatcher:
    """Deliver a :class:`NotificationRequest` through the first working backend."""

    def __init__(
        self,
        backends: Iterable[Backend] | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.backends = list(backends) if backends is not None else default_backends()
        if not self.backends or not isinstance(self.backends[-1], ConsoleBackend):
            self.backends.append(ConsoleBackend())
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def dispatch(self, request: NotificationRequest) -> Backend:
        """Show *request* and return the backend that delivered it."""

        for backend in self.backends:
            log_event(
                self.logger,
                level=logging.DEBUG,
                action="notify.attempt",
                message=f"Trying {backend.name}",
                extra={"backend": backend.name},
            )
            try:
                delivered = backend.attempt(request.title, request.body, request.icon)
            except Exception as exc:  # noqa: BLE001 - any backend error means fall through
                log_event(
                    self.logger,
                    level=logging.DEBUG,
                    action="notify.failed",
                    message=f"{backend.name} failed: {exc}",
                    extra={"backend": backend.name, "error": type(exc).__name__},
                )
                continue
            if delivered:
                log_event(
                    self.logger,
                    level=logging.INFO,
                    action="notify.delivered",
                    message=f"Delivered via {backend.name}",
                    extra={"backend": backend.name},
                )
                return backend
            log_event(
                self.logger,
                level=logging.DEBUG,
                action="notify.skip",
                message=f"{backend.name} unavailable",
                extra={"backend": backend.name},
            )
        # Unreachable while the chain ends with a ConsoleBackend.
        raise AssertionError("notification chain exhausted")


__all__ = [
    "Backend",
    "CommandBackend",
    "ConsoleBackend",
    "NativeBackend",
    "NotificationDispatcher",
    "default_backends",
    "which_probe",
    "run_quietly",
]
