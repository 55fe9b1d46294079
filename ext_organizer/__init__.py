"""ExtOrganizer package exports."""

from .cli import main as cli_main
from .notifier import NotificationDispatcher
from .relocator import confirm, ensure_destination, move_all
from .scanner import discover

__all__ = [
    "cli_main",
    "confirm",
    "discover",
    "ensure_destination",
    "move_all",
    "NotificationDispatcher",
]
