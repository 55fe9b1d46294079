"""Shared ``rich`` consoles used for all user-facing output."""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# Both consoles resolve sys.stdout / sys.stderr lazily, so redirected streams
# (pytest's capsys included) are honoured and non-terminals get plain text.
stdout = Console(soft_wrap=True, highlight=False, emoji=False)
stderr = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


def styled(text: object, style: str) -> str:
    """Wrap *text* in console markup, escaping anything that looks like a tag."""

    return f"[{style}]{escape(str(text))}[/]"


__all__ = ["stdout", "stderr", "styled", "escape"]
