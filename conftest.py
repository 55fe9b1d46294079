from __future__ import annotations

import pytest
from rich.console import Console

from ext_organizer import console


@pytest.fixture(autouse=True)
def plain_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep console output free of ANSI codes whatever the environment says."""

    options = dict(force_terminal=False, no_color=True, soft_wrap=True, highlight=False, emoji=False)
    monkeypatch.setattr(console, "stdout", Console(**options))
    monkeypatch.setattr(console, "stderr", Console(stderr=True, **options))
