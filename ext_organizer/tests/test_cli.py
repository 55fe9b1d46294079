from __future__ import annotations

import logging
from pathlib import Path

from ext_organizer import cli, scanner
from ext_organizer.models import NotificationRequest


class RecordingDispatcher:
    def __init__(self) -> None:
        self.requests: list[NotificationRequest] = []

    def dispatch(self, request: NotificationRequest) -> None:
        self.requests.append(request)


def refuse_to_read() -> str:
    raise AssertionError("confirmation must not be requested")


def test_cli_usage_error(capsys) -> None:
    dispatcher = RecordingDispatcher()
    assert cli.main(["only-one"], dispatcher=dispatcher) == 2
    err = capsys.readouterr().err
    assert "Usage:" in err
    assert "<directory> <extension>" in err
    assert dispatcher.requests == []


def test_cli_rejects_empty_extension(tmp_path: Path, capsys) -> None:
    assert cli.main([str(tmp_path), "."], dispatcher=RecordingDispatcher()) == 2
    assert "Usage:" in capsys.readouterr().err


def test_cli_invalid_source(tmp_path: Path, capsys) -> None:
    dispatcher = RecordingDispatcher()
    exit_code = cli.main([str(tmp_path / "missing"), ".mov"], read_line=refuse_to_read, dispatcher=dispatcher)
    assert exit_code == 1
    assert "not a directory" in capsys.readouterr().err
    assert dispatcher.requests == []


def test_cli_no_matches_notifies_without_prompt(tmp_path: Path, capsys) -> None:
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    dispatcher = RecordingDispatcher()

    assert cli.main([str(tmp_path), "mov"], read_line=refuse_to_read, dispatcher=dispatcher) == 0

    assert "no files found with extension .mov" in capsys.readouterr().out
    assert [r.body for r in dispatcher.requests] == ["No files were moved."]
    assert dispatcher.requests[0].icon == "info"
    assert not (tmp_path / "mov").exists()


def test_cli_decline_moves_nothing_and_skips_notification(tmp_path: Path, capsys) -> None:
    clip = tmp_path / "clip.MOV"
    clip.write_text("x", encoding="utf-8")
    dispatcher = RecordingDispatcher()

    assert cli.main([str(tmp_path), ".mov"], read_line=lambda: "n\n", dispatcher=dispatcher) == 0

    assert clip.exists()
    assert not (tmp_path / "mov").exists()
    assert dispatcher.requests == []
    assert "Operation cancelled by user." in capsys.readouterr().out


def test_cli_destination_failure_is_fatal(tmp_path: Path, capsys) -> None:
    clip = tmp_path / "clip.mov"
    clip.write_text("x", encoding="utf-8")
    (tmp_path / "mov").write_text("in the way", encoding="utf-8")
    dispatcher = RecordingDispatcher()

    assert cli.main([str(tmp_path), "mov"], read_line=lambda: "s\n", dispatcher=dispatcher) == 1

    assert clip.exists()
    assert dispatcher.requests == []
    assert "Error:" in capsys.readouterr().err


def test_cli_ignores_extra_arguments(tmp_path: Path) -> None:
    (tmp_path / "a.jpg").write_text("x", encoding="utf-8")
    dispatcher = RecordingDispatcher()
    assert cli.main([str(tmp_path), "jpg", "extra"], read_line=lambda: "s", dispatcher=dispatcher) == 0
    assert (tmp_path / "jpg" / "a.jpg").exists()


def test_build_notification_messages() -> None:
    success = cli.build_notification(3, "pdf")
    assert success.body == "Success! Moved 3 files to folder 'pdf'."
    assert success.icon == "folder-download"
    idle = cli.build_notification(0, "pdf")
    assert idle.body == "No files were moved."
    assert idle.title == success.title == "File Organizer"


def fresh_logger(monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("ext_organizer"), "handlers", [])


def test_cli_invalid_source_prints_no_log_records(tmp_path: Path, monkeypatch, capfd) -> None:
    fresh_logger(monkeypatch)
    assert cli.main([str(tmp_path / "missing"), "mov"], dispatcher=RecordingDispatcher()) == 1
    err = capfd.readouterr().err
    assert "not a directory" in err
    assert '"action"' not in err


def test_cli_mkdir_failure_prints_no_log_records(tmp_path: Path, monkeypatch, capfd) -> None:
    fresh_logger(monkeypatch)
    (tmp_path / "clip.mov").write_text("x", encoding="utf-8")
    (tmp_path / "mov").write_text("in the way", encoding="utf-8")
    assert cli.main([str(tmp_path), "mov"], read_line=lambda: "s", dispatcher=RecordingDispatcher()) == 1
    err = capfd.readouterr().err
    assert "Error:" in err
    assert '"action"' not in err


def test_cli_unreadable_source(tmp_path: Path, monkeypatch, capsys) -> None:
    def deny(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(scanner.os, "scandir", deny)
    dispatcher = RecordingDispatcher()
    assert cli.main([str(tmp_path), "mov"], read_line=refuse_to_read, dispatcher=dispatcher) == 1
    assert "not a directory" in capsys.readouterr().err
    assert dispatcher.requests == []
