import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from winstate.geometry import Rect, WindowStateRecord
from winstate.storage import load_state, save_state


def test_load_returns_none_for_missing_file(tmp_path: Path) -> None:
    assert load_state(tmp_path / "window-state.json") is None


def test_load_returns_none_for_malformed_json(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "window-state.json"
    path.write_text("{not json")

    with caplog.at_level(logging.WARNING, logger="winstate.storage"):
        assert load_state(path) is None

    assert "Could not read window state" in caplog.text


def test_load_returns_none_for_non_object(tmp_path: Path) -> None:
    path = tmp_path / "window-state.json"
    path.write_text("[1, 2, 3]")

    assert load_state(path) is None


def test_load_returns_none_for_directory(tmp_path: Path) -> None:
    assert load_state(tmp_path) is None


def test_save_creates_file_and_parent_directories(tmp_path: Path) -> None:
    path = tmp_path / "a" / "b" / "window-state.json"
    record = WindowStateRecord(
        x=1, y=2, width=3, height=4, display_bounds=Rect(0, 0, 10, 10)
    )

    assert save_state(path, record)

    assert json.loads(path.read_text()) == {
        "x": 1,
        "y": 2,
        "width": 3,
        "height": 4,
        "displayBounds": {"x": 0, "y": 0, "width": 10, "height": 10},
    }


def test_save_is_atomic(tmp_path: Path) -> None:
    """No .tmp files left behind after save."""
    save_state(tmp_path / "window-state.json", WindowStateRecord(width=1, height=1))

    tmp_files = list(tmp_path.glob("*.tmp"))
    assert tmp_files == []


def test_save_overwrites_previous_state(tmp_path: Path) -> None:
    path = tmp_path / "window-state.json"
    save_state(path, WindowStateRecord(width=1, height=1))
    save_state(path, WindowStateRecord(width=2, height=2))

    assert json.loads(path.read_text()) == {"width": 2, "height": 2}


def test_save_reports_failure_without_raising(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    with caplog.at_level(logging.WARNING, logger="winstate.storage"):
        ok = save_state(blocker / "window-state.json", WindowStateRecord())

    assert ok is False
    assert "Could not create directory" in caplog.text


def test_save_removes_temp_file_on_serialization_error(tmp_path: Path) -> None:
    path = tmp_path / "window-state.json"
    record = WindowStateRecord(extra={"bad": object()})

    assert save_state(path, record) is False

    assert list(tmp_path.iterdir()) == []


def test_load_returns_none_for_deeply_nested_json(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "window-state.json"
    path.write_text("[" * 100000 + "]" * 100000)

    with caplog.at_level(logging.WARNING, logger="winstate.storage"):
        assert load_state(path) is None

    assert "nested too deeply" in caplog.text


def test_save_reports_temp_file_failure(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with (
        patch("winstate.storage.tempfile.mkstemp", side_effect=PermissionError("denied")),
        caplog.at_level(logging.WARNING, logger="winstate.storage"),
    ):
        ok = save_state(tmp_path / "window-state.json", WindowStateRecord())

    assert ok is False
    assert "Could not create temp file" in caplog.text
    assert "Could not create directory" not in caplog.text


def test_save_survives_temp_file_cleanup_failure(tmp_path: Path) -> None:
    record = WindowStateRecord(extra={"bad": object()})

    with patch("winstate.storage.os.unlink", side_effect=OSError("busy")) as mock_unlink:
        ok = save_state(tmp_path / "window-state.json", record)

    assert ok is False
    mock_unlink.assert_called_once()
