from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution,
idempotent directory creation and home abbreviation for console output.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from standards.domain.errors import WorkspaceError
from standards.infra.fs import (
    display_path,
    ensure_directory,
    get_default_config_path,
    get_user_data_dir,
    normalize_path,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            path = get_user_data_dir()
            assert "Standards" in path
            assert path.lower().startswith(os.path.abspath(mock_appdata).lower())


def test_get_user_data_dir_unix(tmp_path: Path, monkeypatch) -> None:
    """TC-02: Verify resolution of ~/.standards on Unix-like systems."""
    monkeypatch.setenv("HOME", str(tmp_path))
    with patch("os.name", "posix"):
        path = get_user_data_dir()

    assert path == os.path.join(str(tmp_path), ".standards")
    assert get_default_config_path().endswith("config.json")


def test_normalize_path_expands_user_and_fallback(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert normalize_path("~/docs", "/unused") == os.path.join(str(tmp_path), "docs")
    assert normalize_path("   ", str(tmp_path)) == str(tmp_path)
    assert normalize_path(None, str(tmp_path)) == str(tmp_path)


# -----------------------------------------------------------------------------
# DIRECTORY MANAGEMENT TESTS
# -----------------------------------------------------------------------------

def test_ensure_directory_reports_creation(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"

    assert ensure_directory(str(target)) is True
    assert target.is_dir()
    assert ensure_directory(str(target)) is False


def test_ensure_directory_rejects_file(tmp_path: Path) -> None:
    f = tmp_path / "occupied"
    f.write_text("x", encoding="utf-8")

    with pytest.raises(WorkspaceError) as exc_info:
        ensure_directory(str(f))

    assert "not a directory" in str(exc_info.value)


def test_display_path_abbreviates_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert display_path(str(tmp_path)) == "~"
    assert display_path(os.path.join(str(tmp_path), "Standards")) == os.path.join("~", "Standards")
    assert display_path("/elsewhere/x") == "/elsewhere/x"
