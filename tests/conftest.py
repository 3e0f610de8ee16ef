"""Shared fixtures: sample media files and an inspectable temp directory."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect tempfile.mkdtemp into a directory the test can inspect."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    path = tmp_path / "lecture.mp3"
    path.write_bytes(b"\xff\xfb" * 512)
    return path


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    path = tmp_path / "meeting.mkv"
    path.write_bytes(b"\x1a\x45\xdf\xa3" * 256)
    return path
