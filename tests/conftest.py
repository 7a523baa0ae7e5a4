"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from logfilter.models import ViewerConfig
from logfilter.viewer import Viewer

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

SAMPLE_LINES = [
    "2024-01-15T10:30:00Z server started on port 8080",
    "2024-01-15T10:30:01Z connection established from 192.168.1.1",
    "2024-01-15T10:30:02Z error: failed to connect to db",
    "2024-01-15T10:30:03Z retrying in 5s",
    "2024-01-15T10:30:08Z error: failed to connect to db",
    "2024-01-15T10:30:13Z connected",
]


@pytest.fixture
def sample_chunk() -> bytes:
    return ("\n".join(SAMPLE_LINES) + "\n").encode()


@pytest.fixture
def make_viewer() -> Callable[..., Viewer]:
    """Build a viewer from ViewerConfig keyword arguments."""

    def _make(**kwargs: bool) -> Viewer:
        return Viewer(ViewerConfig(**kwargs))

    return _make


@pytest.fixture
def sample_log_file(tmp_path: Path) -> Path:
    """Create a temporary log file with sample content."""
    log_file = tmp_path / "test.log"
    log_file.write_text("\n".join(SAMPLE_LINES) + "\n")
    return log_file


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temporary location."""
    path = tmp_path / "config"
    monkeypatch.setenv("LOGFILTER_CONFIG_DIR", str(path))
    return path
