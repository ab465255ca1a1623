"""Shared fixtures: settings factory and an in-memory file server client."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from rich.logging import RichHandler

from hfsync.models.config import SyncSettings
from tests.fakes import FakeClient


@pytest.fixture()
def make_settings(tmp_path: Path):
    """Return a factory for SyncSettings rooted in a temporary folder."""

    def _make(**overrides: Any) -> SyncSettings:
        values: dict[str, Any] = {
            "account_name": "alice",
            "server_url": "http://files.example",
            "server_port": 8080,
            "download_speed": 3,
            "check_time": 0,
            "download_folder": str(tmp_path / "dest"),
            "worker_count": 3,
        }
        values.update(overrides)
        return SyncSettings(**values)

    return _make


@pytest.fixture()
def settings(make_settings) -> SyncSettings:
    return make_settings()


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture()
def rich_log():
    """Route hfsync logs through a markup-enabled RichHandler; return a reader."""
    buffer = io.StringIO()
    handler = RichHandler(
        console=Console(file=buffer, width=200, color_system=None),
        show_path=False,
        show_level=False,
        markup=True,
    )
    logger = logging.getLogger("hfsync")
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield buffer.getvalue
    logger.removeHandler(handler)
    logger.setLevel(previous_level)
