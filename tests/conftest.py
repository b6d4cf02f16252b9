"""Shared fixtures for wifimenu tests."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from wifimenu.config import Settings
from wifimenu.wifi_common import InterfaceTarget, WirelessMode


@pytest.fixture
def console():
    """A Rich console that records output instead of writing to a terminal."""
    return Console(file=io.StringIO(), width=80, color_system=None)


@pytest.fixture
def settings(tmp_path):
    config_dir = tmp_path / "etc"
    config_dir.mkdir()
    return Settings(
        target=InterfaceTarget(name="iwm0", mode=WirelessMode.AUTO),
        saved_dir=str(tmp_path / "wifisaved"),
        config_dir=str(config_dir),
    )
