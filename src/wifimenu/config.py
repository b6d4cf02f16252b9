"""Runtime settings for a wifimenu session.

Built once from the command line and passed explicitly to the controller
and the saved-store helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from wifimenu.wifi_common import InterfaceTarget

# -- Defaults --
DEFAULT_SAVED_DIR = "/etc/wifisaved"
DEFAULT_CONFIG_DIR = "/etc"


@dataclass(frozen=True)
class Settings:
    """Immutable configuration for one run."""

    target: InterfaceTarget
    saved_dir: str = DEFAULT_SAVED_DIR
    config_dir: str = DEFAULT_CONFIG_DIR

    def saved_path(self, ssid: str) -> str:
        """Return ``<saved_dir>/<ssid>.<interface>``."""
        return os.path.join(self.saved_dir, f"{ssid}.{self.target.name}")

    @property
    def active_path(self) -> str:
        """Return the OS-active config path, ``<config_dir>/hostname.<interface>``."""
        return os.path.join(self.config_dir, f"hostname.{self.target.name}")
