"""Shared data structures and helpers for wifimenu."""

from __future__ import annotations

import enum
import os
import subprocess
from dataclasses import dataclass
from typing import Any, Protocol

from wifimenu.errors import InvalidWirelessModeError


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

class WirelessMode(enum.Enum):
    """802.11 mode forced on the interface (AUTO leaves it to the driver)."""

    AUTO = ""
    M11A = "11a"
    M11B = "11b"
    M11G = "11g"
    M11N = "11n"
    M11AC = "11ac"

    @classmethod
    def from_token(cls, token: str) -> WirelessMode:
        """Parse a CLI mode token such as ``11n``."""
        token = token.strip()
        for mode in cls:
            if mode is not cls.AUTO and mode.value == token:
                return mode
        raise InvalidWirelessModeError(
            "Currently supported modes are '11a', '11b', '11g', '11n' and '11ac'"
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InterfaceTarget:
    """The wireless interface every operation applies to."""

    name: str                              # e.g., "iwm0"
    mode: WirelessMode = WirelessMode.AUTO


@dataclass(frozen=True)
class SavedConnection:
    """A connection remembered under the saved directory.

    Stored as ``<saved_dir>/<ssid>.<interface>``; the password lives on the
    first line of the file as a ``#`` comment.
    """

    ssid: str
    interface: str
    password: str


@dataclass(frozen=True)
class ActiveConnection:
    """The network chosen for this run."""

    ssid: str
    password: str
    mode: WirelessMode = WirelessMode.AUTO


# ---------------------------------------------------------------------------
# Command runner protocol (subprocess injection seam)
# ---------------------------------------------------------------------------

class CommandRunner(Protocol):
    """Protocol for running external commands.

    Provides an injection seam so callers can substitute a fake runner in
    tests instead of patching ``subprocess`` globally.
    """

    def run(
        self,
        cmd: list[str],
        *,
        capture_output: bool = True,
        text: bool = True,
        timeout: int | None = None,
        env: dict[str, str] | None = None,
    ) -> subprocess.CompletedProcess[Any]:
        """Run *cmd* and return a CompletedProcess."""
        ...  # pragma: no cover


class SubprocessRunner:
    """Default CommandRunner that delegates to the real ``subprocess`` module."""

    def run(
        self,
        cmd: list[str],
        *,
        capture_output: bool = True,
        text: bool = True,
        timeout: int | None = None,
        env: dict[str, str] | None = None,
    ) -> subprocess.CompletedProcess[Any]:
        """Run *cmd* via ``subprocess.run``."""
        return subprocess.run(
            cmd,
            capture_output=capture_output,
            text=text,
            timeout=timeout,
            env=env,
        )


def _minimal_env() -> dict[str, str]:
    """Build a minimal environment for subprocess calls.

    Only passes PATH, LC_ALL, and HOME — avoids leaking the full user
    environment into child processes.
    """
    return {
        "PATH": os.environ.get("PATH", "/usr/bin:/bin:/sbin:/usr/sbin"),
        "LC_ALL": "C",
        "HOME": os.environ.get("HOME", ""),
    }
