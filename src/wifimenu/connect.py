"""Apply a chosen network to an interface with ifconfig(8)."""

from __future__ import annotations

import logging
import subprocess

from wifimenu.errors import ApplyFailedError
from wifimenu.wifi_common import (
    ActiveConnection,
    CommandRunner,
    SubprocessRunner,
    WirelessMode,
    _minimal_env,
)

_LOGGER = logging.getLogger(__name__)

_DEFAULT_RUNNER = SubprocessRunner()


def build_join_command(interface: str, connection: ActiveConnection) -> list[str]:
    """Return the ``ifconfig <if> nwid <ssid> wpakey <password>`` command."""
    return ["ifconfig", interface, "nwid", connection.ssid, "wpakey", connection.password]


def build_mode_command(interface: str, mode: WirelessMode) -> list[str]:
    """Return the ``ifconfig <if> mode <token>`` command."""
    return ["ifconfig", interface, "mode", str(mode)]


def connect_wifi_ifconfig(
    interface: str,
    connection: ActiveConnection,
    *,
    runner: CommandRunner | None = None,
) -> bool:
    """Join *connection* on *interface*, then force its mode unless AUTO.

    Args:
        interface: Wireless interface name.
        connection: SSID, password and mode to apply.
        runner: Optional CommandRunner for subprocess calls (testing seam).

    Returns:
        True if every ifconfig call exited 0.  Non-zero exits are logged
        and not retried.

    Raises:
        ApplyFailedError: ifconfig could not be launched.
    """
    runner = runner or _DEFAULT_RUNNER
    commands = [build_join_command(interface, connection)]
    if connection.mode is not WirelessMode.AUTO:
        commands.append(build_mode_command(interface, connection.mode))

    ok = True
    for cmd in commands:
        # cmd carries the password; log the verb only
        _LOGGER.debug("apply: ifconfig %s %s", interface, cmd[2])
        try:
            result = runner.run(cmd, capture_output=True, text=True, env=_minimal_env())
        except (FileNotFoundError, OSError, subprocess.SubprocessError) as exc:
            raise ApplyFailedError(str(exc)) from exc
        if result.returncode != 0:
            ok = False
            _LOGGER.warning(
                "ifconfig %s %s exited with status %d: %s",
                interface, cmd[2], result.returncode, (result.stderr or "").strip(),
            )
    return ok
