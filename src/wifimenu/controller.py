"""Connection workflow: reconnect to a saved network or pick a new one.

The controller walks one session through::

    Start -> TrySaved -> TryNew -> Apply -> Done

Any step may raise a :class:`~wifimenu.errors.WifiMenuError`; nothing is
rolled back, so a record persisted before a failed apply stays on disk.
"""

from __future__ import annotations

import logging
from typing import Callable

from rich.console import Console

from wifimenu.config import Settings
from wifimenu.connect import connect_wifi_ifconfig
from wifimenu.display.menu import ask_password, choose
from wifimenu.errors import NoNetworksFoundError
from wifimenu.saved import (
    activate_saved_connection,
    ensure_saved_dir,
    list_saved_connections,
    read_saved_connection,
    validate_ssid,
    write_connection,
)
from wifimenu.scanning.ifconfig import scan_wifi_ifconfig, strip_ssid_quotes
from wifimenu.wifi_common import ActiveConnection, CommandRunner, SubprocessRunner

_LOGGER = logging.getLogger(__name__)

SAVED_PROMPT = 'Choose your desired option or just press "Enter" to scan new networks: '
NEW_PROMPT = "Choose your desired option: "
PASSWORD_PROMPT = "Type the password"


class ConnectionController:
    """Drive one wifimenu session for ``settings.target``.

    Every side effect goes through an injectable seam: *runner* for
    ifconfig, *read_line* for menu input, *read_password* for the masked
    prompt and *console* for output.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        runner: CommandRunner | None = None,
        console: Console | None = None,
        read_line: Callable[[], str] | None = None,
        read_password: Callable[[], str] | None = None,
    ) -> None:
        self.settings = settings
        self._runner = runner or SubprocessRunner()
        self._console = console or Console()
        self._read_line = read_line
        self._read_password = read_password or (
            lambda: ask_password(PASSWORD_PROMPT, console=self._console)
        )

    @property
    def interface(self) -> str:
        return self.settings.target.name

    def run(self) -> ActiveConnection:
        """Run the whole workflow and return the connection that was applied."""
        ensure_saved_dir(self.settings.saved_dir)
        connection = self.try_saved()
        if connection is None:
            connection = self.try_new()
        self.apply(connection)
        return connection

    def try_saved(self) -> ActiveConnection | None:
        """Offer saved networks; return None to fall through to a scan."""
        saved = list_saved_connections(self.settings.saved_dir, self.interface)
        if not saved:
            _LOGGER.debug("no saved connections for %s", self.interface)
            return None

        selection = choose(saved, SAVED_PROMPT, console=self._console, read_line=self._read_line)
        if selection is None:
            return None

        ssid = saved[selection - 1]
        record = read_saved_connection(self.settings.saved_dir, ssid, self.interface)
        activate_saved_connection(self.settings, ssid)
        _LOGGER.debug("reconnecting to saved network %s", ssid)
        return ActiveConnection(ssid=record.ssid, password=record.password, mode=self.settings.target.mode)

    def try_new(self) -> ActiveConnection:
        """Scan, let the operator pick a network, and persist it.

        Raises:
            NoNetworksFoundError: the scan returned nothing usable.
            InvalidSsidError: the chosen SSID cannot be saved as a file.
        """
        ssids = scan_wifi_ifconfig(self.interface, runner=self._runner)
        if not ssids:
            raise NoNetworksFoundError(f"no networks found on {self.interface}")

        selection = None
        while selection is None:
            selection = choose(ssids, NEW_PROMPT, console=self._console, read_line=self._read_line)

        ssid = validate_ssid(strip_ssid_quotes(ssids[selection - 1]))
        connection = ActiveConnection(
            ssid=ssid,
            password=self._read_password(),
            mode=self.settings.target.mode,
        )
        write_connection(self.settings, connection)
        _LOGGER.debug("saved new network %s", ssid)
        return connection

    def apply(self, connection: ActiveConnection) -> bool:
        """Hand *connection* to ifconfig."""
        ok = connect_wifi_ifconfig(self.interface, connection, runner=self._runner)
        if ok:
            self._console.print(f"[green]Configured {self.interface} for {connection.ssid}[/green]")
        else:
            self._console.print(f"[yellow]ifconfig reported an error applying {connection.ssid}[/yellow]")
        return ok
