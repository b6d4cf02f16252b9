"""Exception hierarchy for wifimenu.

Library code raises these; only the CLI catches them and turns them into
a one-line diagnostic and an exit code.
"""

from __future__ import annotations


class WifiMenuError(Exception):
    """Base class for every failure the CLI reports."""

    kind = "Error"
    exit_code = 1
    privilege_hint = False


class WrongArgumentsCountError(WifiMenuError):
    kind = "WrongArgumentsCount"
    exit_code = 2


class InvalidWirelessModeError(WifiMenuError):
    kind = "InvalidWirelessMode"
    exit_code = 2


class StoreIOError(WifiMenuError):
    """A saved-directory or config file could not be created, read or written."""

    kind = "IOError"
    privilege_hint = True


class MalformedRecordError(WifiMenuError):
    """A saved file exists but its first line is not a ``#<password>`` comment."""

    kind = "MalformedRecord"


class ScanFailedError(WifiMenuError):
    kind = "ScanFailed"


class NoNetworksFoundError(WifiMenuError):
    kind = "NoNetworksFound"


class ApplyFailedError(WifiMenuError):
    kind = "ApplyFailed"


class InvalidSsidError(WifiMenuError):
    """The SSID cannot be used as a saved-connection file name."""

    kind = "InvalidSsid"
