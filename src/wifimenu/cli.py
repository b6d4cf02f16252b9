"""Command-line entry point for wifimenu.

Usage:
    doas wifimenu iwm0                 # pick a saved or scanned network
    doas wifimenu iwm0 11n             # also force 802.11n
    doas wifimenu iwm0 --list-saved    # print saved networks and exit
    doas wifimenu iwm0 --debug         # debug logging on stderr
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from wifimenu.config import DEFAULT_CONFIG_DIR, DEFAULT_SAVED_DIR, Settings
from wifimenu.controller import ConnectionController
from wifimenu.errors import WifiMenuError, WrongArgumentsCountError
from wifimenu.saved import list_saved_connections
from wifimenu.wifi_common import InterfaceTarget, WirelessMode

_LOGGER = logging.getLogger(__name__)

USAGE = "Usage: doas wifimenu [interface] [mode]"
PRIVILEGE_HINT = "Hint: did you execute as root?"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="wifimenu",
        description="Choose, save and apply a WiFi network for an interface.",
    )
    parser.add_argument(
        "positional",
        nargs="*",
        metavar="interface [mode]",
        help="wireless interface, e.g. iwm0, optionally followed by 11a, 11b, 11g, 11n or 11ac",
    )
    parser.add_argument(
        "--saved-dir",
        default=DEFAULT_SAVED_DIR,
        help=f"directory holding saved connections (default: {DEFAULT_SAVED_DIR})",
    )
    parser.add_argument(
        "--config-dir",
        default=DEFAULT_CONFIG_DIR,
        help=f"directory holding hostname.<interface> (default: {DEFAULT_CONFIG_DIR})",
    )
    parser.add_argument(
        "--list-saved",
        action="store_true",
        help="list saved networks for the interface and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging on stderr",
    )
    return parser.parse_intermixed_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Turn parsed arguments into an immutable :class:`Settings`.

    Raises:
        WrongArgumentsCountError: no interface, or more than interface and mode.
        InvalidWirelessModeError: the mode token is not supported.
    """
    if not 1 <= len(args.positional) <= 2:
        raise WrongArgumentsCountError(USAGE)
    interface = args.positional[0]
    mode = WirelessMode.from_token(args.positional[1]) if len(args.positional) == 2 else WirelessMode.AUTO
    return Settings(
        target=InterfaceTarget(name=interface, mode=mode),
        saved_dir=args.saved_dir,
        config_dir=args.config_dir,
    )


def _report(exc: WifiMenuError) -> None:
    print(f"ERROR: {exc.kind}: {exc}", file=sys.stderr)
    if exc.privilege_hint:
        print(PRIVILEGE_HINT, file=sys.stderr)


def main(argv: list[str] | None = None, *, controller_factory=ConnectionController) -> None:
    """Run one wifimenu session and exit non-zero on failure."""
    args = _parse_args(argv)
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(levelname)s: %(message)s",
            stream=sys.stderr,
        )
    console = Console()

    try:
        settings = build_settings(args)
        _LOGGER.debug(
            "CLI: interface=%s mode=%s saved_dir=%s config_dir=%s",
            settings.target.name,
            settings.target.mode.name,
            settings.saved_dir,
            settings.config_dir,
        )

        if args.list_saved:
            saved = list_saved_connections(settings.saved_dir, settings.target.name)
            if not saved:
                console.print(f"[yellow]No saved networks for {settings.target.name}.[/yellow]")
            for ssid in saved:
                console.print(f"  {ssid}", markup=False)
            return

        controller_factory(settings, console=console).run()
    except WifiMenuError as exc:
        _report(exc)
        sys.exit(exc.exit_code)
    except (KeyboardInterrupt, EOFError):
        console.print()
        sys.exit(130)


if __name__ == "__main__":
    main()
