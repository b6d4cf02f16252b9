"""WiFi network scanning via ``ifconfig <if> scan``.

Extracts SSID tokens from the scan output and cleans them up into a menu
list.  It can also be invoked as a standalone tool::

    python -m wifimenu.scanning.ifconfig -i iwm0          # scan, print list
    python -m wifimenu.scanning.ifconfig -i iwm0 --json   # JSON output
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import subprocess
import sys
from typing import Iterable

from wifimenu.errors import ScanFailedError
from wifimenu.wifi_common import (
    CommandRunner,
    SubprocessRunner,
    _minimal_env,
)

_LOGGER = logging.getLogger(__name__)

_DEFAULT_RUNNER = SubprocessRunner()

# Matches "nwid <token> chan ..." lines; the token keeps its quotes
_NWID_RE = re.compile(r"nwid (.*) chan")

# Hidden networks report an empty quoted SSID
_EMPTY_SSID = '""'
# Non-printable SSIDs are reported hex-encoded
_HEX_SSID_PREFIX = "0x0"


# ---------------------------------------------------------------------------
# ifconfig output parsing
# ---------------------------------------------------------------------------

def parse_ifconfig_scan(output: str) -> list[str]:
    """Return the raw SSID tokens found in ``ifconfig scan`` output, in order."""
    ssids: list[str] = []
    for line in output.splitlines():
        match = _NWID_RE.search(line)
        if match:
            ssids.append(match.group(1))
    return ssids


def sanitize_ssid_list(entries: Iterable[str]) -> list[str]:
    """Drop unusable SSID tokens, then sort and deduplicate.

    Hidden networks (``""``) and hex-encoded SSIDs (``0x0...``) cannot be
    joined from the menu.  Several access points broadcasting the same SSID
    collapse into one entry.
    """
    usable = {
        entry for entry in entries
        if entry != _EMPTY_SSID and not entry.startswith(_HEX_SSID_PREFIX)
    }
    return sorted(usable)


def strip_ssid_quotes(ssid: str) -> str:
    """Strip one pair of surrounding double quotes, if present."""
    if len(ssid) >= 2 and ssid.startswith('"') and ssid.endswith('"'):
        return ssid[1:-1]
    return ssid


# ---------------------------------------------------------------------------
# Live scanning (requires ifconfig on the system)
# ---------------------------------------------------------------------------

def scan_wifi_ifconfig(
    interface: str,
    *,
    runner: CommandRunner | None = None,
) -> list[str]:
    """Scan for WiFi networks on *interface* and return sanitized SSIDs.

    Blocks until ``ifconfig`` exits.  An empty list means nothing usable
    was found.

    Args:
        interface: Wireless interface name, e.g. ``iwm0``.
        runner: Optional CommandRunner for subprocess calls (testing seam).

    Raises:
        ScanFailedError: ifconfig could not be run, wrote to stderr, or
            exited non-zero.  The message is the stderr text.
    """
    runner = runner or _DEFAULT_RUNNER
    cmd = ["ifconfig", interface, "scan"]
    _LOGGER.debug("scan: running %s", cmd)

    try:
        result = runner.run(cmd, capture_output=True, text=True, env=_minimal_env())
    except (FileNotFoundError, OSError, subprocess.SubprocessError) as exc:
        raise ScanFailedError(str(exc)) from exc

    stderr = (result.stderr or "").strip()
    if stderr:
        raise ScanFailedError(stderr)
    if result.returncode != 0:
        raise ScanFailedError(f"ifconfig exited with status {result.returncode}")

    raw = parse_ifconfig_scan(result.stdout or "")
    ssids = sanitize_ssid_list(raw)
    _LOGGER.debug("scan: %d raw entries, %d usable", len(raw), len(ssids))
    return ssids


# ---------------------------------------------------------------------------
# Standalone CLI
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for standalone invocation."""
    parser = argparse.ArgumentParser(
        description="Scan WiFi networks via ifconfig and print usable SSIDs.",
    )
    parser.add_argument(
        "-i", "--interface", required=True,
        help="Wireless interface to scan",
    )
    parser.add_argument(
        "--json", action="store_true", dest="json_output",
        help="Output as JSON instead of a list",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Scan WiFi networks and print results to stdout."""
    args = _parse_args(argv)
    try:
        ssids = scan_wifi_ifconfig(args.interface)
    except ScanFailedError as exc:
        print(f"ERROR: scan failed: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json_output:
        print(json.dumps([strip_ssid_quotes(s) for s in ssids], indent=2))
        return

    if not ssids:
        print("No networks found.")
        return
    for i, ssid in enumerate(ssids, 1):
        print(f"{i:>3}. {ssid}")
    print(f"\n{len(ssids)} network(s) found.")


if __name__ == "__main__":
    main()
