"""Tests for wifimenu.scanning.ifconfig — scan parsing and sanitizing."""

from __future__ import annotations

import json
import subprocess
from unittest.mock import patch

import pytest

from wifimenu.errors import ScanFailedError
from wifimenu.scanning.ifconfig import (
    main as ifconfig_main,
    parse_ifconfig_scan,
    sanitize_ssid_list,
    scan_wifi_ifconfig,
    strip_ssid_quotes,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

SAMPLE_SCAN_OUTPUT = """iwm0: flags=808843<UP,BROADCAST,RUNNING,SIMPLEX,MULTICAST,AUTOCONF4> mtu 1500
\tlladdr 00:11:22:33:44:55
\tindex 1 priority 4 llprio 3
\tgroups: wlan egress
\tmedia: IEEE802.11 autoselect (OFDM54 mode 11g)
\tstatus: active
\tieee80211: nwid HomeNet chan 6 bssid aa:bb:cc:dd:ee:00 -52dBm wpakey wpaprotos wpa2
\t\tnwid "Coffee Shop" chan 11 bssid aa:bb:cc:dd:ee:01 -70dBm 54M privacy,short_slottime,wpa2
\t\tnwid "" chan 1 bssid aa:bb:cc:dd:ee:02 -80dBm 54M privacy,wpa2
\t\tnwid 0x0001020304 chan 36 bssid aa:bb:cc:dd:ee:03 -75dBm 54M privacy,wpa2
\t\tnwid HomeNet chan 44 bssid aa:bb:cc:dd:ee:04 -60dBm HT-MCS23 privacy,wpa2
"""


class _FakeRunner:
    """A fake CommandRunner for injection-based tests."""

    def __init__(self, result=None, side_effect=None):
        self.run_calls: list[tuple[list[str], dict]] = []
        self._result = result
        self._side_effect = side_effect

    def run(self, cmd, **kwargs):
        self.run_calls.append((cmd, kwargs))
        if self._side_effect is not None:
            raise self._side_effect
        if self._result is not None:
            return self._result
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")


def _completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


# ---------------------------------------------------------------------------
# parse_ifconfig_scan
# ---------------------------------------------------------------------------

class TestParseIfconfigScan:
    def test_extracts_tokens_between_nwid_and_chan(self):
        assert parse_ifconfig_scan(SAMPLE_SCAN_OUTPUT) == [
            "HomeNet", '"Coffee Shop"', '""', "0x0001020304", "HomeNet",
        ]

    def test_empty_output_returns_empty_list(self):
        assert parse_ifconfig_scan("") == []

    def test_lines_without_nwid_are_ignored(self):
        assert parse_ifconfig_scan("iwm0: flags=0<>\n\tstatus: no network\n") == []

    def test_quoted_token_keeps_quotes(self):
        assert parse_ifconfig_scan('nwid "Home" chan 6\n') == ['"Home"']


# ---------------------------------------------------------------------------
# sanitize_ssid_list
# ---------------------------------------------------------------------------

class TestSanitizeSsidList:
    def test_reference_example(self):
        raw = ['"AP1"', '""', "0x0AB", '"AP1"', '"AP2"']
        assert sanitize_ssid_list(raw) == ['"AP1"', '"AP2"']

    def test_drops_hidden_networks(self):
        assert sanitize_ssid_list(['""']) == []

    def test_drops_hex_encoded_ssids(self):
        assert sanitize_ssid_list(["0x0001", "0x0"]) == []

    def test_keeps_ssid_containing_hex_prefix_later(self):
        assert sanitize_ssid_list(["lab0x0"]) == ["lab0x0"]

    def test_sorted_ascending(self):
        assert sanitize_ssid_list(["zeta", "Alpha", "beta"]) == ["Alpha", "beta", "zeta"]

    def test_duplicates_removed(self):
        assert sanitize_ssid_list(["a", "b", "a", "a"]) == ["a", "b"]

    def test_empty_input_returns_empty_list(self):
        assert sanitize_ssid_list([]) == []

    def test_accepts_any_iterable(self):
        assert sanitize_ssid_list(iter(["b", "a"])) == ["a", "b"]


# ---------------------------------------------------------------------------
# strip_ssid_quotes
# ---------------------------------------------------------------------------

class TestStripSsidQuotes:
    @pytest.mark.parametrize("raw, expected", [
        ('"Home"', "Home"),
        ("Home", "Home"),
        ('"Coffee Shop"', "Coffee Shop"),
        ('""Nested""', '"Nested"'),
        ('"', '"'),
        ('"open', '"open'),
    ])
    def test_strips_one_surrounding_pair(self, raw, expected):
        assert strip_ssid_quotes(raw) == expected


# ---------------------------------------------------------------------------
# scan_wifi_ifconfig
# ---------------------------------------------------------------------------

class TestScanWifiIfconfig:
    def test_returns_sanitized_list(self):
        runner = _FakeRunner(_completed(stdout=SAMPLE_SCAN_OUTPUT))
        assert scan_wifi_ifconfig("iwm0", runner=runner) == ['"Coffee Shop"', "HomeNet"]

    def test_runs_ifconfig_scan_on_interface(self):
        runner = _FakeRunner(_completed())
        scan_wifi_ifconfig("iwm0", runner=runner)
        cmd, kwargs = runner.run_calls[0]
        assert cmd == ["ifconfig", "iwm0", "scan"]
        assert kwargs["env"]["LC_ALL"] == "C"

    def test_no_timeout_passed(self):
        runner = _FakeRunner(_completed())
        scan_wifi_ifconfig("iwm0", runner=runner)
        assert "timeout" not in runner.run_calls[0][1]

    def test_stderr_raises_with_text(self):
        runner = _FakeRunner(_completed(stderr="ifconfig: SIOCG80211ALLNODES: Operation not permitted\n"))
        with pytest.raises(ScanFailedError, match="Operation not permitted"):
            scan_wifi_ifconfig("iwm0", runner=runner)

    def test_nonzero_exit_raises(self):
        runner = _FakeRunner(_completed(returncode=1))
        with pytest.raises(ScanFailedError, match="status 1"):
            scan_wifi_ifconfig("iwm0", runner=runner)

    def test_missing_binary_raises(self):
        runner = _FakeRunner(side_effect=FileNotFoundError("ifconfig"))
        with pytest.raises(ScanFailedError):
            scan_wifi_ifconfig("iwm0", runner=runner)

    def test_no_networks_returns_empty_list(self):
        runner = _FakeRunner(_completed(stdout='\t\tnwid "" chan 1 bssid aa:bb:cc:dd:ee:02\n'))
        assert scan_wifi_ifconfig("iwm0", runner=runner) == []


# ---------------------------------------------------------------------------
# Standalone main
# ---------------------------------------------------------------------------

class TestIfconfigMain:
    @patch("wifimenu.scanning.ifconfig.scan_wifi_ifconfig", return_value=[])
    def test_no_networks_prints_message(self, _mock, capsys):
        ifconfig_main(["-i", "iwm0"])
        assert "No networks found" in capsys.readouterr().out

    @patch("wifimenu.scanning.ifconfig.scan_wifi_ifconfig", return_value=['"Coffee Shop"', "HomeNet"])
    def test_list_output(self, _mock, capsys):
        ifconfig_main(["-i", "iwm0"])
        out = capsys.readouterr().out
        assert "1. \"Coffee Shop\"" in out
        assert "2 network(s) found" in out

    @patch("wifimenu.scanning.ifconfig.scan_wifi_ifconfig", return_value=['"Coffee Shop"'])
    def test_json_output_strips_quotes(self, _mock, capsys):
        ifconfig_main(["-i", "iwm0", "--json"])
        assert json.loads(capsys.readouterr().out) == ["Coffee Shop"]

    @patch("wifimenu.scanning.ifconfig.scan_wifi_ifconfig", side_effect=ScanFailedError("busy"))
    def test_scan_failure_exits_nonzero(self, _mock, capsys):
        with pytest.raises(SystemExit) as exc_info:
            ifconfig_main(["-i", "iwm0"])
        assert exc_info.value.code == 1
        assert "busy" in capsys.readouterr().err

    def test_interface_required(self):
        with pytest.raises(SystemExit):
            ifconfig_main([])
