"""WiFi scanning backends (ifconfig)."""

from wifimenu.scanning.ifconfig import scan_wifi_ifconfig  # noqa: F401
