"""wifimenu: pick, save and apply a WiFi network for an OpenBSD interface."""

__version__ = "0.3.0"
