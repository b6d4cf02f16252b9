"""Saved connection store and hostname.if rendering.

Each remembered network is one file, ``<saved_dir>/<ssid>.<interface>``,
holding the same body that is written to ``/etc/hostname.<interface>``.
The first line is a ``#<password>`` comment, which doubles as the only
place the password is kept::

    #secret
    join "Home" wpakey "secret"
    inet6 autoconf
    inet autoconf
"""

from __future__ import annotations

import logging
import os
import stat

from wifimenu.config import Settings
from wifimenu.errors import InvalidSsidError, MalformedRecordError, StoreIOError
from wifimenu.wifi_common import ActiveConnection, SavedConnection, WirelessMode

_LOGGER = logging.getLogger(__name__)

SAVED_DIR_MODE = stat.S_IRWXU       # 0o700, owner only
TMP_FILE_MODE = stat.S_IRUSR | stat.S_IWUSR  # 0o600
READ_ONLY_MODE = stat.S_IRUSR       # 0o400

_COMMENT = "#"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_hostname(password: str, ssid: str, mode: WirelessMode) -> str:
    """Render a hostname.if(5) body for a WPA network."""
    body = (
        f"{_COMMENT}{password}\n"
        f'join "{ssid}" wpakey "{password}"\n'
        "inet6 autoconf\n"
        "inet autoconf\n"
    )
    if mode is not WirelessMode.AUTO:
        body += f"mode {mode}\n"
    return body


def parse_password_line(content: str) -> str:
    """Recover the password from the first line of a rendered body.

    Raises:
        MalformedRecordError: the first line is not a ``#`` comment.
    """
    first_line = content.split("\n", 1)[0].strip()
    if not first_line.startswith(_COMMENT):
        raise MalformedRecordError("saved connection does not start with a '#<password>' line")
    return first_line[len(_COMMENT):].strip()


# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------

def restrict_permissions(path: str, mode: int) -> bool:
    """chmod *path* to *mode*; log a warning and return False on failure."""
    try:
        os.chmod(path, mode)
    except OSError as exc:
        _LOGGER.warning("could not restrict permissions of %s to %o: %s", path, mode, exc)
        return False
    return True


def ensure_saved_dir(directory: str) -> None:
    """Create the saved directory (with parents) and restrict it to its owner.

    Raises:
        StoreIOError: the directory does not exist and cannot be created.
    """
    if not os.path.isdir(directory):
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as exc:
            raise StoreIOError(
                f"could not access wifi saved directory {directory}: {exc}"
            ) from exc
        _LOGGER.debug("created saved directory %s", directory)
    restrict_permissions(directory, SAVED_DIR_MODE)


# ---------------------------------------------------------------------------
# Saved store I/O
# ---------------------------------------------------------------------------

def validate_ssid(ssid: str) -> str:
    """Return *ssid* if it is usable as a file name in the saved directory.

    Raises:
        InvalidSsidError: *ssid* is empty, is "." or "..", or contains a
            path separator or NUL.
    """
    if (
        not ssid
        or ssid in (os.curdir, os.pardir)
        or "\0" in ssid
        or os.sep in ssid
        or (os.altsep and os.altsep in ssid)
        or os.path.basename(ssid) != ssid
    ):
        raise InvalidSsidError(f"cannot save network {ssid!r}: not a valid file name")
    return ssid


def list_saved_connections(directory: str, interface: str) -> list[str]:
    """Return the SSIDs saved for *interface*, sorted.

    Raises:
        StoreIOError: *directory* cannot be listed.
    """
    try:
        names = os.listdir(directory)
    except OSError as exc:
        raise StoreIOError(
            f"Failed to read saved connections from {directory}: {exc}"
        ) from exc

    suffix = f".{interface}"
    ssids: list[str] = []
    for name in names:
        if not name.endswith(suffix) or name == suffix:
            continue
        if not os.path.isfile(os.path.join(directory, name)):
            continue
        ssids.append(name[:-len(suffix)])
    ssids.sort()
    _LOGGER.debug("saved: %d connection(s) for %s in %s", len(ssids), interface, directory)
    return ssids


def read_saved_connection(directory: str, ssid: str, interface: str) -> SavedConnection:
    """Load the saved connection for *ssid* on *interface*.

    Raises:
        StoreIOError: the file is missing or unreadable.
        MalformedRecordError: the first line carries no ``#`` password.
    """
    validate_ssid(ssid)
    path = os.path.join(directory, f"{ssid}.{interface}")
    content = _read_file(path)
    return SavedConnection(ssid=ssid, interface=interface, password=parse_password_line(content))


def write_connection(settings: Settings, connection: ActiveConnection) -> str:
    """Persist *connection* to the saved store and the active config.

    Both files are overwritten without confirmation.  Returns the rendered
    body.

    Raises:
        InvalidSsidError: the SSID cannot be used as a file name.
        StoreIOError: either file could not be written.
    """
    validate_ssid(connection.ssid)
    body = render_hostname(connection.password, connection.ssid, connection.mode)
    _write_read_only(settings.saved_path(connection.ssid), body)
    _write_read_only(settings.active_path, body)
    return body


def activate_saved_connection(settings: Settings, ssid: str) -> str:
    """Copy a saved body verbatim into the active config path.

    Raises:
        StoreIOError: the saved file cannot be read or the copy cannot be
            written.
    """
    validate_ssid(ssid)
    body = _read_file(settings.saved_path(ssid))
    _write_read_only(settings.active_path, body)
    return body


def _read_file(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as exc:
        raise StoreIOError(f"couldn't read saved connection data {path}: {exc}") from exc


def _write_read_only(path: str, content: str) -> None:
    """Write *content* to *path* via an owner-only temp file, then mark it read-only.

    ``os.replace`` overwrites a previous copy even when it is already 0400.
    """
    tmp_path = f"{path}.tmp"
    try:
        if os.path.lexists(tmp_path):
            os.unlink(tmp_path)
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, TMP_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except OSError as exc:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise StoreIOError(f"could not write {path}: {exc}") from exc
    _LOGGER.debug("wrote %s", path)
    restrict_permissions(path, READ_ONLY_MODE)
