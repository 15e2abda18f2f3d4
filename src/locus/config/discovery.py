"""Config directory resolution and settings file discovery.

Follows the XDG Base Directory layout:

1. ``$XDG_CONFIG_HOME/locus/settings.yml`` (``~/.config`` when unset,
   ``%USERPROFILE%\\AppData\\Roaming`` on Windows)
2. ``.../locus/settings.yaml``
3. each ``$XDG_CONFIG_DIRS`` entry (default ``/etc/xdg``), same two names
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from locus.domain.errors import ErrorKind, LocusError

APP_NAME = "locus"
CONFIG_FILENAMES = ("settings.yml", "settings.yaml")
DEFAULT_XDG_CONFIG_DIRS = "/etc/xdg"


def is_windows() -> bool:
    return sys.platform.startswith("win")


def get_home_dir() -> str | None:
    """Home directory from ``HOME`` (``USERPROFILE`` on Windows), or None."""
    var = "USERPROFILE" if is_windows() else "HOME"
    return os.environ.get(var) or None


def require_home_dir() -> str:
    home = get_home_dir()
    if not home:
        var = "USERPROFILE" if is_windows() else "HOME"
        raise LocusError(ErrorKind.CONFIG_ERROR, f"{var} environment variable is not set")
    return home


def get_config_home() -> Path:
    """Directory that holds per-application config directories."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    home = require_home_dir()
    if is_windows():
        return Path(home) / "AppData" / "Roaming"
    return Path(home) / ".config"


def get_config_dir() -> Path:
    return get_config_home() / APP_NAME


def get_config_file_path() -> Path:
    """Canonical settings file location (may not exist)."""
    return get_config_dir() / CONFIG_FILENAMES[0]


def find_config() -> Path | None:
    """Return the first existing settings file, or None."""
    candidates = [get_config_dir() / name for name in CONFIG_FILENAMES]
    xdg_dirs = os.environ.get("XDG_CONFIG_DIRS") or DEFAULT_XDG_CONFIG_DIRS
    for entry in xdg_dirs.split(os.pathsep):
        if entry:
            candidates.extend(Path(entry) / APP_NAME / name for name in CONFIG_FILENAMES)

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None
