from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization and small filesystem helpers shared by discovery and the
build driver. Keeps direct 'os' calls out of the service modules.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.normpath(os.path.abspath(p))


def is_within(path: str, ancestor: str) -> bool:
    """
    Check whether path equals ancestor or lies below it.

    Compares whole path components, so '/a/foobar' is not within '/a/foo'.
    """
    if path == ancestor:
        return True
    prefix = ancestor if ancestor.endswith(os.sep) else ancestor + os.sep
    return path.startswith(prefix)

# -----------------------------------------------------------------------------
# FILESYSTEM QUERIES
# -----------------------------------------------------------------------------

def file_exists(path: str) -> bool:
    """Return True only if path exists and is a regular file."""
    return os.path.isfile(path)


def get_mtime_seconds(path: str) -> Optional[int]:
    """
    Read a file's modification time truncated to whole seconds since epoch.

    Returns:
        Optional[int]: The timestamp, or None if the file cannot be stat'ed.
    """
    try:
        return int(os.stat(path).st_mtime)
    except OSError:
        return None


def remove_quietly(path: str) -> None:
    """Delete a file if present, ignoring a missing file."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def get_umask() -> int:
    """Return the process umask without changing it."""
    mask = os.umask(0)
    os.umask(mask)
    return mask
