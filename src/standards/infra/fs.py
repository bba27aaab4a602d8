from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution for application data, path
normalization and idempotent directory creation used by the workspace
services.
"""

import os
from typing import Optional

from standards.domain.errors import WorkspaceError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Standards"
UNIX_APP_DIR_NAME = ".standards"
CONFIG_FILENAME = "config.json"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir(create: bool = False) -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/Standards
    - Linux/Mac: ~/.standards

    Args:
        create: Create the directory hierarchy if it does not exist.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    if create:
        os.makedirs(path, exist_ok=True)

    return os.path.abspath(path)


def get_default_config_path() -> str:
    """Location of the optional JSON configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILENAME)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# DIRECTORY MANAGEMENT
# -----------------------------------------------------------------------------

def ensure_directory(path: str) -> bool:
    """
    Create a directory (with parents) unless it already exists.

    Args:
        path: Target directory path.

    Returns:
        bool: True if the directory was created, False if it already existed.

    Raises:
        WorkspaceError: If the path exists as a non-directory or cannot be created.
    """
    if os.path.isdir(path):
        return False
    if os.path.exists(path):
        raise WorkspaceError(f"{path} exists but is not a directory")

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise WorkspaceError(f"Failed to create directory {path}: {e}") from e
    return True


def display_path(path: str) -> str:
    """Render a path with the user home abbreviated to '~' for console output."""
    home = os.path.expanduser("~")
    if path == home:
        return "~"
    if path.startswith(home + os.sep):
        return "~" + path[len(home):]
    return path
