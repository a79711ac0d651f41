from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation helpers so that schema keys and
module resolution behave identically on Windows and Unix-like systems.
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
    return os.path.abspath(p)


def to_posix(path: str) -> str:
    """Convert OS-specific separators to forward slashes."""
    return path.replace(os.sep, "/") if os.sep != "/" else path


def is_within(path: str, root: str) -> bool:
    """
    Check whether `path` is located inside the directory `root`.

    Args:
        path: Candidate file path.
        root: Directory path.

    Returns:
        bool: True if the normalized path lies under the normalized root.
    """
    abs_path = os.path.abspath(path)
    abs_root = os.path.abspath(root)
    try:
        return os.path.commonpath([abs_path, abs_root]) == abs_root
    except ValueError:
        # Different drives on Windows
        return False
