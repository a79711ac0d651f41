from __future__ import annotations

"""
Component File Filtering.

Decides which files describe UI components: files carrying the UI
extension, minus stories, tests and specs, outside dependency and hidden
directories. The same rules apply to full scans and to change sets.
"""

import os
from typing import List

from propschema.domain.constants import (
    DEFAULT_UI_EXTENSION,
    EXCLUDED_DIRS,
    EXCLUDED_SUFFIXES,
)
from propschema.infra.fs import is_within

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def excluded_file_endings(extension: str = DEFAULT_UI_EXTENSION) -> List[str]:
    """
    Get the file name endings that never describe a component.

    Args:
        extension: The UI source extension.

    Returns:
        List[str]: Endings such as `.stories.tsx`, `.test.tsx`, `.spec.tsx`.
    """
    return [suffix + extension for suffix in EXCLUDED_SUFFIXES]


# -----------------------------------------------------------------------------
# MATCHING
# -----------------------------------------------------------------------------

def is_excluded_dir(name: str) -> bool:
    """True for dependency folders and hidden directories."""
    return name in EXCLUDED_DIRS or name.startswith(".")


def is_component_file(file_name: str, extension: str = DEFAULT_UI_EXTENSION) -> bool:
    """
    Check a file name against the component naming convention.

    Args:
        file_name: Base name or path of the file.
        extension: The UI source extension.

    Returns:
        bool: True if the file carries the extension and no excluded ending.
    """
    if not file_name.endswith(extension):
        return False
    return not any(file_name.endswith(e) for e in excluded_file_endings(extension))


def is_tracked_change(file_path: str, source_dir: str, extension: str = DEFAULT_UI_EXTENSION) -> bool:
    """
    Check whether a changed file belongs to the component set.

    Args:
        file_path: Path reported as modified.
        source_dir: Root of the component sources.
        extension: The UI source extension.

    Returns:
        bool: True if the file lies under source_dir, matches the naming
        convention and is not inside an excluded directory.
    """
    if not is_within(file_path, source_dir):
        return False
    if not is_component_file(os.path.basename(file_path), extension):
        return False
    rel = os.path.relpath(os.path.abspath(file_path), os.path.abspath(source_dir))
    parts = rel.split(os.sep)[:-1]
    return not any(is_excluded_dir(p) for p in parts)
