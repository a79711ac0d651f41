from __future__ import annotations

"""
Component Discovery Service.

Walks the component source tree in a deterministic order and yields the
files the extraction engine processes.
"""

import logging
import os
from typing import Iterable, List

from propschema.core.pipeline.components.filters import is_component_file, is_excluded_dir
from propschema.domain.constants import DEFAULT_UI_EXTENSION
from propschema.domain.errors import SourceDirectoryError

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def yield_component_files(
        source_dir: str,
        extension: str = DEFAULT_UI_EXTENSION,
) -> Iterable[str]:
    """
    Traverse the source tree and yield component files.

    Directories are pruned in place before descending; both directories and
    files are visited in sorted order so the output is stable across runs.

    Args:
        source_dir: Root of the component sources.
        extension: The UI source extension.

    Yields:
        str: Absolute path of each component file.

    Raises:
        SourceDirectoryError: If the root (or a directory below it) cannot
            be listed.
    """
    root_abs = os.path.abspath(source_dir)
    if not os.path.isdir(root_abs):
        raise SourceDirectoryError(root_abs, "not a directory")

    def _raise(err: OSError) -> None:
        raise SourceDirectoryError(getattr(err, "filename", None) or root_abs, str(err))

    for root, dirs, files in os.walk(root_abs, onerror=_raise):
        dirs[:] = [d for d in dirs if not is_excluded_dir(d)]
        dirs.sort()
        files.sort()

        for file_name in files:
            if is_component_file(file_name, extension):
                yield os.path.join(root, file_name)


def list_component_files(source_dir: str, extension: str = DEFAULT_UI_EXTENSION) -> List[str]:
    """Collect yield_component_files into a list."""
    files = list(yield_component_files(source_dir, extension))
    logger.debug(f"Discovered {len(files)} component files under {source_dir}")
    return files
