from __future__ import annotations

"""
Source Change Tracking Service.

Detects modified component files between two polls of the source tree.
Each file is fingerprinted with a composite hash of its path, modification
time and size, so an edit that preserves the size is still noticed as long
as the timestamp moves.
"""

import hashlib
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List

from propschema.core.services.scanner import yield_component_files
from propschema.domain.constants import DEFAULT_UI_EXTENSION

logger = logging.getLogger(__name__)


@dataclass
class ChangeSet:
    """
    Result of one poll.

    Attributes:
        modified: Files added or changed since the previous poll.
        removed: Files that disappeared since the previous poll.
    """
    modified: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.modified or self.removed)


class ChangeTracker:
    """
    Polls a component tree and reports what changed since the last poll.

    Args:
        source_dir: Root of the component sources.
        extension: The UI source extension.
    """

    def __init__(self, source_dir: str, extension: str = DEFAULT_UI_EXTENSION) -> None:
        self._source_dir = os.path.abspath(source_dir)
        self._extension = extension
        self._fingerprints: Dict[str, str] = {}

    def prime(self) -> None:
        """Record the current state without reporting it as a change."""
        self._fingerprints = self._snapshot()
        logger.debug(f"ChangeTracker: tracking {len(self._fingerprints)} files")

    def poll(self) -> ChangeSet:
        """
        Compare the tree against the previous snapshot.

        Returns:
            ChangeSet: Modified and removed files, each sorted.
        """
        current = self._snapshot()
        modified = sorted(
            path for path, digest in current.items()
            if self._fingerprints.get(path) != digest
        )
        removed = sorted(set(self._fingerprints) - set(current))
        self._fingerprints = current
        return ChangeSet(modified=modified, removed=removed)

    def _snapshot(self) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for path in yield_component_files(self._source_dir, self._extension):
            try:
                st = os.stat(path)
            except OSError as e:
                # Deleted between listing and stat
                logger.debug(f"ChangeTracker: cannot stat {path}: {e}")
                continue
            out[path] = self.compute_composite_hash(path, st.st_mtime, st.st_size)
        return out

    @staticmethod
    def compute_composite_hash(file_path: str, mtime: float, file_size: int) -> str:
        """
        Generate a deterministic SHA-256 fingerprint of a file's state.

        Args:
            file_path: Absolute path of the file.
            mtime: Modification timestamp.
            file_size: Size in bytes.

        Returns:
            str: Hexadecimal SHA-256 hash string.
        """
        raw_key = f"{file_path}|{mtime}|{file_size}"
        return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()
