from __future__ import annotations

"""
Extraction Engine.

Owns the schema map and its lifecycle:
1. Validates the configuration once at construction.
2. Runs a full pass over every component file (once, unless forced).
3. Re-processes change sets in incremental passes, overwriting entries.
4. Exposes the map as JSON and as a named build-time constant.

Passes are synchronous. A structural failure (unreadable source directory,
broken tsconfig) propagates and aborts the pass; files are not isolated
from each other.
"""

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.program import Program
from propschema.core.checker.tsconfig import load_compiler_options
from propschema.core.pipeline.components.filters import is_tracked_change
from propschema.core.pipeline.processor import process_source_file
from propschema.core.pipeline.validator import validate_config
from propschema.core.services.scanner import list_component_files
from propschema.domain.errors import ConfigurationError
from propschema.domain.schema_models import SchemaMap, schema_map_to_dict
from propschema.infra.fs import normalize_path

logger = logging.getLogger(__name__)


class ExtractionEngine:
    """
    Process-scoped owner of the component schema map.

    Args:
        config: Raw configuration; validated and completed with defaults.

    Raises:
        ConfigurationError: If no source directory is configured.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        cfg, warnings = validate_config(config if config is not None else {}, strict=False)
        for warning in warnings:
            logger.warning(f"Configuration Warning: {warning}")

        if not cfg["source_dir"]:
            raise ConfigurationError("A source directory ('source_dir') is required.")

        self.config: Dict[str, Any] = cfg
        self.source_dir: str = normalize_path(cfg["source_dir"], os.getcwd())
        self.tsconfig_path: str = normalize_path(cfg["tsconfig_path"], os.getcwd())
        self.extension: str = cfg["extension"]
        self.debug: bool = bool(cfg["debug"])

        self.schema_map: SchemaMap = {}
        self.has_run: bool = False

    # -------------------------------------------------------------------------
    # Passes
    # -------------------------------------------------------------------------

    def run_full_pass(self, *, force: bool = False) -> int:
        """
        Process every component file under the source directory.

        Only the first call does any work unless `force` is set.

        Args:
            force: Re-run even if a full pass already happened.

        Returns:
            int: Number of files that produced a schema entry.
        """
        if self.has_run and not force:
            return 0

        files = list_component_files(self.source_dir, self.extension)
        self._log(f"Found {len(files)} UI components to process")

        processed = 0
        if files:
            processed = self.process_files(files)
            self._log(f"Processed {processed} components in full pass")

        self.has_run = True
        return processed

    def run_incremental_pass(self, changed_files: Iterable[str]) -> int:
        """
        Re-process the component files among a set of changed paths.

        Entries of files that no longer exist are left in place.

        Args:
            changed_files: Paths reported as modified.

        Returns:
            int: Number of files that produced a schema entry.
        """
        tracked = sorted({
            os.path.abspath(f) for f in changed_files
            if is_tracked_change(f, self.source_dir, self.extension)
        })
        if not tracked:
            return 0

        existing: List[str] = []
        for path in tracked:
            if os.path.isfile(path):
                existing.append(path)
            else:
                self._log(f"Changed file {path} no longer exists; its schema entry is kept")

        if not existing:
            return 0

        self._log("Processing changed files:\n" + "\n".join(existing))
        processed = self.process_files(existing)
        self._log(f"Updated {processed} components in incremental pass")
        return processed

    def process_files(self, files: Iterable[str]) -> int:
        """
        Process files with a fresh program and store the resulting entries.

        Args:
            files: Component file paths.

        Returns:
            int: Number of files that produced a schema entry.

        Raises:
            TsConfigError: If the TypeScript configuration cannot be loaded.
        """
        program, checker = self._create_program()
        processed = 0

        for path in files:
            source_file = program.get_source_file(path)
            if source_file is None:
                continue
            entry = process_source_file(checker, source_file, self.source_dir)
            if entry is None:
                continue
            self.schema_map[entry.path] = entry
            self._log(f"Processed {entry.path} ({len(entry.props)} props)")
            processed += 1

        return processed

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return schema_map_to_dict(self.schema_map)

    def to_json(self, indent: Optional[int] = None) -> str:
        """
        Serialise the schema map with entries ordered by path key.

        Args:
            indent: Pretty-print indentation; compact output when None.

        Returns:
            str: JSON text, identical across runs on an unchanged file set.
        """
        separators = (",", ":") if indent is None else (",", ": ")
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent, separators=separators)

    def define_constants(self) -> Dict[str, str]:
        """
        Return the build-time constant definitions to inject.

        Returns:
            Dict[str, str]: Constant name mapped to the JSON-encoded schema map.
        """
        return {self.config["constant_name"]: self.to_json()}

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _create_program(self) -> Tuple[Program, TypeChecker]:
        options = load_compiler_options(self.tsconfig_path)
        program = Program(options)
        return program, TypeChecker(program)

    def _log(self, message: str) -> None:
        if self.debug:
            logger.info(message)
