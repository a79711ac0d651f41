from __future__ import annotations

"""
Source Processor.

Turns one component source file into a SchemaEntry: find the default
export, locate the props type, extract its properties and key the result
by the file's canonical path. Every "nothing found" outcome is a silent
None.
"""

import logging
import os
import re
from typing import Optional

from propschema.core.analysis.extractor import extract_type_props
from propschema.core.analysis.locator import locate_props_type
from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.program import SourceFile
from propschema.core.checker.syntax import SyntaxNode, specifier_names
from propschema.domain.schema_models import SchemaEntry
from propschema.infra.fs import to_posix

logger = logging.getLogger(__name__)

_SOURCE_EXT_RX = re.compile(r"\.tsx?$")
_INDEX_RX = re.compile(r"/index$")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def process_source_file(
        checker: TypeChecker,
        source_file: SourceFile,
        source_dir: str
) -> Optional[SchemaEntry]:
    """
    Build the schema entry of a component file.

    Args:
        checker: Type-checking service of the program owning the file.
        source_file: Parsed and bound source file.
        source_dir: Root the path key is made relative to.

    Returns:
        Optional[SchemaEntry]: The entry, or None when the file has no
        default export, no locatable props type or no properties.
    """
    component = find_default_export(checker, source_file)
    if component is None:
        logger.debug(f"No default export in {source_file.path}")
        return None

    props_type = locate_props_type(checker, component)
    if props_type is None:
        logger.debug(f"No props type found for default export of {source_file.path}")
        return None

    props = extract_type_props(checker, props_type)
    if not props:
        logger.debug(f"Props type of {source_file.path} has no properties")
        return None

    return SchemaEntry(path=component_path_key(source_file.path, source_dir), props=props)


def find_default_export(checker: TypeChecker, source_file: SourceFile) -> Optional[SyntaxNode]:
    """
    Return the expression or declaration a file exports as `default`.

    Recognises `export default <expr | declaration>` and export clauses
    that alias a name to `default`, including re-exports from another
    module. `export =` is not a default export.
    """
    for stmt in source_file.statements():
        if stmt.is_export_assignment():
            return stmt.export_value()

        if not stmt.is_export_declaration():
            continue
        for spec in stmt.export_specifiers():
            local, exported = specifier_names(spec)
            if exported != "default":
                continue
            source = stmt.export_source()
            if source is not None:
                symbol = checker.resolve_module_export(source_file, source, local)
                return symbol.declaration if symbol is not None else None
            name_node = spec.field("name")
            return name_node if name_node is not None and name_node.is_identifier() else None
    return None


def component_path_key(file_path: str, source_dir: str) -> str:
    """
    Compute the canonical schema key of a component file.

    The path is made relative to source_dir, uses `/` separators, and has
    its `.ts`/`.tsx` extension and a trailing `index` segment removed.

    Args:
        file_path: Component file path.
        source_dir: Root of the component sources.

    Returns:
        str: Key such as `Button` or `forms/Input`.
    """
    rel = to_posix(os.path.relpath(os.path.abspath(file_path), os.path.abspath(source_dir)))
    rel = _SOURCE_EXT_RX.sub("", rel)
    return _INDEX_RX.sub("", rel)
