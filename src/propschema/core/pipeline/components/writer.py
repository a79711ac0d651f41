from __future__ import annotations

"""
Schema Output Writer.

Persists the engine's schema map either as a pretty JSON document or as
an ES module exporting the build-time constant.
"""

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from propschema.core.pipeline.engine import ExtractionEngine

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# RENDERING
# -----------------------------------------------------------------------------

def render_schema(engine: "ExtractionEngine", fmt: str = "json") -> str:
    """
    Render the schema map in the requested output format.

    Args:
        engine: Engine owning the schema map.
        fmt: `json` for a JSON document, `module` for an ES module.

    Returns:
        str: File content, newline terminated.

    Raises:
        ValueError: If the format is unknown.
    """
    if fmt == "json":
        return engine.to_json(indent=2) + "\n"
    if fmt == "module":
        name = engine.config["constant_name"]
        return f"export const {name} = {engine.to_json(indent=2)};\n"
    raise ValueError(f"Unknown output format '{fmt}'.")


# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def write_schema(output_path: str, engine: "ExtractionEngine", fmt: str = "json") -> str:
    """
    Write the schema map to disk, creating parent directories.

    Args:
        output_path: Target file path.
        engine: Engine owning the schema map.
        fmt: `json` or `module`.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OSError: If the file cannot be written.
    """
    content = render_schema(engine, fmt)
    abs_path = os.path.abspath(output_path)
    parent = os.path.dirname(abs_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(abs_path, "w", encoding="utf-8") as f:
        f.write(content)

    logger.debug(f"Wrote {len(engine.schema_map)} schema entries to {abs_path}")
    return abs_path
