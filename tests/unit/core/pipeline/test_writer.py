from __future__ import annotations

"""
Unit tests for the Schema Output Writer.

Verifies rendering in both output formats and file persistence.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from propschema.core.pipeline.components.writer import render_schema, write_schema
from propschema.core.pipeline.engine import ExtractionEngine


@pytest.fixture
def engine(config_dict: Dict[str, Any]) -> ExtractionEngine:
    eng = ExtractionEngine(config_dict)
    eng.run_full_pass()
    return eng


def test_render_json(engine: ExtractionEngine) -> None:
    """TC-01: JSON output is the pretty-printed schema map."""
    content = render_schema(engine, "json")

    assert content.endswith("}\n")
    assert json.loads(content) == engine.to_dict()
    assert list(json.loads(content)) == ["Button"]


def test_render_module(engine: ExtractionEngine) -> None:
    """TC-02: Module output exports the configured constant."""
    engine.config["constant_name"] = "PROPS"
    content = render_schema(engine, "module")

    assert content.startswith("export const PROPS = {")
    assert content.endswith(";\n")
    body = content[len("export const PROPS = "):-2]
    assert json.loads(body) == engine.to_dict()


def test_render_unknown_format(engine: ExtractionEngine) -> None:
    """TC-03: Unknown formats are rejected."""
    with pytest.raises(ValueError):
        render_schema(engine, "yaml")


def test_write_creates_parent_dirs(engine: ExtractionEngine, tmp_path: Path) -> None:
    """TC-04: Missing parent directories are created."""
    target = tmp_path / "out" / "nested" / "props.json"

    written = write_schema(str(target), engine, "json")

    assert written == str(target)
    assert json.loads(target.read_text(encoding="utf-8"))["Button"]["path"] == "Button"
