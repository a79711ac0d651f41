from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A factory fixture that writes small TypeScript projects to disk.
3. Shared fixtures for configuration dictionaries and program setup.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from propschema.core.checker.checker import TypeChecker  # noqa: E402
from propschema.core.checker.program import Program, SourceFile  # noqa: E402
from propschema.core.checker.tsconfig import load_compiler_options  # noqa: E402

# -----------------------------------------------------------------------------
# Sample Sources
# -----------------------------------------------------------------------------
BUTTON_TSX = """\
import React from 'react';

type ButtonVariant = 'primary' | 'secondary' | 'danger';

interface ButtonProps {
  variant: ButtonVariant;
  size?: 'small' | 'medium' | 'large';
  disabled?: boolean;
  onClick?: () => void;
  children: React.ReactNode;
}

export default function Button({ variant, size = 'medium', disabled = false, onClick, children }: ButtonProps) {
  return (
    <button className={`btn btn-${variant} btn-${size}`} disabled={disabled} onClick={onClick}>
      {children}
    </button>
  );
}
"""

BUTTON_EXPECTED = [
    {
        "name": "variant",
        "type": "enum-literal",
        "required": True,
        "options": ["danger", "primary", "secondary"],
    },
    {
        "name": "size",
        "type": "enum-literal",
        "required": False,
        "options": ["large", "medium", "small"],
    },
    {"name": "disabled", "type": "boolean", "required": False},
    {"name": "onClick", "type": "() => void", "required": False},
    {"name": "children", "type": "ReactNode", "required": True},
]

DEFAULT_TSCONFIG: Dict[str, Any] = {
    "compilerOptions": {
        "target": "es2017",
        "jsx": "react-jsx",
        "strict": True,
    }
}

ProjectWriter = Callable[..., Path]


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def write_project(tmp_path: Path) -> ProjectWriter:
    """
    Return a factory that writes a TypeScript project under tmp_path.

    The factory takes a mapping of relative paths to file contents and an
    optional tsconfig dict (written as tsconfig.json at the project root).

    Returns:
        ProjectWriter: Callable returning the project root.
    """
    def _write(
            files: Dict[str, str],
            tsconfig: Optional[Dict[str, Any]] = None,
            root_name: str = "project",
    ) -> Path:
        root = tmp_path / root_name
        root.mkdir(exist_ok=True)
        (root / "tsconfig.json").write_text(
            json.dumps(tsconfig if tsconfig is not None else DEFAULT_TSCONFIG),
            encoding="utf-8",
        )
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def button_project(write_project: ProjectWriter) -> Path:
    """Project with a single Button component under src/."""
    return write_project({"src/Button.tsx": BUTTON_TSX})


@pytest.fixture
def config_dict(button_project: Path) -> Dict[str, Any]:
    """
    Return a valid, complete engine configuration for the Button project.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # Sources
        "source_dir": str(button_project / "src"),
        "tsconfig_path": str(button_project / "tsconfig.json"),
        "extension": ".tsx",

        # Diagnostics
        "debug": False,

        # Output
        "generate_json": False,
        "constant_name": "COMPONENT_PROPS",
        "output_path": "",
        "output_format": "json",
    }


@pytest.fixture
def load_source(write_project: ProjectWriter) -> Callable[..., "tuple[TypeChecker, SourceFile]"]:
    """
    Return a factory that writes files, builds a program and loads one file.

    The first entry of the mapping is the file returned.
    """
    def _load(files: Dict[str, str], tsconfig: Optional[Dict[str, Any]] = None):
        root = write_project(files, tsconfig)
        options = load_compiler_options(str(root / "tsconfig.json"))
        program = Program(options)
        first = next(iter(files))
        source_file = program.get_source_file(str(root / first))
        assert source_file is not None
        return TypeChecker(program), source_file

    return _load
