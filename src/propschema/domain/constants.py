from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to schema kind tags, file selection conventions
and the display-name tables used to stop structural expansion.
"""

from enum import Enum
from typing import FrozenSet, Tuple

DEFAULT_TSCONFIG_PATH = "tsconfig.json"
DEFAULT_CONSTANT_NAME = "COMPONENT_PROPS"
DEFAULT_UI_EXTENSION = ".tsx"

# -----------------------------------------------------------------------------
# FILE SELECTION CONVENTIONS
# -----------------------------------------------------------------------------

# Suffixes (appended to the UI extension stem) that never describe a component
EXCLUDED_SUFFIXES: Tuple[str, ...] = (".stories", ".test", ".spec")

# Directories that are never traversed
EXCLUDED_DIRS: FrozenSet[str] = frozenset({"node_modules"})

# Source extensions that the module resolver tries, in order
RESOLVABLE_EXTENSIONS: Tuple[str, ...] = (".tsx", ".ts", ".d.ts")


# -----------------------------------------------------------------------------
# SCHEMA KIND TAGS
# -----------------------------------------------------------------------------

class TypeKind(str, Enum):
    """Closed set of structural categories a resolved type falls into."""

    ARRAY = "array"
    TUPLE = "tuple"
    UNION = "union"
    INTERSECTION = "intersection"
    FUNCTION = "function"
    ENUM = "enum"
    ENUM_LITERAL = "enum-literal"
    OBJECT = "object"
    PRIMITIVE = "primitive"


# Labels emitted in PropDefinition.type that are not display strings
BOOLEAN_LABEL = "boolean"
UNKNOWN_LABEL = "unknown"


# -----------------------------------------------------------------------------
# LEAF DISPLAY TABLES
# -----------------------------------------------------------------------------

PRIMITIVE_DISPLAY_NAMES: FrozenSet[str] = frozenset({
    "string",
    "number",
    "boolean",
    "void",
    "undefined",
    "null",
})

BUILTIN_TYPE_PREFIXES: Tuple[str, ...] = (
    "Date",
    "RegExp",
    "Promise",
    "Array",
    "Map",
    "Set",
)

REACT_DISPLAY_NAMES: Tuple[str, ...] = ("ReactNode", "ReactElement", "Element")

# Wrapper calls understood by the component locator
MEMO_CALLEE = "memo"
FORWARD_REF_CALLEE = "forwardRef"
