from __future__ import annotations

"""
Type Classifier.

Maps a resolved type onto the closed TypeKind set and provides the display
predicates that decide which types are never expanded structurally.
"""

import re
from typing import Pattern

from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.types import Type
from propschema.domain.constants import (
    BUILTIN_TYPE_PREFIXES,
    PRIMITIVE_DISPLAY_NAMES,
    REACT_DISPLAY_NAMES,
    TypeKind,
)

# A builtin name must not run into a longer identifier (`Set` vs `Settings`)
_BUILTIN_RX: Pattern[str] = re.compile(
    r"^(?:" + "|".join(BUILTIN_TYPE_PREFIXES) + r")(?![\w$])"
)
_REACT_RX: Pattern[str] = re.compile(
    r"(?<![\w$])(?:" + "|".join(REACT_DISPLAY_NAMES) + r")(?![\w$])"
)


# -----------------------------------------------------------------------------
# CLASSIFICATION
# -----------------------------------------------------------------------------

def classify(checker: TypeChecker, t: Type) -> TypeKind:
    """
    Categorise a type. The first matching rule wins.

    Args:
        checker: Type-checking service.
        t: Type to classify; its alias is resolved first.

    Returns:
        TypeKind: Structural category of the type.
    """
    t = checker.resolve_alias(t)

    if checker.is_array_type(t):
        return TypeKind.ARRAY
    if checker.is_tuple_type(t):
        return TypeKind.TUPLE
    if checker.is_union(t):
        return TypeKind.UNION
    if checker.is_intersection(t):
        return TypeKind.INTERSECTION
    if checker.get_call_signatures(t):
        return TypeKind.FUNCTION
    if checker.is_enum_type(t):
        return TypeKind.ENUM
    if is_literal(checker, t):
        return TypeKind.ENUM_LITERAL
    if checker.get_properties(t):
        return TypeKind.OBJECT
    return TypeKind.PRIMITIVE


def is_literal(checker: TypeChecker, t: Type) -> bool:
    return (
        checker.is_string_literal(t)
        or checker.is_number_literal(t)
        or checker.is_boolean_literal(t)
    )


# -----------------------------------------------------------------------------
# DISPLAY PREDICATES
# -----------------------------------------------------------------------------

def is_primitive_type(checker: TypeChecker, t: Type) -> bool:
    return checker.type_to_string(t) in PRIMITIVE_DISPLAY_NAMES


def is_builtin_type(checker: TypeChecker, t: Type) -> bool:
    """True for Date, RegExp, Promise, Array, Map and Set displays (generic or not)."""
    return _BUILTIN_RX.match(checker.type_to_string(t)) is not None


def cleanup_type_string(checker: TypeChecker, t: Type) -> str:
    """
    Return the display string with framework namespaces removed.

    A leading `React.` prefix is dropped once and the first `JSX.`
    qualifier is removed.
    """
    text = checker.type_to_string(t)
    if text.startswith("React."):
        text = text[len("React."):]
    if "JSX." in text:
        text = text.replace("JSX.", "", 1)
    return text


def is_react_type(checker: TypeChecker, t: Type) -> bool:
    """True when the cleaned display names a framework node or element type."""
    return _REACT_RX.search(cleanup_type_string(checker, t)) is not None
