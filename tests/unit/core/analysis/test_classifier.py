from __future__ import annotations

"""
Unit tests for the Type Classifier.

Verifies kind assignment precedence and the display predicates that stop
structural expansion (primitive, builtin and framework types).
"""

import pytest

from propschema.core.analysis.classifier import (
    classify,
    cleanup_type_string,
    is_builtin_type,
    is_primitive_type,
    is_react_type,
)
from propschema.domain.constants import TypeKind

SOURCE = """
import React from 'react';

enum Color { Red, Green }
enum Flags { None = 0, Read = 1 << 0 }
type Variant = 'a' | 'b';
interface A { a: string; }
interface B { b: string; }

interface Props {
  arr: string[];
  tup: [string, number];
  lit_union: 'x' | 'y';
  alias_union: Variant;
  flag: boolean;
  both: A & B;
  fn: () => void;
  color: Color;
  flags: Flags;
  one: 'x';
  num: 3;
  obj: { a: string };
  iface: A;
  text: string;
  empty: {};
  date: Date;
  map: Map<string, number>;
  set: Set<string>;
  settings: Settings;
  node: React.ReactNode;
  element: JSX.Element;
  reactElement: React.ReactElement<any>;
  nodeish: ReactNodeish;
}
"""


@pytest.fixture
def members(load_source):
    checker, sf = load_source({"Props.tsx": SOURCE})
    props = checker.get_type_at_location(sf.type_decls["Props"][0].field("name"))
    types = {sym.name: checker.get_type_of_symbol(sym) for sym in checker.get_properties(props)}
    return checker, types


@pytest.mark.parametrize("name, kind", [
    ("arr", TypeKind.ARRAY),
    ("tup", TypeKind.TUPLE),
    ("lit_union", TypeKind.UNION),
    ("alias_union", TypeKind.UNION),
    ("flag", TypeKind.UNION),
    ("both", TypeKind.INTERSECTION),
    ("fn", TypeKind.FUNCTION),
    ("color", TypeKind.UNION),
    ("flags", TypeKind.ENUM),
    ("one", TypeKind.ENUM_LITERAL),
    ("num", TypeKind.ENUM_LITERAL),
    ("obj", TypeKind.OBJECT),
    ("iface", TypeKind.OBJECT),
    ("text", TypeKind.PRIMITIVE),
    ("empty", TypeKind.PRIMITIVE),
])
def test_classify(members, name: str, kind: TypeKind) -> None:
    """TC-01: Each structural category is detected."""
    checker, types = members
    assert classify(checker, types[name]) == kind


def test_primitive_display_names(members) -> None:
    """TC-02: Primitive detection works on the display string."""
    checker, types = members
    assert is_primitive_type(checker, types["text"])
    assert is_primitive_type(checker, types["flag"])
    assert not is_primitive_type(checker, types["lit_union"])


@pytest.mark.parametrize("name, expected", [
    ("date", True),
    ("map", True),
    ("set", True),
    ("arr", False),
    ("settings", False),
    ("text", False),
])
def test_builtin_types(members, name: str, expected: bool) -> None:
    """TC-03: Builtin names match whole words only."""
    checker, types = members
    assert is_builtin_type(checker, types[name]) is expected


@pytest.mark.parametrize("name, expected", [
    ("node", True),
    ("element", True),
    ("reactElement", True),
    ("nodeish", False),
    ("iface", False),
])
def test_react_types(members, name: str, expected: bool) -> None:
    """TC-04: Framework node and element types are recognised after cleanup."""
    checker, types = members
    assert is_react_type(checker, types[name]) is expected


def test_cleanup_type_string(members) -> None:
    """TC-05: Framework namespace prefixes are removed."""
    checker, types = members
    assert cleanup_type_string(checker, types["node"]) == "ReactNode"
    assert cleanup_type_string(checker, types["element"]) == "Element"
    assert cleanup_type_string(checker, types["reactElement"]) == "ReactElement<any>"
    assert cleanup_type_string(checker, types["text"]) == "string"
