from __future__ import annotations

"""
Unit tests for the Property Extractor.

Verifies the PropDefinition produced for each kind of member type, nested
object breakdowns and termination on self-referential declarations.
"""

from typing import Any, Dict, List

from propschema.core.analysis.extractor import extract_type_props
from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.program import Program
from propschema.core.checker.types import ObjectType, PropertySymbol, UNDEFINED

from conftest import BUTTON_EXPECTED, BUTTON_TSX


def extract(load_source, source: str, name: str = "Props", file_name: str = "Props.tsx") -> List[Dict[str, Any]]:
    checker, sf = load_source({file_name: source})
    t = checker.get_type_at_location(sf.type_decls[name][0].field("name"))
    return [p.to_dict() for p in extract_type_props(checker, t)]


def test_button_props(load_source) -> None:
    """TC-01: The canonical Button declaration yields its five props in order."""
    assert extract(load_source, BUTTON_TSX, "ButtonProps", "Button.tsx") == BUTTON_EXPECTED


def test_leaf_types(load_source) -> None:
    """TC-02: Primitives, builtins, arrays and functions are leaves."""
    props = extract(load_source, """
interface Item { id: string; }
interface Props {
  label: string;
  count?: number;
  createdAt: Date;
  lookup: Map<string, number>;
  items: Item[];
  tags: Array<string>;
  pair: [string, number];
  onChange: (value: string) => void;
  anything: any;
}
""")
    assert [(p["name"], p["type"], p["required"]) for p in props] == [
        ("label", "string", True),
        ("count", "number", False),
        ("createdAt", "Date", True),
        ("lookup", "Map<string, number>", True),
        ("items", "Item[]", True),
        ("tags", "string[]", True),
        ("pair", "[string, number]", True),
        ("onChange", "(value: string) => void", True),
        ("anything", "any", True),
    ]
    assert all("options" not in p and "children" not in p for p in props)


def test_enum_member_is_single_option(load_source) -> None:
    """TC-03: A single enum member is an enum-literal with its value."""
    props = extract(load_source, """
enum Size { Small = 'sm', Large = 'lg' }
interface Props { size: Size.Large; }
""")
    assert props == [{"name": "size", "type": "enum-literal", "required": True, "options": ["lg"]}]


def test_nested_object(load_source) -> None:
    """TC-04: Object-like members carry their own breakdown."""
    props = extract(load_source, """
interface Theme { primary: string; spacing?: number; }
interface Props {
  theme: Theme;
  style?: { color: string } | undefined;
}
""")
    assert props == [
        {
            "name": "theme",
            "type": "object",
            "required": True,
            "children": [
                {"name": "primary", "type": "string", "required": True},
                {"name": "spacing", "type": "number", "required": False},
            ],
        },
        {
            "name": "style",
            "type": "object",
            "required": False,
            "children": [{"name": "color", "type": "string", "required": True}],
        },
    ]


def test_optional_undefined_equals_optional(load_source) -> None:
    """TC-05: `v?: T | undefined` and `v?: T` produce the same node."""
    props = extract(load_source, """
interface Props { a?: string | undefined; b?: string; }
""")
    assert {k: v for k, v in props[0].items() if k != "name"} == \
        {k: v for k, v in props[1].items() if k != "name"}


def test_boolean_collapse_in_either_order(load_source) -> None:
    """TC-06: true | false and false | true both become boolean."""
    props = extract(load_source, """
interface Props { a: true | false; b?: false | true; c: boolean | undefined; }
""")
    assert [(p["type"], p["required"]) for p in props] == [
        ("boolean", True),
        ("boolean", False),
        ("boolean", True),
    ]


def test_self_referential_type_terminates(load_source) -> None:
    """TC-07: A type reached again in the same call yields no children."""
    props = extract(load_source, """
interface TreeNode { label: string; parent?: TreeNode; }
interface Props { node: TreeNode; }
""")
    assert props == [{
        "name": "node",
        "type": "object",
        "required": True,
        "children": [
            {"name": "label", "type": "string", "required": True},
            {"name": "parent", "type": "object", "required": False, "children": []},
        ],
    }]


def test_repeated_type_expands_once_per_call(load_source) -> None:
    """TC-08: The visited set spans the whole call, not just the current path."""
    props = extract(load_source, """
interface Point { x: number; y: number; }
interface Props { from: Point; to: Point; }
""")
    assert len(props[0]["children"]) == 2
    assert props[1]["children"] == []


def test_separate_calls_do_not_share_state(load_source) -> None:
    """TC-09: Every top-level call starts with an empty visited set."""
    checker, sf = load_source({"Props.ts": "interface Props { a: string; }\n"})
    t = checker.get_type_at_location(sf.type_decls["Props"][0].field("name"))

    first = extract_type_props(checker, t)
    second = extract_type_props(checker, t)
    assert first == second
    assert len(first) == 1


def test_members_without_declaration_are_skipped() -> None:
    """TC-10: Synthesized members never appear in the schema."""
    checker = TypeChecker(Program())
    t = ObjectType(members=[PropertySymbol("ghost", None, resolved_type=UNDEFINED)])
    assert extract_type_props(checker, t) == []


def test_non_object_type_has_no_props(load_source) -> None:
    """TC-11: A props type without members yields an empty list."""
    assert extract(load_source, "type Props = string;\n") == []


def test_nullish_variants_removed_before_leaf_checks(load_source) -> None:
    """TC-12: Builtin and framework leaves read the same with or without `| undefined` / `| null`."""
    props = extract(load_source, """
import React from 'react';
interface Props {
  a?: Date;
  b?: Date | undefined;
  c?: React.ReactElement;
  d?: React.ReactElement | undefined;
  e?: Promise<void>;
  f?: Promise<void> | null;
  g: Map<string, number> | null | undefined;
}
""")
    types = {p["name"]: p["type"] for p in props}
    assert types == {
        "a": "Date",
        "b": "Date",
        "c": "ReactElement",
        "d": "ReactElement",
        "e": "Promise<void>",
        "f": "Promise<void>",
        "g": "Map<string, number>",
    }
    assert [p["required"] for p in props] == [False, False, False, False, False, False, True]


def test_literal_enum_is_enum_literal(load_source) -> None:
    """TC-13: An enum with literal members lists its member values as options."""
    props = extract(load_source, """
enum Color { Red, Green }
enum Size { Small = 's', Large = 'l' }
interface Props {
  color: Color;
  member: Color.Red | Color.Green;
  size?: Size;
  maybe?: Color | undefined;
}
""")
    assert props == [
        {"name": "color", "type": "enum-literal", "required": True, "options": ["0", "1"]},
        {"name": "member", "type": "enum-literal", "required": True, "options": ["0", "1"]},
        {"name": "size", "type": "enum-literal", "required": False, "options": ["l", "s"]},
        {"name": "maybe", "type": "enum-literal", "required": False, "options": ["0", "1"]},
    ]


def test_computed_enum_is_leaf(load_source) -> None:
    """TC-14: An enum with a computed member is a leaf named after the enum."""
    props = extract(load_source, """
enum Flags { None = 0, Read = 1 << 0 }
interface Props { flags: Flags; }
""")
    assert props == [{"name": "flags", "type": "Flags", "required": True}]
