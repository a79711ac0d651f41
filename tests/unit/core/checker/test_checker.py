from __future__ import annotations

"""
Unit tests for the TypeScript Type Checker.

Verifies:
1. Declared type resolution (interfaces, aliases, enums, generics, imports).
2. Member enumeration order, optionality and heritage.
3. Structural predicates and literal values.
4. Utility types, keyof and indexed access.
"""

from typing import List

from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.program import SourceFile
from propschema.core.checker.types import Type


def declared(checker: TypeChecker, sf: SourceFile, name: str) -> Type:
    """Resolve a top-level type declaration by name."""
    name_node = sf.type_decls[name][0].field("name")
    return checker.get_type_at_location(name_node)


def member(checker: TypeChecker, t: Type, name: str) -> Type:
    for sym in checker.get_properties(t):
        if sym.name == name:
            return checker.get_type_of_symbol(sym)
    raise KeyError(name)


def names(checker: TypeChecker, t: Type) -> List[str]:
    return [sym.name for sym in checker.get_properties(t)]


# -----------------------------------------------------------------------------
# Members
# -----------------------------------------------------------------------------

def test_interface_members_in_declaration_order(load_source) -> None:
    """TC-01: Members are listed in source order with their optionality."""
    checker, sf = load_source({"Props.ts": """
interface Props {
  title: string;
  count?: number;
  onSelect(id: string): void;
}
"""})
    props = declared(checker, sf, "Props")

    syms = checker.get_properties(props)
    assert [s.name for s in syms] == ["title", "count", "onSelect"]
    assert [checker.is_optional(s) for s in syms] == [False, True, False]
    assert all(checker.has_declaration(s) for s in syms)


def test_extends_lists_own_members_first(load_source) -> None:
    """TC-02: Inherited members follow own ones; overrides are not duplicated."""
    checker, sf = load_source({"Props.ts": """
interface Base {
  id: string;
  label: string;
}
interface Props extends Base {
  label: 'a' | 'b';
  extra: number;
}
"""})
    props = declared(checker, sf, "Props")

    assert names(checker, props) == ["label", "extra", "id"]
    assert checker.type_to_string(member(checker, props, "label")) == '"a" | "b"'


def test_merged_interface_declarations(load_source) -> None:
    """TC-03: Declarations of the same interface merge in order."""
    checker, sf = load_source({"Props.ts": """
interface Props { a: string; }
interface Props { b: number; }
"""})
    assert names(checker, declared(checker, sf, "Props")) == ["a", "b"]


def test_intersection_merges_members_first_wins(load_source) -> None:
    """TC-04: Intersections expose the union of their members."""
    checker, sf = load_source({"Props.ts": """
interface A { x: string; shared: string; }
interface B { y: number; shared: number; }
type Props = A & B;
"""})
    props = declared(checker, sf, "Props")

    assert checker.is_intersection(props)
    assert names(checker, props) == ["x", "shared", "y"]
    assert checker.type_to_string(member(checker, props, "shared")) == "string"


def test_union_has_no_members(load_source) -> None:
    """TC-05: Unions are not object-like."""
    checker, sf = load_source({"Props.ts": """
interface A { x: string; }
type Props = A | string;
"""})
    assert checker.get_properties(declared(checker, sf, "Props")) == []


# -----------------------------------------------------------------------------
# Predicates & Literals
# -----------------------------------------------------------------------------

def test_boolean_is_union_of_true_and_false(load_source) -> None:
    """TC-06: `boolean` and `true | false` are the same two-member union."""
    checker, sf = load_source({"Props.ts": """
interface Props { a: boolean; b: true | false; c: false | true; }
"""})
    props = declared(checker, sf, "Props")

    for name in ("a", "b", "c"):
        t = member(checker, props, name)
        assert checker.is_union(t)
        assert checker.type_to_string(t) == "boolean"
        assert all(checker.is_boolean_literal(v) for v in checker.union_types(t))


def test_literal_predicates_and_values(load_source) -> None:
    """TC-07: String, number and boolean literal values are raw text."""
    checker, sf = load_source({"Props.ts": """
interface Props { s: 'hello'; n: 42; f: 1.5; neg: -3; t: true; }
"""})
    props = declared(checker, sf, "Props")

    s = member(checker, props, "s")
    n = member(checker, props, "n")
    assert checker.is_string_literal(s) and checker.literal_value(s) == "hello"
    assert checker.is_number_literal(n) and checker.literal_value(n) == "42"
    assert checker.literal_value(member(checker, props, "f")) == "1.5"
    assert checker.literal_value(member(checker, props, "neg")) == "-3"
    assert checker.literal_value(member(checker, props, "t")) == "true"


def test_nullish_variants(load_source) -> None:
    """TC-08: undefined and null are nullish; the rest of the union is kept."""
    checker, sf = load_source({"Props.ts": """
interface Props { v: string | null | undefined; }
"""})
    t = member(checker, declared(checker, sf, "Props"), "v")

    variants = checker.union_types(t)
    assert [checker.is_nullish(v) for v in variants] == [False, True, True]


def test_array_and_tuple_predicates(load_source) -> None:
    """TC-09: T[], Array<T> and tuples are recognised."""
    checker, sf = load_source({"Props.ts": """
interface Props { a: string[]; b: Array<number>; c: [string, number]; }
"""})
    props = declared(checker, sf, "Props")

    assert checker.is_array_type(member(checker, props, "a"))
    assert checker.is_array_type(member(checker, props, "b"))
    assert checker.is_tuple_type(member(checker, props, "c"))
    assert not checker.is_array_type(member(checker, props, "c"))


def test_call_signatures(load_source) -> None:
    """TC-10: Function types and methods expose their signatures."""
    checker, sf = load_source({"Props.ts": """
interface Props {
  onChange: (value: string, index?: number) => void;
  render(): string;
}
"""})
    props = declared(checker, sf, "Props")

    sigs = checker.get_call_signatures(member(checker, props, "onChange"))
    assert len(sigs) == 1
    params = checker.signature_parameters(sigs[0])
    assert [(p.name, p.optional) for p in params] == [("value", False), ("index", True)]
    assert checker.type_to_string(checker.signature_return_type(sigs[0])) == "void"

    assert len(checker.get_call_signatures(member(checker, props, "render"))) == 1


# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------

def test_enum_members_auto_increment(load_source) -> None:
    """TC-11: Enum members continue numbering after explicit initialisers."""
    checker, sf = load_source({"Props.ts": """
enum Color { Red, Green = 5, Blue }
enum Mode { Light = 'light', Dark = 'dark' }
interface Props { color: Color; pick: Color.Blue; mode: Mode; }
"""})
    props = declared(checker, sf, "Props")

    color = member(checker, props, "color")
    assert checker.is_enum_type(color)
    assert [checker.literal_value(m) for m in color.members] == ["0", "5", "6"]

    blue = member(checker, props, "pick")
    assert checker.is_number_literal(blue)
    assert checker.type_to_string(blue) == "Color.Blue"

    mode = member(checker, props, "mode")
    assert [checker.literal_value(m) for m in mode.members] == ["light", "dark"]


def test_alias_resolution_is_memoised(load_source) -> None:
    """TC-12: Every reference to an alias yields the same declared type."""
    checker, sf = load_source({"Props.ts": """
type Variant = 'a' | 'b';
interface Props { first: Variant; second: Variant; }
"""})
    props = declared(checker, sf, "Props")

    first = member(checker, props, "first")
    second = member(checker, props, "second")
    assert first is second
    assert checker.resolve_alias(first) is first
    assert checker.type_to_string(first) == "Variant"


def test_generic_interface_instantiation(load_source) -> None:
    """TC-13: Type arguments are substituted into members."""
    checker, sf = load_source({"Props.ts": """
interface Box<T, U = number> { value: T; size: U; }
interface Props { box: Box<string>; }
"""})
    box = member(checker, declared(checker, sf, "Props"), "box")

    assert checker.type_to_string(box) == "Box<string>"
    assert checker.type_to_string(member(checker, box, "value")) == "string"
    assert checker.type_to_string(member(checker, box, "size")) == "number"


def test_imported_types_resolve_across_files(load_source) -> None:
    """TC-14: Named imports and re-exports are followed."""
    checker, sf = load_source({
        "components/Card.tsx": """
import { CardProps } from './types';
interface Props extends CardProps { local: string; }
""",
        "components/types/index.ts": "export * from './card';\n",
        "components/types/card.ts": "export interface CardProps { title: string; }\n",
    })
    assert names(checker, declared(checker, sf, "Props")) == ["local", "title"]


def test_unresolved_references_stay_opaque(load_source) -> None:
    """TC-15: Unknown names keep their written form."""
    checker, sf = load_source({"Props.tsx": """
import React from 'react';
interface Props { node: React.ReactNode; style: CSSProperties; map: Record<string, number>; }
"""})
    props = declared(checker, sf, "Props")

    assert checker.type_to_string(member(checker, props, "node")) == "React.ReactNode"
    assert checker.type_to_string(member(checker, props, "style")) == "CSSProperties"
    assert checker.type_to_string(member(checker, props, "map")) == "Record<string, number>"
    assert checker.get_properties(member(checker, props, "style")) == []


def test_circular_alias_terminates(load_source) -> None:
    """TC-16: Aliases referring to each other through unions resolve."""
    checker, sf = load_source({"Props.ts": """
type A = B | string;
type B = A | number;
"""})
    assert checker.type_to_string(declared(checker, sf, "A")) == "A"


def test_circular_extends_terminates(load_source) -> None:
    """TC-17: Interfaces extending each other do not loop."""
    checker, sf = load_source({"Props.ts": """
interface A extends B { a: string; }
interface B extends A { b: string; }
"""})
    assert names(checker, declared(checker, sf, "A")) == ["a", "b"]


# -----------------------------------------------------------------------------
# Utility Types
# -----------------------------------------------------------------------------

def test_partial_required_pick_omit(load_source) -> None:
    """TC-18: Mapped utilities rewrite member sets and optionality."""
    checker, sf = load_source({"Props.ts": """
interface Base { a: string; b?: number; c: boolean; }
type P = Partial<Base>;
type R = Required<Base>;
type K = Pick<Base, 'a' | 'c'>;
type O = Omit<Base, 'a'>;
"""})
    partial = declared(checker, sf, "P")
    required = declared(checker, sf, "R")

    assert [checker.is_optional(s) for s in checker.get_properties(partial)] == [True, True, True]
    assert [checker.is_optional(s) for s in checker.get_properties(required)] == [False, False, False]
    assert names(checker, declared(checker, sf, "K")) == ["a", "c"]
    assert names(checker, declared(checker, sf, "O")) == ["b", "c"]
    assert checker.type_to_string(partial) == "Partial<Base>"


def test_keyof_and_indexed_access(load_source) -> None:
    """TC-19: keyof yields a literal union; T['k'] yields the member type."""
    checker, sf = load_source({"Props.ts": """
interface Base { a: string; b: number; }
interface Props { key: keyof Base; value: Base['b']; items: string[]; item: Props['items'][number]; }
"""})
    props = declared(checker, sf, "Props")

    assert checker.type_to_string(member(checker, props, "key")) == '"a" | "b"'
    assert checker.type_to_string(member(checker, props, "value")) == "number"
    assert checker.type_to_string(member(checker, props, "item")) == "string"


def test_literal_enums_are_unions(load_source) -> None:
    """TC-20: Enums with literal members are unions of them; computed members keep the enum opaque."""
    checker, sf = load_source({"Props.ts": """
enum Color { Red, Green }
enum Flags { None = 0, Read = 1 << 0 }
interface Props { color: Color; flags: Flags; maybe: Color | undefined; }
"""})
    props = declared(checker, sf, "Props")

    color = member(checker, props, "color")
    assert checker.is_union(color)
    assert [checker.type_to_string(v) for v in checker.union_types(color)] == ["Color.Red", "Color.Green"]
    assert checker.type_to_string(color) == "Color"

    flags = member(checker, props, "flags")
    assert checker.is_enum_type(flags)
    assert not checker.is_union(flags)
    assert checker.union_types(flags) == [flags]

    maybe = member(checker, props, "maybe")
    assert [checker.type_to_string(v) for v in checker.union_types(maybe)] == \
        ["Color.Red", "Color.Green", "undefined"]
