from __future__ import annotations

"""
Unit tests for the Literal/Union Normalizer.

Verifies the presentation rules for union-typed properties: nullish
stripping, boolean collapse, sorted literal options, unwrapping of a single
remaining variant and independent classification of mixed variants.
"""

from propschema.core.analysis.context import ExtractionContext
from propschema.core.analysis.extractor import parse_property
from propschema.core.analysis.normalizer import literal_text, normalize_union
from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.program import Program
from propschema.core.checker.types import ReferenceType


def union_of(load_source, written: str):
    """Return (context, type) for a member declared as `v: <written>`."""
    checker, sf = load_source({"Props.ts": f"interface Props {{ v: {written}; }}\n"})
    props = checker.get_type_at_location(sf.type_decls["Props"][0].field("name"))
    t = checker.get_type_of_symbol(checker.get_properties(props)[0])
    return ExtractionContext(checker=checker, parse_property=parse_property), t


def test_string_literals_become_sorted_options(load_source) -> None:
    """TC-01: Options are sorted alphabetically."""
    ctx, t = union_of(load_source, "'medium' | 'large' | 'small'")
    prop = normalize_union(ctx, "size", t, False)

    assert prop.to_dict() == {
        "name": "size",
        "type": "enum-literal",
        "required": True,
        "options": ["large", "medium", "small"],
    }


def test_number_literals_sort_as_text(load_source) -> None:
    """TC-02: Numeric options keep their decimal text and sort lexicographically."""
    ctx, t = union_of(load_source, "1 | 10 | 2")
    assert normalize_union(ctx, "v", t, False).options == ["1", "10", "2"]


def test_empty_string_option_is_kept(load_source) -> None:
    """TC-03: An empty-string literal is a valid option."""
    ctx, t = union_of(load_source, "'' | 'x'")
    assert normalize_union(ctx, "v", t, False).options == ["", "x"]


def test_nullable_boolean_collapses(load_source) -> None:
    """TC-04: true | false survives nullish stripping as a plain boolean."""
    ctx, t = union_of(load_source, "boolean | null")
    prop = normalize_union(ctx, "flag", t, True)
    assert prop.to_dict() == {"name": "flag", "type": "boolean", "required": False}


def test_single_literal_after_stripping(load_source) -> None:
    """TC-05: A lone literal left over is an enum-literal with one option."""
    ctx, t = union_of(load_source, "'only' | undefined")
    prop = normalize_union(ctx, "v", t, True)
    assert prop.type == "enum-literal" and prop.options == ["only"]


def test_single_non_literal_is_unwrapped(load_source) -> None:
    """TC-06: `T | undefined` is presented as T itself."""
    ctx, t = union_of(load_source, "string | undefined")
    assert normalize_union(ctx, "v", t, True).to_dict() == {
        "name": "v", "type": "string", "required": False,
    }


def test_mixed_variants_become_union_children(load_source) -> None:
    """TC-07: Mixed unions classify every variant independently."""
    ctx, t = union_of(load_source, "'auto' | number | { px: number }")
    prop = normalize_union(ctx, "width", t, False)

    assert prop.type == "union"
    assert prop.options is None
    assert [c.to_dict() for c in prop.children] == [
        {"name": "width", "type": "enum-literal", "required": True, "options": ["auto"]},
        {"name": "width", "type": "number", "required": True},
        {
            "name": "width",
            "type": "object",
            "required": True,
            "children": [{"name": "px", "type": "number", "required": True}],
        },
    ]


def test_only_nullish_variants_is_unknown(load_source) -> None:
    """TC-08: Nothing left after stripping yields `unknown`."""
    ctx, t = union_of(load_source, "null | undefined")
    assert normalize_union(ctx, "v", t, False).to_dict() == {
        "name": "v", "type": "unknown", "required": True,
    }


def test_literal_text_strips_quotes_from_display() -> None:
    """TC-09: Non-literal inputs fall back to the unquoted display string."""
    ctx = ExtractionContext(checker=TypeChecker(Program()), parse_property=parse_property)
    assert literal_text(ctx, ReferenceType("'raw'")) == "raw"
    assert literal_text(ctx, ReferenceType("Plain")) == "Plain"
