from __future__ import annotations

"""
Property Extractor.

Converts an object-like type into an ordered list of PropDefinitions,
recursing through the classifier and the union normalizer. Each top-level
call owns a fresh visited-signature set; a type whose canonical signature
was already expanded in the same call yields no properties, which is what
terminates self-referential type graphs.
"""

import logging
from typing import Callable, Dict, List, Optional, Set

from propschema.core.analysis.classifier import (
    classify,
    cleanup_type_string,
    is_builtin_type,
    is_primitive_type,
    is_react_type,
)
from propschema.core.analysis.context import ExtractionContext
from propschema.core.analysis.normalizer import literal_definition, normalize_union
from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.types import Type
from propschema.domain.constants import TypeKind
from propschema.domain.schema_models import PropDefinition

logger = logging.getLogger(__name__)

_KindHandler = Callable[[ExtractionContext, str, Type, Type, bool], PropDefinition]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_type_props(
        checker: TypeChecker,
        t: Type,
        visited: Optional[Set[str]] = None
) -> List[PropDefinition]:
    """
    Extract the property schema of an object-like type.

    Args:
        checker: Type-checking service of the program declaring the type.
        t: The props type.
        visited: Signatures already expanded; a new set when omitted.

    Returns:
        List[PropDefinition]: One node per declared member, in order.
    """
    ctx = ExtractionContext(
        checker=checker,
        parse_property=parse_property,
        visited=visited if visited is not None else set(),
    )
    return extract_members(ctx, t)


def extract_members(ctx: ExtractionContext, t: Type) -> List[PropDefinition]:
    checker = ctx.checker
    signature = checker.type_to_string(t)
    if signature in ctx.visited:
        logger.debug(f"Type '{signature}' already expanded; skipping repeated occurrence")
        return []
    ctx.visited.add(signature)

    props: List[PropDefinition] = []
    for sym in checker.get_properties(t):
        if not checker.has_declaration(sym):
            continue
        member_type = checker.get_type_of_symbol(sym)
        props.append(ctx.parse_property(ctx, sym.name, member_type, checker.is_optional(sym)))
    return props


def parse_property(
        ctx: ExtractionContext,
        name: str,
        t: Type,
        optional: bool
) -> PropDefinition:
    """
    Convert one member into a PropDefinition.

    Primitive, builtin and framework node/element types end as leaves
    before classification; other kinds go through the handler table.
    `undefined` and `null` variants are removed from a union before any
    of these checks, so `T | undefined` is presented exactly as `T`.
    """
    checker = ctx.checker
    resolved = checker.resolve_alias(t)

    if checker.is_union(resolved):
        variants = checker.union_types(resolved)
        present = [v for v in variants if not checker.is_nullish(v)]
        if present and len(present) < len(variants):
            return ctx.parse_property(ctx, name, checker.get_union_type(present), optional)

    if (
            is_primitive_type(checker, resolved)
            or is_builtin_type(checker, resolved)
            or is_react_type(checker, resolved)
    ):
        return _leaf(ctx, name, t, resolved, optional)

    kind = classify(checker, resolved)
    handler = _KIND_HANDLERS.get(kind, _leaf)
    return handler(ctx, name, t, resolved, optional)


# -----------------------------------------------------------------------------
# KIND HANDLERS
# -----------------------------------------------------------------------------

def _leaf(ctx: ExtractionContext, name: str, t: Type, resolved: Type, optional: bool) -> PropDefinition:
    return PropDefinition(
        name=name,
        type=cleanup_type_string(ctx.checker, resolved),
        required=not optional,
    )


def _union(ctx: ExtractionContext, name: str, t: Type, resolved: Type, optional: bool) -> PropDefinition:
    return normalize_union(ctx, name, t, optional)


def _enum_literal(ctx: ExtractionContext, name: str, t: Type, resolved: Type, optional: bool) -> PropDefinition:
    return literal_definition(ctx, name, [resolved], optional)


def _object(ctx: ExtractionContext, name: str, t: Type, resolved: Type, optional: bool) -> PropDefinition:
    checker = ctx.checker
    target: Optional[Type] = t
    if checker.is_union(t):
        target = next(
            (v for v in checker.union_types(t) if cleanup_type_string(checker, v) != "undefined"),
            None,
        )
    if target is None:
        return _leaf(ctx, name, t, t, optional)

    return PropDefinition(
        name=name,
        type=TypeKind.OBJECT.value,
        required=not optional,
        children=extract_members(ctx, target),
    )


_KIND_HANDLERS: Dict[TypeKind, _KindHandler] = {
    TypeKind.UNION: _union,
    TypeKind.ENUM_LITERAL: _enum_literal,
    TypeKind.OBJECT: _object,
}
