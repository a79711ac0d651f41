from __future__ import annotations

"""
Literal/Union Normalizer.

Decides how a union type is presented: a plain boolean, an enumerated
literal set, the single remaining variant, or a union of independently
classified variants.
"""

import logging
from typing import List

from propschema.core.analysis.classifier import cleanup_type_string, is_literal
from propschema.core.analysis.context import ExtractionContext
from propschema.core.checker.types import Type
from propschema.domain.constants import BOOLEAN_LABEL, UNKNOWN_LABEL, TypeKind
from propschema.domain.schema_models import PropDefinition

logger = logging.getLogger(__name__)


def normalize_union(
        ctx: ExtractionContext,
        name: str,
        t: Type,
        optional: bool
) -> PropDefinition:
    """
    Convert a union-typed property into a PropDefinition.

    `undefined` and `null` variants are dropped first, which is how an
    optional `T | undefined` collapses to `T`.

    Args:
        ctx: Extraction context of the current top-level call.
        name: Property name.
        t: The union type.
        optional: Whether the property is optional.

    Returns:
        PropDefinition: boolean, enum-literal, the unwrapped variant, union
        or unknown node.
    """
    checker = ctx.checker
    required = not optional

    variants = [v for v in checker.union_types(t) if not checker.is_nullish(v)]
    literals = [v for v in variants if is_literal(checker, v)]
    non_literals = [v for v in variants if not is_literal(checker, v)]

    if literals and not non_literals:
        if len(literals) == 2 and all(checker.is_boolean_literal(v) for v in literals):
            values = {checker.literal_value(v) for v in literals}
            if values == {"true", "false"}:
                return PropDefinition(name=name, type=BOOLEAN_LABEL, required=required)
        return literal_definition(ctx, name, literals, optional)

    if not literals and len(non_literals) == 1:
        return ctx.parse_property(ctx, name, non_literals[0], optional)

    children = [ctx.parse_property(ctx, name, v, optional) for v in variants]
    if not children:
        logger.debug(f"Union property '{name}' has no variants left; emitting '{UNKNOWN_LABEL}'")
        return PropDefinition(name=name, type=UNKNOWN_LABEL, required=required)
    return PropDefinition(
        name=name,
        type=TypeKind.UNION.value,
        required=required,
        children=children,
    )


def literal_definition(
        ctx: ExtractionContext,
        name: str,
        literals: List[Type],
        optional: bool
) -> PropDefinition:
    """Build an enum-literal node with alphabetically sorted option values."""
    options = sorted(literal_text(ctx, v) for v in literals)
    return PropDefinition(
        name=name,
        type=TypeKind.ENUM_LITERAL.value,
        required=not optional,
        options=options,
    )


def literal_text(ctx: ExtractionContext, t: Type) -> str:
    """
    Extract the raw value of a literal type.

    Non-literal inputs fall back to their display string with one pair of
    surrounding quotes removed.
    """
    checker = ctx.checker
    if is_literal(checker, t):
        return checker.literal_value(t)

    text = cleanup_type_string(checker, t)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text
