from __future__ import annotations

"""
Extraction Context.

Carries the traversal state of one top-level extraction call: the checker
and the set of canonical type signatures already expanded.
"""

from dataclasses import dataclass, field
from typing import Callable, Set

from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.types import Type
from propschema.domain.schema_models import PropDefinition

PropertyParser = Callable[["ExtractionContext", str, Type, bool], PropDefinition]


@dataclass
class ExtractionContext:
    """
    Attributes:
        checker: Type-checking service of the current program.
        parse_property: Converter used for nested members and union variants.
        visited: Canonical signatures of types already expanded in this call.
    """
    checker: TypeChecker
    parse_property: PropertyParser
    visited: Set[str] = field(default_factory=set)
