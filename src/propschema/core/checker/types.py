from __future__ import annotations

"""
Type Model of the TypeScript Backend.

Plain data objects produced by the TypeChecker. Structural parts that may
refer back to the type being built (object members, signature parameters)
are resolved lazily by the checker, which is what keeps self-referential
declarations finite.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from propschema.core.checker.syntax import SyntaxNode

# Type parameter bindings in effect while resolving a type node
TypeEnv = Dict[str, "Type"]

LiteralValue = Union[str, float, bool]


@dataclass(frozen=True)
class AliasRef:
    """
    Named alias attached to a type for presentation.

    Attributes:
        name: Alias name as declared.
        arguments: Type arguments of a generic alias instantiation.
        key: Cache key of the declared alias type inside the checker.
    """
    name: str
    arguments: Tuple["Type", ...] = ()
    key: Optional[tuple] = None


class Type:
    """Base class of every type object."""

    alias: Optional[AliasRef] = None


# -----------------------------------------------------------------------------
# LEAF TYPES
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class IntrinsicType(Type):
    """Keyword types: any, unknown, never, string, number, void, null, ..."""
    name: str


@dataclass(eq=False)
class LiteralType(Type):
    """
    String, number or boolean literal type.

    `enum_member` is set for enum members and holds the qualified display
    name (`Color.Red`).
    """
    value: LiteralValue
    enum_member: Optional[str] = None


@dataclass(eq=False)
class ReferenceType(Type):
    """Named type the backend does not expand (external or unsupported)."""
    name: str
    arguments: List[Type] = field(default_factory=list)


@dataclass(eq=False)
class TypeParameterType(Type):
    """Unbound generic parameter."""
    name: str


@dataclass(eq=False)
class EnumType(Type):
    """
    Declared enum; members are enum literal types in declaration order.

    An enum without computed members behaves as the union of its members.
    """
    name: str
    members: List[LiteralType] = field(default_factory=list)
    computed: bool = False


# -----------------------------------------------------------------------------
# COMPOSITE TYPES
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class UnionType(Type):
    types: List[Type]


@dataclass(eq=False)
class IntersectionType(Type):
    types: List[Type]


@dataclass(eq=False)
class ArrayType(Type):
    element: Type
    readonly: bool = False


@dataclass(eq=False)
class TupleElement:
    type: Type
    optional: bool = False
    rest: bool = False


@dataclass(eq=False)
class TupleType(Type):
    elements: List[TupleElement]
    readonly: bool = False


@dataclass(eq=False)
class Parameter:
    name: str
    type: Type
    optional: bool = False
    rest: bool = False


@dataclass(eq=False)
class Signature:
    """
    Call signature. Parameters and return type are resolved on first use.

    Attributes:
        node: Declaring node (function type, method or call signature).
        env: Type parameter bindings in effect at the declaration.
    """
    node: Optional[SyntaxNode]
    env: TypeEnv = field(default_factory=dict)
    parameters: Optional[List[Parameter]] = None
    return_type: Optional[Type] = None


@dataclass(eq=False)
class FunctionType(Type):
    signatures: List[Signature]


@dataclass(eq=False)
class PropertySymbol:
    """
    Member of an object-like type.

    Attributes:
        name: Member name.
        declaration: Declaring node; None for synthesized members.
        optional: True when declared with `?` (or made optional by Partial).
        type_node: Annotated type node, if any.
        env: Type parameter bindings in effect at the declaration.
        is_method: True for method signatures.
        resolved_type: Cached member type.
    """
    name: str
    declaration: Optional[SyntaxNode]
    optional: bool = False
    type_node: Optional[SyntaxNode] = None
    env: TypeEnv = field(default_factory=dict)
    is_method: bool = False
    resolved_type: Optional[Type] = None

    def with_optional(self, optional: bool) -> "PropertySymbol":
        return PropertySymbol(
            name=self.name,
            declaration=self.declaration,
            optional=optional,
            type_node=self.type_node,
            env=self.env,
            is_method=self.is_method,
            resolved_type=self.resolved_type,
        )


@dataclass(eq=False)
class ObjectType(Type):
    """
    Interface, object literal type or mapped-type instantiation.

    Members come either from declaration bodies plus `extends` heritage
    (collected lazily) or from a precomputed list.

    Attributes:
        name: Interface name; None for anonymous object literal types.
        type_arguments: Arguments of a generic interface instantiation.
        bodies: (body node, env) pairs, one per merged declaration.
        heritage: (type node, env) pairs from `extends` clauses.
        members: Collected members, None until first requested.
        call_signatures: Collected call signatures.
    """
    name: Optional[str] = None
    type_arguments: List[Type] = field(default_factory=list)
    bodies: List[Tuple[SyntaxNode, TypeEnv]] = field(default_factory=list)
    heritage: List[Tuple[SyntaxNode, TypeEnv]] = field(default_factory=list)
    members: Optional[List[PropertySymbol]] = None
    call_signatures: List[Signature] = field(default_factory=list)


@dataclass(eq=False)
class ValueSymbol:
    """Value-level declaration an identifier resolves to."""
    name: str
    declaration: SyntaxNode


# -----------------------------------------------------------------------------
# SHARED INSTANCES
# -----------------------------------------------------------------------------

ANY = IntrinsicType("any")
UNKNOWN = IntrinsicType("unknown")
NEVER = IntrinsicType("never")
UNDEFINED = IntrinsicType("undefined")
NULL = IntrinsicType("null")
TRUE = LiteralType(True)
FALSE = LiteralType(False)
BOOLEAN = UnionType([TRUE, FALSE])

NULLISH_NAMES = ("undefined", "null")
