from __future__ import annotations

"""
Type Display Printer.

Renders type objects the way the TypeScript compiler displays them. The
printed form doubles as the canonical signature of a type, so it must be
deterministic for a given declaration set.
"""

import json
import math
from decimal import Decimal
from typing import TYPE_CHECKING, List

from propschema.core.checker.types import (
    BOOLEAN,
    AliasRef,
    ArrayType,
    EnumType,
    FunctionType,
    IntersectionType,
    IntrinsicType,
    LiteralType,
    ObjectType,
    ReferenceType,
    Signature,
    TupleType,
    Type,
    TypeParameterType,
    UnionType,
)

if TYPE_CHECKING:
    from propschema.core.checker.checker import TypeChecker

# Nesting level past which anonymous structure is elided
_MAX_DEPTH = 8
_ELISION = "..."


def format_number(value: float) -> str:
    """
    Format a numeric literal like JavaScript's Number#toString.

    Uses the shortest round-tripping digits; plain decimal notation for
    magnitudes in [1e-6, 1e21), exponent notation (`1e+21`, `1.5e-7`) outside.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    dec = Decimal(repr(abs(value))).normalize()
    _, digit_tuple, exponent = dec.as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    # decimal point position relative to the first digit
    n = exponent + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def format_literal(t: LiteralType) -> str:
    if t.enum_member is not None:
        return t.enum_member
    v = t.value
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, str):
        return json.dumps(v, ensure_ascii=False)
    return format_number(v)


class TypePrinter:
    """
    Renders types to display strings.

    Args:
        checker: Used to resolve lazily collected members and signatures.
    """

    def __init__(self, checker: "TypeChecker") -> None:
        self._checker = checker

    def to_string(self, t: Type, depth: int = 0) -> str:
        if depth > _MAX_DEPTH:
            return _ELISION
        if t.alias is not None:
            return self._alias(t.alias, depth)

        if isinstance(t, IntrinsicType):
            return t.name
        if isinstance(t, LiteralType):
            return format_literal(t)
        if isinstance(t, (EnumType, TypeParameterType)):
            return t.name
        if isinstance(t, ReferenceType):
            return t.name + self._arguments(t.arguments, depth)
        if isinstance(t, UnionType):
            return self._union(t, depth)
        if isinstance(t, IntersectionType):
            return " & ".join(self._operand(m, depth, (UnionType, FunctionType)) for m in t.types)
        if isinstance(t, ArrayType):
            element = self._operand(t.element, depth, (UnionType, IntersectionType, FunctionType))
            return ("readonly " if t.readonly else "") + element + "[]"
        if isinstance(t, TupleType):
            return self._tuple(t, depth)
        if isinstance(t, FunctionType):
            return self._function(t.signatures, depth)
        if isinstance(t, ObjectType):
            return self._object(t, depth)
        return _ELISION

    # -- Composite renderers ----------------------------------------------------

    def _alias(self, alias: AliasRef, depth: int) -> str:
        return alias.name + self._arguments(list(alias.arguments), depth)

    def _arguments(self, args: List[Type], depth: int) -> str:
        if not args:
            return ""
        return "<" + ", ".join(self.to_string(a, depth + 1) for a in args) + ">"

    def _operand(self, t: Type, depth: int, wrap: tuple) -> str:
        text = self.to_string(t, depth + 1)
        if t.alias is None and t is not BOOLEAN and isinstance(t, wrap):
            return f"({text})"
        return text

    def _union(self, t: UnionType, depth: int) -> str:
        bools = [m for m in t.types if isinstance(m, LiteralType) and isinstance(m.value, bool)
                 and m.enum_member is None]
        collapse = len({m.value for m in bools}) == 2

        parts: List[str] = []
        emitted_boolean = False
        for m in t.types:
            if collapse and m in bools:
                if not emitted_boolean:
                    parts.append("boolean")
                    emitted_boolean = True
                continue
            parts.append(self._operand(m, depth, (FunctionType,)))
        return " | ".join(parts)

    def _tuple(self, t: TupleType, depth: int) -> str:
        parts = []
        for el in t.elements:
            text = self.to_string(el.type, depth + 1)
            if el.rest:
                text = "..." + text
            elif el.optional:
                text += "?"
            parts.append(text)
        return ("readonly " if t.readonly else "") + "[" + ", ".join(parts) + "]"

    def _function(self, signatures: List[Signature], depth: int) -> str:
        if len(signatures) == 1:
            return self._arrow(signatures[0], depth)
        inner = " ".join(self._call(sig, depth) + ";" for sig in signatures)
        return "{ " + inner + " }"

    def _object(self, t: ObjectType, depth: int) -> str:
        if t.name is not None:
            return t.name + self._arguments(t.type_arguments, depth)

        members = self._checker.get_properties(t)
        signatures = self._checker.get_call_signatures(t)
        if not members and len(signatures) == 1:
            return self._arrow(signatures[0], depth)
        if not members and not signatures:
            return "{}"
        if depth >= _MAX_DEPTH:
            return "{ " + _ELISION + " }"

        parts: List[str] = [self._call(sig, depth) + ";" for sig in signatures]
        for sym in members:
            name = _property_key(sym.name)
            opt = "?" if sym.optional else ""
            member_type = self._checker.get_type_of_symbol(sym)
            if sym.is_method and isinstance(member_type, FunctionType) and member_type.signatures:
                parts.append(f"{name}{opt}{self._call(member_type.signatures[0], depth)};")
            else:
                parts.append(f"{name}{opt}: {self.to_string(member_type, depth + 1)};")
        return "{ " + " ".join(parts) + " }"

    # -- Signatures ---------------------------------------------------------------

    def _parameters(self, sig: Signature, depth: int) -> str:
        parts = []
        for p in self._checker.signature_parameters(sig):
            prefix = "..." if p.rest else ""
            opt = "?" if p.optional else ""
            parts.append(f"{prefix}{p.name}{opt}: {self.to_string(p.type, depth + 1)}")
        return "(" + ", ".join(parts) + ")"

    def _arrow(self, sig: Signature, depth: int) -> str:
        ret = self._checker.signature_return_type(sig)
        return f"{self._parameters(sig, depth)} => {self.to_string(ret, depth + 1)}"

    def _call(self, sig: Signature, depth: int) -> str:
        ret = self._checker.signature_return_type(sig)
        return f"{self._parameters(sig, depth)}: {self.to_string(ret, depth + 1)}"


def _property_key(name: str) -> str:
    if name.isidentifier() or name.replace("$", "_").isidentifier():
        return name
    return json.dumps(name, ensure_ascii=False)
