from __future__ import annotations

"""
TypeScript Type Checker.

Resolves type annotations of a Program into the type objects of
`core.checker.types` and answers the structural queries the extraction
engine relies on: display strings, member enumeration, optionality,
union/intersection/literal/array/tuple predicates, call signatures, enum and
alias resolution, and symbol lookup across imports.

Coverage is the subset of TypeScript used to declare component props:
interfaces (merged, generic, `extends`), type aliases, enums, object
literal types, unions, intersections, arrays, tuples, function and method
signatures, `keyof`, indexed access and the Partial / Required / Readonly /
Pick / Omit / NonNullable utilities. Anything else is kept as an opaque
reference displayed by its source text.
"""

import logging
from typing import Callable, Dict, List, Optional, Set, Tuple

from propschema.core.checker.printer import TypePrinter, format_number
from propschema.core.checker.program import Program, SourceFile
from propschema.core.checker.syntax import SyntaxNode, string_value, unwrap_annotation
from propschema.core.checker.types import (
    ANY,
    BOOLEAN,
    FALSE,
    NEVER,
    NULL,
    TRUE,
    UNDEFINED,
    UNKNOWN,
    AliasRef,
    ArrayType,
    EnumType,
    FunctionType,
    IntersectionType,
    IntrinsicType,
    LiteralType,
    NULLISH_NAMES,
    ObjectType,
    Parameter,
    PropertySymbol,
    ReferenceType,
    Signature,
    TupleElement,
    TupleType,
    Type,
    TypeEnv,
    TypeParameterType,
    UnionType,
    ValueSymbol,
)

logger = logging.getLogger(__name__)

_SHARED_INTRINSICS: Dict[str, Type] = {
    "any": ANY,
    "unknown": UNKNOWN,
    "never": NEVER,
    "undefined": UNDEFINED,
    "null": NULL,
    "boolean": BOOLEAN,
}

# Alias declarations whose body produces a fresh type object that can carry the alias name
_ALIASABLE_BODIES: Dict[str, type] = {
    "union_type": UnionType,
    "intersection_type": IntersectionType,
    "object_type": ObjectType,
    "function_type": FunctionType,
}

_WRAPPER_NODES = frozenset({
    "type_annotation",
    "opting_type_annotation",
    "omitting_type_annotation",
    "default_type",
    "constraint",
    "parenthesized_type",
})

_PARAMETER_NODES = frozenset({"required_parameter", "optional_parameter"})


class TypeChecker:
    """
    Type-checking service over a Program.

    Declared types are memoised per (declaration, type arguments), so every
    reference to the same interface or alias instantiation yields the same
    type object.

    Args:
        program: The Program whose files are queried.
    """

    def __init__(self, program: Program) -> None:
        self.program = program
        self._printer = TypePrinter(self)
        self._declared: Dict[tuple, Type] = {}
        self._resolving: Set[tuple] = set()
        self._intrinsics: Dict[str, Type] = dict(_SHARED_INTRINSICS)

    # ==========================================================================
    # DISPLAY
    # ==========================================================================

    def type_to_string(self, t: Type) -> str:
        return self._printer.to_string(t)

    # ==========================================================================
    # MEMBERS
    # ==========================================================================

    def get_properties(self, t: Type) -> List[PropertySymbol]:
        """
        Enumerate the members of an object-like type in declaration order.

        Interfaces list their own members first, then inherited ones not
        overridden. Intersections merge their constituents (first wins).
        Non object-like types, unions included, have no members.
        """
        if isinstance(t, ObjectType):
            return self._collect_members(t)
        if isinstance(t, IntersectionType):
            seen: Set[str] = set()
            out: List[PropertySymbol] = []
            for part in t.types:
                for sym in self.get_properties(part):
                    if sym.name not in seen:
                        seen.add(sym.name)
                        out.append(sym)
            return out
        return []

    def get_type_of_symbol(self, sym: PropertySymbol) -> Type:
        """Resolve a member's type at its declaration site."""
        if sym.resolved_type is None:
            if sym.is_method and sym.declaration is not None:
                sym.resolved_type = FunctionType([Signature(sym.declaration, sym.env)])
            elif sym.type_node is not None:
                sym.resolved_type = self._type_from_node(sym.type_node, sym.env)
            else:
                sym.resolved_type = ANY
        return sym.resolved_type

    def is_optional(self, sym: PropertySymbol) -> bool:
        return sym.optional

    def has_declaration(self, sym: PropertySymbol) -> bool:
        return sym.declaration is not None

    # ==========================================================================
    # STRUCTURAL PREDICATES
    # ==========================================================================

    def is_array_type(self, t: Type) -> bool:
        return isinstance(t, ArrayType)

    def is_tuple_type(self, t: Type) -> bool:
        return isinstance(t, TupleType)

    def is_union(self, t: Type) -> bool:
        return isinstance(t, UnionType) or _is_union_enum(t)

    def is_intersection(self, t: Type) -> bool:
        return isinstance(t, IntersectionType)

    def union_types(self, t: Type) -> List[Type]:
        """Variants of a union; union enums contribute their members."""
        if _is_union_enum(t):
            return list(t.members)
        if isinstance(t, UnionType):
            out: List[Type] = []
            for m in t.types:
                out.extend(m.members if _is_union_enum(m) else [m])
            return out
        return [t]

    def get_union_type(self, types: List[Type]) -> Type:
        """Union of `types`, flattened and deduplicated; a single survivor is returned as is."""
        return self._union_of(types)

    def is_string_literal(self, t: Type) -> bool:
        return isinstance(t, LiteralType) and isinstance(t.value, str)

    def is_number_literal(self, t: Type) -> bool:
        return (
            isinstance(t, LiteralType)
            and isinstance(t.value, float)
            and not isinstance(t.value, bool)
        )

    def is_boolean_literal(self, t: Type) -> bool:
        return isinstance(t, LiteralType) and isinstance(t.value, bool)

    def literal_value(self, t: LiteralType) -> str:
        """Raw literal value: the string itself, a decimal number or true/false."""
        if isinstance(t.value, bool):
            return "true" if t.value else "false"
        if isinstance(t.value, str):
            return t.value
        return format_number(t.value)

    def is_nullish(self, t: Type) -> bool:
        return isinstance(t, IntrinsicType) and t.name in NULLISH_NAMES

    def is_enum_type(self, t: Type) -> bool:
        return isinstance(t, EnumType)

    def get_call_signatures(self, t: Type) -> List[Signature]:
        if isinstance(t, FunctionType):
            return list(t.signatures)
        if isinstance(t, ObjectType):
            self._collect_members(t)
            return list(t.call_signatures)
        if isinstance(t, IntersectionType):
            out: List[Signature] = []
            for part in t.types:
                out.extend(self.get_call_signatures(part))
            return out
        return []

    def signature_parameters(self, sig: Signature) -> List[Parameter]:
        if sig.parameters is None:
            self._resolve_signature(sig)
        return sig.parameters or []

    def signature_return_type(self, sig: Signature) -> Type:
        if sig.return_type is None:
            self._resolve_signature(sig)
        return sig.return_type or ANY

    def resolve_alias(self, t: Type) -> Type:
        """Return the memoised declared type of the alias a type carries."""
        if t.alias is not None and t.alias.key is not None:
            return self._declared.get(t.alias.key, t)
        return t

    # ==========================================================================
    # LOCATION QUERIES
    # ==========================================================================

    def get_type_at_location(self, node: SyntaxNode) -> Type:
        """Resolve a type node in its own file, binding enclosing type parameters."""
        return self._type_from_node(node, self._enclosing_type_parameters(node))

    def get_symbol_at_location(self, node: SyntaxNode) -> Optional[ValueSymbol]:
        """Resolve an identifier to its originating value declaration, following imports."""
        if not node.is_identifier():
            return None
        return self._resolve_value(node.file, node.text, set())

    def resolve_module_export(
            self,
            file: SourceFile,
            specifier: str,
            name: str
    ) -> Optional[ValueSymbol]:
        """Resolve `name` exported by the module `specifier` imported from `file`."""
        target = self.program.resolve_module(file, specifier)
        if target is None:
            logger.debug(f"Unresolved module '{specifier}' imported from {file.path}")
            return None
        return self._resolve_exported_value(target, name, set())

    # ==========================================================================
    # VALUE RESOLUTION
    # ==========================================================================

    def _resolve_value(
            self,
            file: SourceFile,
            name: str,
            seen: Set[Tuple[str, str]]
    ) -> Optional[ValueSymbol]:
        decl = file.value_decls.get(name)
        if decl is not None:
            return ValueSymbol(name, decl)

        binding = file.imports.get(name)
        if binding is None:
            return None
        target = self.program.resolve_module(file, binding.specifier)
        if target is None:
            logger.debug(f"Unresolved module '{binding.specifier}' imported from {file.path}")
            return None
        return self._resolve_exported_value(target, binding.imported, seen)

    def _resolve_exported_value(
            self,
            file: SourceFile,
            name: str,
            seen: Set[Tuple[str, str]]
    ) -> Optional[ValueSymbol]:
        key = (file.path, name)
        if key in seen:
            return None
        seen.add(key)

        if name == "default" and file.default_export is not None:
            value = file.default_export.export_value()
            return ValueSymbol(name, value) if value is not None else None

        exp = file.exports.get(name)
        if exp is not None:
            if exp.source is None:
                return self._resolve_value(file, exp.local, seen)
            target = self.program.resolve_module(file, exp.source)
            if target is None:
                return None
            return self._resolve_exported_value(target, exp.local, seen)

        if name != "default":
            for specifier in file.star_exports:
                target = self.program.resolve_module(file, specifier)
                if target is None:
                    continue
                found = self._resolve_exported_value(target, name, seen)
                if found is not None:
                    return found
        return None

    # ==========================================================================
    # TYPE NAME RESOLUTION
    # ==========================================================================

    def _lookup_type(
            self,
            file: SourceFile,
            name: str,
            seen: Set[Tuple[str, str]]
    ) -> Optional[Tuple[str, List[SyntaxNode]]]:
        """Find the declarations a type name refers to, following imports."""
        decls = file.type_decls.get(name)
        if decls:
            return name, decls

        binding = file.imports.get(name)
        if binding is None:
            return None
        target = self.program.resolve_module(file, binding.specifier)
        if target is None:
            return None
        return self._lookup_exported_type(target, binding.imported, seen)

    def _lookup_exported_type(
            self,
            file: SourceFile,
            name: str,
            seen: Set[Tuple[str, str]]
    ) -> Optional[Tuple[str, List[SyntaxNode]]]:
        key = (file.path, name)
        if key in seen:
            return None
        seen.add(key)

        if name == "default" and file.default_export is not None:
            target = file.default_export.export_value()
            if target is None:
                return None
            name_node = target.field("name") if not target.is_identifier() else target
            return self._lookup_type(file, name_node.text, seen) if name_node is not None else None

        exp = file.exports.get(name)
        if exp is not None:
            if exp.source is None:
                return self._lookup_type(file, exp.local, seen)
            target_file = self.program.resolve_module(file, exp.source)
            if target_file is None:
                return None
            return self._lookup_exported_type(target_file, exp.local, seen)

        decls = file.type_decls.get(name)
        if decls:
            return name, decls

        for specifier in file.star_exports:
            target_file = self.program.resolve_module(file, specifier)
            if target_file is None:
                continue
            found = self._lookup_exported_type(target_file, name, seen)
            if found is not None:
                return found
        return None

    def _resolve_type_name(
            self,
            file: SourceFile,
            name: str,
            args: List[Type],
            env: TypeEnv
    ) -> Type:
        if name in env and not args:
            return env[name]

        found = self._lookup_type(file, name, set())
        if found is not None:
            decl_name, decls = found
            return self._declared_type(decl_name, decls, args)

        utility = self._utility_type(name, args)
        if utility is not None:
            return utility
        if not args and name in _SHARED_INTRINSICS:
            return _SHARED_INTRINSICS[name]
        return ReferenceType(name, list(args))

    def _resolve_qualified(self, node: SyntaxNode, args: List[Type]) -> Type:
        """`Ns.Name` via a namespace import, `Enum.Member`, or an opaque reference."""
        text = node.normalized_text.replace(" ", "")
        parts = text.split(".")
        file = node.file
        if len(parts) == 2:
            head, tail = parts
            specifier = file.namespaces.get(head)
            if specifier is not None:
                target = self.program.resolve_module(file, specifier)
                found = self._lookup_exported_type(target, tail, set()) if target else None
                if found is not None:
                    return self._declared_type(found[0], found[1], args)
            else:
                found = self._lookup_type(file, head, set())
                if found is not None and found[1][0].type == "enum_declaration":
                    enum = self._declared_type(found[0], found[1], [])
                    if isinstance(enum, EnumType):
                        for member in enum.members:
                            if member.enum_member == f"{enum.name}.{tail}":
                                return member
        return ReferenceType(text, list(args))

    # ==========================================================================
    # DECLARED TYPES
    # ==========================================================================

    def _declared_type(self, name: str, decls: List[SyntaxNode], args: List[Type]) -> Type:
        kind = decls[0].type
        same_kind = [d for d in decls if d.type == kind]
        if kind == "interface_declaration":
            return self._interface_type(name, same_kind, args)
        if kind == "type_alias_declaration":
            return self._alias_type(name, same_kind[0], args)
        if kind == "enum_declaration":
            return self._enum_type(name, same_kind)
        return ReferenceType(name, list(args))

    def _cache_key(self, decl: SyntaxNode, args: List[Type]) -> tuple:
        return decl.key + tuple(self.type_to_string(a) for a in args)

    def _interface_type(self, name: str, decls: List[SyntaxNode], args: List[Type]) -> Type:
        key = self._cache_key(decls[0], args)
        cached = self._declared.get(key)
        if cached is not None:
            return cached

        obj = ObjectType(name=name, type_arguments=list(args))
        self._declared[key] = obj
        for decl in decls:
            env = self._bind_type_parameters(decl, args)
            body = decl.field("body")
            if body is not None:
                obj.bodies.append((body, env))
            for clause in decl.children_of_type("extends_type_clause"):
                for base in clause.fields("type") or clause.named_children():
                    obj.heritage.append((base, env))
        return obj

    def _alias_type(self, name: str, decl: SyntaxNode, args: List[Type]) -> Type:
        key = self._cache_key(decl, args)
        cached = self._declared.get(key)
        if cached is not None:
            return cached
        if key in self._resolving:
            logger.debug(f"Circular type alias '{name}' in {decl.file.path}; using 'any'")
            return ANY

        self._resolving.add(key)
        try:
            env = self._bind_type_parameters(decl, args)
            value = decl.field("value")
            result = self._type_from_node(value, env)
        finally:
            self._resolving.discard(key)

        fresh_class = _ALIASABLE_BODIES.get(value.type) if value is not None else None
        if (
                fresh_class is not None
                and isinstance(result, fresh_class)
                and result.alias is None
                and result is not BOOLEAN
        ):
            result.alias = AliasRef(name, tuple(args), key)
        self._declared[key] = result
        return result

    def _enum_type(self, name: str, decls: List[SyntaxNode]) -> Type:
        key = decls[0].key
        cached = self._declared.get(key)
        if cached is not None:
            return cached

        enum = EnumType(name)
        next_value = 0.0
        for decl in decls:
            body = decl.field("body")
            for member in body.named_children() if body is not None else []:
                if member.type == "enum_assignment":
                    name_node = member.field("name")
                    value = _literal_from_expression(member.field("value"))
                    if value is None:
                        enum.computed = True
                else:
                    name_node = member
                    value = None
                if name_node is None:
                    continue
                member_name = string_value(name_node) if name_node.type == "string" else name_node.text
                if value is None:
                    value = next_value
                if isinstance(value, float):
                    next_value = value + 1
                enum.members.append(LiteralType(value, enum_member=f"{name}.{member_name}"))

        self._declared[key] = enum
        return enum

    def _bind_type_parameters(self, decl: SyntaxNode, args: List[Type]) -> TypeEnv:
        env: TypeEnv = {}
        params = decl.field("type_parameters")
        if params is None:
            return env
        for i, param in enumerate(params.children_of_type("type_parameter")):
            name_node = param.field("name")
            if name_node is None:
                continue
            if i < len(args):
                env[name_node.text] = args[i]
            elif param.field("value") is not None:
                env[name_node.text] = self._type_from_node(param.field("value"), env)
            else:
                env[name_node.text] = TypeParameterType(name_node.text)
        return env

    def _enclosing_type_parameters(self, node: SyntaxNode) -> TypeEnv:
        env: TypeEnv = {}
        parent = node.node.parent
        while parent is not None:
            params = parent.child_by_field_name("type_parameters")
            if params is not None:
                for param in params.named_children:
                    if param.type != "type_parameter":
                        continue
                    name_node = param.child_by_field_name("name")
                    if name_node is not None:
                        pname = node.wrap(name_node).text
                        env.setdefault(pname, TypeParameterType(pname))
            parent = parent.parent
        return env

    # ==========================================================================
    # UTILITY TYPES
    # ==========================================================================

    def _utility_type(self, name: str, args: List[Type]) -> Optional[Type]:
        if name in ("Array", "ReadonlyArray") and len(args) == 1:
            return ArrayType(args[0], readonly=(name == "ReadonlyArray"))
        if name in ("Partial", "Required", "Readonly") and len(args) == 1:
            return self._modified_members(name, args[0])
        if name in ("Pick", "Omit") and len(args) == 2:
            return self._picked_members(name, args[0], args[1])
        if name == "NonNullable" and len(args) == 1:
            variants = self.union_types(args[0])
            present = [t for t in variants if not self.is_nullish(t)]
            return args[0] if len(present) == len(variants) else self._union_of(present)
        return None

    def _modified_members(self, name: str, base: Type) -> Type:
        if name == "Readonly" and isinstance(base, ArrayType):
            return ArrayType(base.element, readonly=True)
        members = self.get_properties(base)
        if name == "Partial":
            members = [m.with_optional(True) for m in members]
        elif name == "Required":
            members = [m.with_optional(False) for m in members]
        obj = ObjectType(members=members)
        obj.alias = AliasRef(name, (base,))
        return obj

    def _picked_members(self, name: str, base: Type, keys: Type) -> Type:
        wanted = {
            self.literal_value(k)
            for k in self.union_types(keys)
            if isinstance(k, LiteralType)
        }
        members = [
            m for m in self.get_properties(base)
            if (m.name in wanted) == (name == "Pick")
        ]
        obj = ObjectType(members=members)
        obj.alias = AliasRef(name, (base, keys))
        return obj

    # ==========================================================================
    # MEMBER COLLECTION
    # ==========================================================================

    def _collect_members(self, obj: ObjectType) -> List[PropertySymbol]:
        if obj.members is not None:
            return obj.members

        # Placeholder so that circular `extends` chains terminate
        obj.members = []
        members: List[PropertySymbol] = []
        seen: Set[str] = set()

        for body, env in obj.bodies:
            for node in body.named_children():
                if node.type == "call_signature":
                    obj.call_signatures.append(Signature(node, env))
                    continue
                sym = self._member_symbol(node, env)
                if sym is None or sym.name in seen:
                    continue
                seen.add(sym.name)
                members.append(sym)

        for base_node, env in obj.heritage:
            base = self._type_from_node(base_node, env)
            for sym in self.get_properties(base):
                if sym.name not in seen:
                    seen.add(sym.name)
                    members.append(sym)

        obj.members = members
        return members

    def _member_symbol(self, node: SyntaxNode, env: TypeEnv) -> Optional[PropertySymbol]:
        if node.type not in ("property_signature", "method_signature"):
            return None
        name = _property_name(node.field("name"))
        if name is None:
            return None
        if node.type == "method_signature":
            return PropertySymbol(name, node, optional=node.has_token("?"), env=env, is_method=True)
        return PropertySymbol(
            name,
            node,
            optional=node.has_token("?"),
            type_node=unwrap_annotation(node.field("type")),
            env=env,
        )

    def _resolve_signature(self, sig: Signature) -> None:
        node = sig.node
        if node is None:
            sig.parameters, sig.return_type = [], ANY
            return

        env = dict(sig.env)
        own_params = node.field("type_parameters")
        if own_params is not None:
            for param in own_params.children_of_type("type_parameter"):
                name_node = param.field("name")
                if name_node is not None:
                    env[name_node.text] = TypeParameterType(name_node.text)

        parameters: List[Parameter] = []
        params_node = node.field("parameters") or node.first_child_of_type("formal_parameters")
        for p in params_node.named_children() if params_node is not None else []:
            if p.type not in _PARAMETER_NODES:
                continue
            pattern = p.field("pattern")
            rest = pattern is not None and pattern.type == "rest_pattern"
            if pattern is None:
                pname = "arg"
            elif rest:
                inner = pattern.named_children()
                pname = inner[0].normalized_text if inner else "args"
            else:
                pname = pattern.normalized_text
            if pname == "this":
                continue
            type_node = unwrap_annotation(p.field("type"))
            ptype = self._type_from_node(type_node, env) if type_node is not None else ANY
            parameters.append(
                Parameter(pname, ptype, optional=(p.type == "optional_parameter"), rest=rest)
            )

        ret = unwrap_annotation(node.field("return_type"))
        if ret is None and node.type == "function_type":
            # `(...) => R`: the return type is the last named child
            tail = node.named_children()
            if tail and tail[-1].type not in ("formal_parameters", "type_parameters"):
                ret = tail[-1]
        sig.parameters = parameters
        sig.return_type = self._type_from_node(ret, env) if ret is not None else ANY

    # ==========================================================================
    # TYPE NODE RESOLUTION
    # ==========================================================================

    def _type_from_node(self, node: Optional[SyntaxNode], env: TypeEnv) -> Type:
        if node is None:
            return ANY
        if node.type in _WRAPPER_NODES:
            inner = node.named_children()
            return self._type_from_node(inner[0] if inner else None, env)
        handler = _TYPE_NODE_HANDLERS.get(node.type)
        if handler is None:
            return ReferenceType(node.normalized_text)
        return handler(self, node, env)

    def _predefined(self, node: SyntaxNode, env: TypeEnv) -> Type:
        name = node.text
        if name not in self._intrinsics:
            self._intrinsics[name] = IntrinsicType(name)
        return self._intrinsics[name]

    def _literal(self, node: SyntaxNode, env: TypeEnv) -> Type:
        children = node.named_children()
        inner = children[0] if children else node
        if inner.type in ("null", "undefined"):
            return NULL if inner.type == "null" else UNDEFINED
        if inner.type == "true":
            return TRUE
        if inner.type == "false":
            return FALSE
        value = _literal_from_expression(inner)
        if value is None:
            return ReferenceType(node.normalized_text)
        return LiteralType(value)

    def _identifier(self, node: SyntaxNode, env: TypeEnv) -> Type:
        return self._resolve_type_name(node.file, node.text, [], env)

    def _nested_identifier(self, node: SyntaxNode, env: TypeEnv) -> Type:
        return self._resolve_qualified(node, [])

    def _generic(self, node: SyntaxNode, env: TypeEnv) -> Type:
        name_node = node.field("name")
        targs = node.field("type_arguments")
        args = [self._type_from_node(a, env) for a in targs.named_children()] if targs else []
        if name_node is None:
            return ReferenceType(node.normalized_text)
        if name_node.type == "nested_type_identifier":
            return self._resolve_qualified(name_node, args)
        return self._resolve_type_name(node.file, name_node.text, args, env)

    def _union(self, node: SyntaxNode, env: TypeEnv) -> Type:
        members = [self._type_from_node(c, env) for c in node.named_children()]
        return self._union_of(members)

    def _intersection(self, node: SyntaxNode, env: TypeEnv) -> Type:
        members: List[Type] = []
        for part in (self._type_from_node(c, env) for c in node.named_children()):
            parts = part.types if isinstance(part, IntersectionType) and part.alias is None else [part]
            for t in parts:
                if all(t is not m for m in members):
                    members.append(t)
        if len(members) == 1:
            return members[0]
        return IntersectionType(members)

    def _array(self, node: SyntaxNode, env: TypeEnv) -> Type:
        children = node.named_children()
        return ArrayType(self._type_from_node(children[0] if children else None, env))

    def _readonly(self, node: SyntaxNode, env: TypeEnv) -> Type:
        children = node.named_children()
        inner = self._type_from_node(children[0] if children else None, env)
        if isinstance(inner, ArrayType):
            return ArrayType(inner.element, readonly=True)
        if isinstance(inner, TupleType):
            return TupleType(inner.elements, readonly=True)
        return inner

    def _tuple(self, node: SyntaxNode, env: TypeEnv) -> Type:
        elements: List[TupleElement] = []
        for child in node.named_children():
            if child.type == "optional_type":
                inner = child.named_children()
                elements.append(TupleElement(self._type_from_node(inner[0] if inner else None, env), optional=True))
            elif child.type == "rest_type":
                inner = child.named_children()
                elements.append(TupleElement(self._type_from_node(inner[0] if inner else None, env), rest=True))
            elif child.type in _PARAMETER_NODES:
                type_node = unwrap_annotation(child.field("type"))
                elements.append(TupleElement(
                    self._type_from_node(type_node, env),
                    optional=(child.type == "optional_parameter"),
                ))
            else:
                elements.append(TupleElement(self._type_from_node(child, env)))
        return TupleType(elements)

    def _function(self, node: SyntaxNode, env: TypeEnv) -> Type:
        return FunctionType([Signature(node, env)])

    def _object(self, node: SyntaxNode, env: TypeEnv) -> Type:
        return ObjectType(bodies=[(node, env)])

    def _keyof(self, node: SyntaxNode, env: TypeEnv) -> Type:
        children = node.named_children()
        target = self._type_from_node(children[0] if children else None, env)
        names = [LiteralType(sym.name) for sym in self.get_properties(target)]
        if not names:
            return ReferenceType(node.normalized_text)
        return self._union_of(names)

    def _lookup(self, node: SyntaxNode, env: TypeEnv) -> Type:
        children = node.named_children()
        if len(children) != 2:
            return ReferenceType(node.normalized_text)
        target = self._type_from_node(children[0], env)
        index = self._type_from_node(children[1], env)
        if isinstance(target, ArrayType) and index.alias is None and self.type_to_string(index) == "number":
            return target.element
        by_name = {sym.name: sym for sym in self.get_properties(target)}
        picked: List[Type] = []
        for key in self.union_types(index):
            if not isinstance(key, LiteralType):
                return ReferenceType(node.normalized_text)
            sym = by_name.get(self.literal_value(key))
            if sym is None:
                return ReferenceType(node.normalized_text)
            picked.append(self.get_type_of_symbol(sym))
        return self._union_of(picked)

    # -- Union construction -------------------------------------------------------

    def _union_of(self, types: List[Type]) -> Type:
        """Flatten, deduplicate and drop `never`; a single survivor is returned as is."""
        members: List[Type] = []
        keys: Set[tuple] = set()
        for t in types:
            for m in (t.types if isinstance(t, UnionType) else [t]):
                if m is NEVER:
                    continue
                key = _identity_key(m)
                if key in keys:
                    continue
                keys.add(key)
                members.append(m)

        if not members:
            return NEVER
        if len(members) == 1:
            return members[0]
        if len(members) == 2 and {id(m) for m in members} == {id(TRUE), id(FALSE)}:
            return BOOLEAN
        return UnionType(members)


_TYPE_NODE_HANDLERS: Dict[str, Callable[[TypeChecker, SyntaxNode, TypeEnv], Type]] = {
    "predefined_type": TypeChecker._predefined,
    "literal_type": TypeChecker._literal,
    "type_identifier": TypeChecker._identifier,
    "identifier": TypeChecker._identifier,
    "nested_type_identifier": TypeChecker._nested_identifier,
    "generic_type": TypeChecker._generic,
    "union_type": TypeChecker._union,
    "intersection_type": TypeChecker._intersection,
    "array_type": TypeChecker._array,
    "readonly_type": TypeChecker._readonly,
    "tuple_type": TypeChecker._tuple,
    "function_type": TypeChecker._function,
    "object_type": TypeChecker._object,
    "index_type_query": TypeChecker._keyof,
    "lookup_type": TypeChecker._lookup,
}


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _is_union_enum(t: Type) -> bool:
    return isinstance(t, EnumType) and bool(t.members) and not t.computed


def _identity_key(t: Type) -> tuple:
    if isinstance(t, LiteralType):
        return ("literal", type(t.value).__name__, t.value, t.enum_member)
    if isinstance(t, IntrinsicType):
        return ("intrinsic", t.name)
    return ("object", id(t))


def _property_name(node: Optional[SyntaxNode]) -> Optional[str]:
    if node is None or node.type == "computed_property_name":
        return None
    if node.type == "string":
        return string_value(node)
    return node.text


def _literal_from_expression(node: Optional[SyntaxNode]):
    """Evaluate a string or (optionally negated) number literal node."""
    if node is None:
        return None
    if node.type == "string":
        return string_value(node)
    if node.type == "template_string" and "${" not in node.text:
        return string_value(node)
    if node.type == "number":
        return _parse_number(node.text)
    if node.type == "unary_expression":
        operand = node.field("argument")
        operator = node.field("operator")
        op = operator.text if operator is not None else node.text[:1]
        if operand is not None and operand.type == "number":
            value = _parse_number(operand.text)
            if value is not None:
                return -value if op == "-" else value
    return None


def _parse_number(text: str) -> Optional[float]:
    clean = text.replace("_", "").lower()
    try:
        if clean.startswith(("0x", "0o", "0b")):
            return float(int(clean, 0))
        return float(clean.rstrip("n"))
    except ValueError:
        return None
