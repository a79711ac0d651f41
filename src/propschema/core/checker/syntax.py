from __future__ import annotations

"""
Syntax Tree Service.

Wraps tree-sitter nodes together with the SourceFile they belong to so that
any node handed to the engine can be resolved in its own file scope. Exposes
the node-kind predicates and accessors the component locator and the source
processor rely on; nothing outside the checker package touches tree-sitter
node types directly.
"""

import re
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from tree_sitter import Node

if TYPE_CHECKING:
    from propschema.core.checker.program import SourceFile

_WHITESPACE_RX = re.compile(r"\s+")

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Closed set of declaration shapes the component locator dispatches on."""

    FUNCTION = "function"
    VARIABLE = "variable"
    CALL = "call"
    IDENTIFIER = "identifier"
    OTHER = "other"


_FUNCTION_NODE_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "arrow_function",
    "generator_function_declaration",
    "generator_function",
})

_PARAMETER_NODE_TYPES = frozenset({"required_parameter", "optional_parameter"})

_KIND_BY_NODE_TYPE = {
    **{t: NodeKind.FUNCTION for t in _FUNCTION_NODE_TYPES},
    "variable_declarator": NodeKind.VARIABLE,
    "call_expression": NodeKind.CALL,
    "identifier": NodeKind.IDENTIFIER,
}


# -----------------------------------------------------------------------------
# NODE WRAPPER
# -----------------------------------------------------------------------------

class SyntaxNode:
    """
    A tree-sitter node bound to its source file.

    Attributes:
        node: The underlying tree-sitter node.
        file: The SourceFile that owns the tree.
    """

    __slots__ = ("node", "file")

    def __init__(self, node: Node, file: "SourceFile") -> None:
        self.node = node
        self.file = file

    def __repr__(self) -> str:
        return f"SyntaxNode({self.type!r}, {self.file.path}:{self.line})"

    # -- Basic accessors ------------------------------------------------------

    @property
    def type(self) -> str:
        return self.node.type

    @property
    def text(self) -> str:
        raw = self.node.text
        return raw.decode("utf-8", errors="replace") if raw is not None else ""

    @property
    def normalized_text(self) -> str:
        """Source text with every whitespace run collapsed to one space."""
        return _WHITESPACE_RX.sub(" ", self.text).strip()

    @property
    def line(self) -> int:
        return self.node.start_point[0] + 1

    @property
    def key(self) -> Tuple[str, int, int, str]:
        """Stable identity of the node within a program."""
        return (self.file.path, self.node.start_byte, self.node.end_byte, self.node.type)

    def wrap(self, node: Optional[Node]) -> Optional["SyntaxNode"]:
        return SyntaxNode(node, self.file) if node is not None else None

    def field(self, name: str) -> Optional["SyntaxNode"]:
        return self.wrap(self.node.child_by_field_name(name))

    def fields(self, name: str) -> List["SyntaxNode"]:
        return [SyntaxNode(n, self.file) for n in self.node.children_by_field_name(name)]

    def named_children(self) -> List["SyntaxNode"]:
        return [
            SyntaxNode(n, self.file)
            for n in self.node.named_children
            if n.type != "comment"
        ]

    def children_of_type(self, *types: str) -> Iterator["SyntaxNode"]:
        for n in self.node.children:
            if n.type in types:
                yield SyntaxNode(n, self.file)

    def first_child_of_type(self, *types: str) -> Optional["SyntaxNode"]:
        return next(self.children_of_type(*types), None)

    def has_token(self, token: str) -> bool:
        """True if an anonymous child token (keyword or punctuation) is present."""
        return any(not n.is_named and n.type == token for n in self.node.children)

    # -- Kind predicates --------------------------------------------------------

    def kind(self) -> NodeKind:
        return _KIND_BY_NODE_TYPE.get(self.node.type, NodeKind.OTHER)

    def is_function_like(self) -> bool:
        return self.node.type in _FUNCTION_NODE_TYPES

    def is_identifier(self) -> bool:
        return self.node.type == "identifier"

    def is_export_assignment(self) -> bool:
        """`export default <expr>` or `export default <declaration>`; never `export =`."""
        return self.node.type == "export_statement" and self.has_token("default")

    def is_export_declaration(self) -> bool:
        """`export { a, b as c }`, with or without a `from` clause."""
        return (
            self.node.type == "export_statement"
            and self.first_child_of_type("export_clause") is not None
        )

    # -- Function accessors ---------------------------------------------------

    def parameters(self) -> List["SyntaxNode"]:
        """Declared parameters of a function-like node, in order."""
        params = self.field("parameters")
        if params is None:
            single = self.field("parameter")
            return [single] if single is not None else []
        return [p for p in params.named_children() if p.type in _PARAMETER_NODE_TYPES]

    def parameter_type_node(self) -> Optional["SyntaxNode"]:
        """The type node of a parameter's annotation, if any."""
        if self.type not in _PARAMETER_NODE_TYPES:
            return None
        annotation = self.field("type")
        return unwrap_annotation(annotation)

    def initializer(self) -> Optional["SyntaxNode"]:
        return self.field("value")

    # -- Call accessors -------------------------------------------------------

    def callee_name(self) -> Optional[str]:
        """Called name: a bare identifier or the tail of a property-access chain."""
        fn = self.field("function")
        if fn is None:
            return None
        if fn.type == "identifier":
            return fn.text
        if fn.type == "member_expression":
            prop = fn.field("property")
            return prop.text if prop is not None else None
        return None

    def call_arguments(self) -> List["SyntaxNode"]:
        args = self.field("arguments")
        if args is None or args.type != "arguments":
            return []
        return args.named_children()

    def type_arguments(self) -> List["SyntaxNode"]:
        targs = self.field("type_arguments")
        if targs is None:
            return []
        return targs.named_children()

    # -- Export accessors -----------------------------------------------------

    def export_value(self) -> Optional["SyntaxNode"]:
        """Expression or declaration carried by an `export default` statement."""
        return self.field("value") or self.field("declaration")

    def export_source(self) -> Optional[str]:
        """Module specifier of an `export ... from "<source>"` statement."""
        src = self.field("source")
        return string_value(src) if src is not None else None

    def export_specifiers(self) -> List["SyntaxNode"]:
        clause = self.first_child_of_type("export_clause")
        if clause is None:
            return []
        return [s for s in clause.named_children() if s.type == "export_specifier"]


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def unwrap_annotation(node: Optional[SyntaxNode]) -> Optional[SyntaxNode]:
    """Return the type node inside a `: T` annotation (or the node itself)."""
    if node is None:
        return None
    if node.type.endswith("annotation"):
        children = node.named_children()
        return children[0] if children else None
    return node


def specifier_names(specifier: SyntaxNode) -> Tuple[str, str]:
    """
    Return (local or imported name, exported name) of an export specifier.
    """
    name_node = specifier.field("name")
    alias_node = specifier.field("alias")
    name = _module_export_name(name_node)
    alias = _module_export_name(alias_node) if alias_node is not None else name
    return name, alias


def _module_export_name(node: Optional[SyntaxNode]) -> str:
    if node is None:
        return ""
    if node.type == "string":
        return string_value(node)
    return node.text


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "b": "\b", "f": "\f", "v": "\v"}


def string_value(node: SyntaxNode) -> str:
    """Decode a quoted string literal node into its raw value."""
    return unquote(node.text)


def unquote(text: str) -> str:
    """Strip one pair of surrounding quotes and decode simple escapes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`":
        text = text[1:-1]
    if "\\" not in text:
        return text

    out: List[str] = []
    it = iter(text)
    for ch in it:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(it, "")
        out.append(_ESCAPES.get(nxt, nxt))
    return "".join(out)
