from __future__ import annotations

"""
Component Locator.

Finds the props type of the entity a module exports as its component,
whether it is a plain function, an arrow function bound to a variable, a
`memo` / `forwardRef` wrapper or an identifier imported from elsewhere.
"""

import logging
from typing import Callable, Dict, Optional

from propschema.core.checker.checker import TypeChecker
from propschema.core.checker.syntax import NodeKind, SyntaxNode
from propschema.core.checker.types import Type
from propschema.domain.constants import FORWARD_REF_CALLEE, MEMO_CALLEE

logger = logging.getLogger(__name__)

# Bound on declaration hops (identifier chains, nested wrappers)
MAX_LOCATE_DEPTH = 32

_Locator = Callable[[TypeChecker, SyntaxNode, int], Optional[Type]]


def locate_props_type(checker: TypeChecker, node: Optional[SyntaxNode]) -> Optional[Type]:
    """
    Resolve the props type of a component declaration or expression.

    Args:
        checker: Type-checking service.
        node: Exported declaration or expression.

    Returns:
        Optional[Type]: The props type, or None when none can be found.
    """
    return _locate(checker, node, 0)


def _locate(checker: TypeChecker, node: Optional[SyntaxNode], depth: int) -> Optional[Type]:
    if node is None:
        return None
    if depth > MAX_LOCATE_DEPTH:
        logger.debug(f"Giving up locating props at {node!r}: declaration chain too deep")
        return None
    handler = _HANDLERS.get(node.kind())
    if handler is None:
        return None
    return handler(checker, node, depth)


# -----------------------------------------------------------------------------
# NODE KIND HANDLERS
# -----------------------------------------------------------------------------

def _from_function(checker: TypeChecker, node: SyntaxNode, depth: int) -> Optional[Type]:
    params = node.parameters()
    if not params:
        return None
    type_node = params[0].parameter_type_node()
    if type_node is None:
        return None
    return checker.get_type_at_location(type_node)


def _from_variable(checker: TypeChecker, node: SyntaxNode, depth: int) -> Optional[Type]:
    return _locate(checker, node.initializer(), depth + 1)


def _from_call(checker: TypeChecker, node: SyntaxNode, depth: int) -> Optional[Type]:
    callee = node.callee_name()
    args = node.call_arguments()
    first_arg = args[0] if args else None

    if callee == MEMO_CALLEE:
        return _locate(checker, first_arg, depth + 1)
    if callee == FORWARD_REF_CALLEE:
        type_args = node.type_arguments()
        if len(type_args) >= 2:
            return checker.get_type_at_location(type_args[1])
        return _locate(checker, first_arg, depth + 1)
    return None


def _from_identifier(checker: TypeChecker, node: SyntaxNode, depth: int) -> Optional[Type]:
    symbol = checker.get_symbol_at_location(node)
    if symbol is None:
        return None
    return _locate(checker, symbol.declaration, depth + 1)


_HANDLERS: Dict[NodeKind, _Locator] = {
    NodeKind.FUNCTION: _from_function,
    NodeKind.VARIABLE: _from_variable,
    NodeKind.CALL: _from_call,
    NodeKind.IDENTIFIER: _from_identifier,
}
