from __future__ import annotations

"""
Tree-sitter Parser Factory.

Selects the TSX or plain TypeScript grammar from the file name and parses
raw source bytes. Syntax errors never raise: tree-sitter produces ERROR
nodes that the binder simply does not recognise.
"""

from functools import lru_cache

import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree

TSX_DIALECT = "tsx"
TS_DIALECT = "typescript"


def dialect_for(path: str) -> str:
    """Return the grammar dialect for a source path."""
    return TSX_DIALECT if path.lower().endswith(".tsx") else TS_DIALECT


@lru_cache(maxsize=None)
def _language(dialect: str) -> Language:
    if dialect == TSX_DIALECT:
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_typescript.language_typescript())


def parse_source(source: bytes, path: str) -> Tree:
    """
    Parse a TypeScript or TSX source buffer.

    Args:
        source: Raw file content.
        path: File path, used only to pick the dialect.

    Returns:
        Tree: The concrete syntax tree.
    """
    parser = Parser(_language(dialect_for(path)))
    return parser.parse(source)
