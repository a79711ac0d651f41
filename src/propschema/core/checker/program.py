from __future__ import annotations

"""
Program and Source File Binding.

A Program owns every SourceFile parsed during one extraction pass. Each
SourceFile binds its top-level declarations, imports and exports once after
parsing; imported modules are loaded lazily on first lookup.

Module resolution covers relative specifiers, tsconfig `paths` and
`baseUrl`. Bare package specifiers (node_modules) are never resolved.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from propschema.core.checker.parser import parse_source
from propschema.core.checker.syntax import SyntaxNode, specifier_names, string_value
from propschema.core.checker.tsconfig import CompilerOptions
from propschema.domain.constants import RESOLVABLE_EXTENSIONS

logger = logging.getLogger(__name__)

_TYPE_DECLARATION_NODES = frozenset({
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
    "class_declaration",
    "abstract_class_declaration",
})

_VALUE_DECLARATION_NODES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "enum_declaration",
})


@dataclass(frozen=True)
class ImportBinding:
    """Local name bound by an import: `specifier` module, `imported` export name."""
    specifier: str
    imported: str


@dataclass(frozen=True)
class ExportBinding:
    """
    Exported name of a module.

    `source` is None for local exports (`local` is the local name) and the
    module specifier for re-exports (`local` is the name in that module).
    """
    local: str
    source: Optional[str] = None


# -----------------------------------------------------------------------------
# SOURCE FILE
# -----------------------------------------------------------------------------

class SourceFile:
    """
    Parsed and bound TypeScript source file.

    Attributes:
        path: Absolute file path.
        root: Root syntax node.
        type_decls: Type-level declarations by name (interfaces may merge).
        value_decls: Value-level declarations by name.
        imports: Named and default imports by local name.
        namespaces: `import * as X` bindings, local name to specifier.
        exports: Exported names (including `default` via export clauses).
        star_exports: Specifiers of `export * from "..."` statements.
        default_export: The `export default ...` statement, if any.
    """

    def __init__(self, path: str, source: bytes) -> None:
        self.path = path
        self.root = SyntaxNode(parse_source(source, path).root_node, self)
        self.type_decls: Dict[str, List[SyntaxNode]] = {}
        self.value_decls: Dict[str, SyntaxNode] = {}
        self.imports: Dict[str, ImportBinding] = {}
        self.namespaces: Dict[str, str] = {}
        self.exports: Dict[str, ExportBinding] = {}
        self.star_exports: List[str] = []
        self.default_export: Optional[SyntaxNode] = None
        self._bind()

    def __repr__(self) -> str:
        return f"SourceFile({self.path!r})"

    def statements(self) -> List[SyntaxNode]:
        return self.root.named_children()

    # -- Binder -----------------------------------------------------------------

    def _bind(self) -> None:
        for stmt in self.statements():
            if stmt.type == "import_statement":
                self._bind_import(stmt)
            elif stmt.type == "export_statement":
                self._bind_export(stmt)
            else:
                self._bind_declaration(stmt)

    def _bind_declaration(self, node: SyntaxNode) -> List[str]:
        """Bind a top-level declaration and return the names it declares."""
        if node.type == "ambient_declaration":
            inner = [c for c in node.named_children() if c.type != "statement_block"]
            return self._bind_declaration(inner[0]) if inner else []

        names: List[str] = []
        if node.type in _TYPE_DECLARATION_NODES or node.type in _VALUE_DECLARATION_NODES:
            name_node = node.field("name")
            if name_node is None:
                return names
            name = name_node.text
            if node.type in _TYPE_DECLARATION_NODES:
                self.type_decls.setdefault(name, []).append(node)
            if node.type in _VALUE_DECLARATION_NODES:
                self.value_decls.setdefault(name, node)
            names.append(name)
        elif node.type in ("lexical_declaration", "variable_declaration"):
            for declarator in node.children_of_type("variable_declarator"):
                name_node = declarator.field("name")
                if name_node is not None and name_node.type == "identifier":
                    self.value_decls[name_node.text] = declarator
                    names.append(name_node.text)
        return names

    def _bind_import(self, stmt: SyntaxNode) -> None:
        source = stmt.field("source")
        if source is None:
            return
        specifier = string_value(source)
        clause = stmt.first_child_of_type("import_clause")
        if clause is None:
            return

        for part in clause.named_children():
            if part.type == "identifier":
                self.imports[part.text] = ImportBinding(specifier, "default")
            elif part.type == "namespace_import":
                ident = part.first_child_of_type("identifier")
                if ident is not None:
                    self.namespaces[ident.text] = specifier
            elif part.type == "named_imports":
                for spec in part.children_of_type("import_specifier"):
                    imported, local = specifier_names(spec)
                    self.imports[local] = ImportBinding(specifier, imported)

    def _bind_export(self, stmt: SyntaxNode) -> None:
        if stmt.is_export_assignment():
            if self.default_export is None:
                self.default_export = stmt
            declaration = stmt.field("declaration")
            if declaration is not None:
                self._bind_declaration(declaration)
            return

        declaration = stmt.field("declaration")
        if declaration is not None:
            for name in self._bind_declaration(declaration):
                self.exports[name] = ExportBinding(name)
            return

        source = stmt.export_source()
        specifiers = stmt.export_specifiers()
        if specifiers:
            for spec in specifiers:
                local, exported = specifier_names(spec)
                self.exports[exported] = ExportBinding(local, source)
        elif source is not None and stmt.first_child_of_type("namespace_export") is None:
            # export * from "./x"
            self.star_exports.append(source)


# -----------------------------------------------------------------------------
# PROGRAM
# -----------------------------------------------------------------------------

class Program:
    """
    Collection of source files sharing one set of compiler options.

    Args:
        options: Resolution options loaded from tsconfig (None for defaults).
    """

    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options
        self._files: Dict[str, SourceFile] = {}
        self._missing: Set[str] = set()

    def get_source_file(self, path: str) -> Optional[SourceFile]:
        """Return the bound SourceFile for a path, parsing it on first access."""
        abs_path = os.path.abspath(path)
        cached = self._files.get(abs_path)
        if cached is not None:
            return cached
        if abs_path in self._missing:
            return None
        try:
            with open(abs_path, "rb") as f:
                source = f.read()
        except OSError as e:
            logger.debug(f"Cannot read source file {abs_path}: {e}")
            self._missing.add(abs_path)
            return None

        sf = SourceFile(abs_path, source)
        self._files[abs_path] = sf
        return sf

    # -- Module resolution ------------------------------------------------------

    def resolve_module(self, from_file: SourceFile, specifier: str) -> Optional[SourceFile]:
        """
        Resolve an import specifier relative to the importing file.

        Args:
            from_file: The importing SourceFile.
            specifier: Module specifier as written.

        Returns:
            Optional[SourceFile]: Target file, or None when unresolvable.
        """
        for candidate in self._candidate_paths(from_file.path, specifier):
            resolved = _probe(candidate)
            if resolved is not None:
                return self.get_source_file(resolved)
        return None

    def _candidate_paths(self, from_path: str, specifier: str) -> List[str]:
        if specifier.startswith("./") or specifier.startswith("../") or specifier in (".", ".."):
            return [os.path.normpath(os.path.join(os.path.dirname(from_path), specifier))]
        if os.path.isabs(specifier):
            return [specifier]

        candidates: List[str] = []
        if self.options is not None:
            candidates.extend(_match_paths(self.options.paths, specifier))
            if self.options.base_url:
                candidates.append(os.path.join(self.options.base_url, specifier))
        return candidates


def _match_paths(paths: Dict[str, List[str]], specifier: str) -> List[str]:
    """Expand tsconfig `paths` patterns matching a specifier, most specific first."""
    def sort_key(item: Tuple[str, List[str]]) -> Tuple[int, int]:
        pattern = item[0]
        return (pattern.count("*"), -len(pattern))

    out: List[str] = []
    for pattern, targets in sorted(paths.items(), key=sort_key):
        if "*" in pattern:
            regex = "^" + re.escape(pattern).replace(r"\*", "(.*)", 1) + "$"
            m = re.match(regex, specifier)
            if not m:
                continue
            out.extend(t.replace("*", m.group(1), 1) for t in targets)
        elif pattern == specifier:
            out.extend(targets)
    return out


def _probe(base: str) -> Optional[str]:
    """Try the base path as a file, with each extension, then as a directory index."""
    if os.path.isfile(base) and base.endswith(RESOLVABLE_EXTENSIONS):
        return base
    for ext in RESOLVABLE_EXTENSIONS:
        if os.path.isfile(base + ext):
            return base + ext
    for ext in RESOLVABLE_EXTENSIONS:
        index = os.path.join(base, "index" + ext)
        if os.path.isfile(index):
            return index
    return None
