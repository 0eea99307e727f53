"""
Java source parsing backed by tree-sitter.

The rest of the analysis never touches tree-sitter nodes: it talks to the
read-only SyntaxTree protocol, which answers "which simple names are
referenced in this way" queries. JavaSyntaxTree implements the protocol by
indexing a tree-sitter parse tree in a single pass.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple, Union

import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser, Tree

from importlens.exceptions import ParseError

from .models import WILDCARD, ImportDeclaration

logger = logging.getLogger(__name__)

JAVA_LANGUAGE = Language(tsjava.language())

# (parent type, field) pairs and parent types under which an `identifier`
# names something instead of referring to it.
_NON_REFERENCE_FIELDS = {"name", "field", "key", "parameters"}
_NON_REFERENCE_PARENTS = {
    "scoped_identifier",
    "import_declaration",
    "package_declaration",
    "inferred_parameters",
    "labeled_statement",
    "break_statement",
    "continue_statement",
}
_ANNOTATION_TYPES = {"marker_annotation", "annotation"}


class SyntaxTree(Protocol):
    """Read-only queries over a parsed compilation unit."""

    def imports(self) -> Sequence[ImportDeclaration]:
        """Declared imports, in source order."""
        ...

    def name_references(self) -> Sequence[str]:
        """Bare (unqualified) names used as expressions."""
        ...

    def type_references(self) -> Sequence[str]:
        """Simple names of every referenced class or interface type."""
        ...

    def annotation_references(self) -> Sequence[str]:
        """Simple names of every annotation usage."""
        ...

    def method_call_names(self) -> Sequence[str]:
        """Simple names of every invoked method."""
        ...

    def field_access_names(self) -> Sequence[str]:
        """Simple names of every member accessed through a qualifier."""
        ...


def _node_text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def _iter_nodes(tree: Tree) -> Iterator[Tuple[Node, Optional[str]]]:
    """Pre-order walk yielding each node with the field name it occupies."""
    cursor = tree.walk()
    visited_children = False
    while True:
        if not visited_children:
            yield cursor.node, cursor.field_name
            if not cursor.goto_first_child():
                visited_children = True
        elif cursor.goto_next_sibling():
            visited_children = False
        elif not cursor.goto_parent():
            break


def _last_identifier(name_node: Node) -> str:
    """Simple name of an `identifier` or `scoped_identifier` node."""
    if name_node.type == "scoped_identifier":
        inner = name_node.child_by_field_name("name")
        if inner is not None:
            return _node_text(inner)
    return _node_text(name_node).rsplit(".", 1)[-1].strip()


def _first_error_line(tree: Tree) -> Optional[int]:
    for node, _ in _iter_nodes(tree):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
    return None


class JavaSyntaxTree:
    """SyntaxTree implementation over a tree-sitter Java parse tree."""

    def __init__(self, tree: Tree):
        self._imports: List[ImportDeclaration] = []
        self._names: List[str] = []
        self._types: List[str] = []
        self._annotations: List[str] = []
        self._method_calls: List[str] = []
        self._field_accesses: List[str] = []
        self._index(tree)

    def _index(self, tree: Tree) -> None:
        for node, field_name in _iter_nodes(tree):
            node_type = node.type
            if node_type == "import_declaration":
                self._imports.append(self._import_from_node(node))
            elif node_type == "identifier":
                if self._is_name_reference(node, field_name):
                    self._names.append(_node_text(node))
            elif node_type == "type_identifier":
                parent = node.parent
                if parent is None or parent.type != "type_parameter":
                    self._types.append(_node_text(node))
            elif node_type in _ANNOTATION_TYPES:
                name_node = node.child_by_field_name("name")
                if name_node is not None:
                    self._annotations.append(_last_identifier(name_node))
            elif node_type == "method_invocation":
                name_node = node.child_by_field_name("name")
                if name_node is not None:
                    self._method_calls.append(_node_text(name_node))
            elif node_type == "field_access":
                member = node.child_by_field_name("field")
                if member is not None and member.type == "identifier":
                    self._field_accesses.append(_node_text(member))

    @staticmethod
    def _is_name_reference(node: Node, field_name: Optional[str]) -> bool:
        if field_name in _NON_REFERENCE_FIELDS:
            return False
        parent = node.parent
        if parent is None:
            return True
        if parent.type == "method_reference":
            # `Owner::member`: only the owner is a reference.
            previous = node.prev_sibling
            return previous is None or previous.type != "::"
        return parent.type not in _NON_REFERENCE_PARENTS

    @staticmethod
    def _import_from_node(node: Node) -> ImportDeclaration:
        is_static = False
        is_wildcard = False
        name = ""
        for child in node.children:
            if child.type == "static":
                is_static = True
            elif child.type in ("identifier", "scoped_identifier"):
                name = _node_text(child)
            elif child.type == "asterisk":
                is_wildcard = True
        name = "".join(name.split())
        if is_wildcard:
            name = f"{name}.{WILDCARD}" if name else WILDCARD
        return ImportDeclaration(
            qualified_name=name,
            is_static=is_static,
            line=node.start_point[0] + 1,
        )

    def imports(self) -> Sequence[ImportDeclaration]:
        return tuple(self._imports)

    def name_references(self) -> Sequence[str]:
        return tuple(self._names)

    def type_references(self) -> Sequence[str]:
        return tuple(self._types)

    def annotation_references(self) -> Sequence[str]:
        return tuple(self._annotations)

    def method_call_names(self) -> Sequence[str]:
        return tuple(self._method_calls)

    def field_access_names(self) -> Sequence[str]:
        return tuple(self._field_accesses)


class JavaSourceParser:
    """
    Parses Java source into a JavaSyntaxTree.

    tree-sitter recovers from syntax errors instead of failing; any error or
    missing node in the result is reported as a ParseError so that malformed
    files are dropped rather than half-analyzed.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read_source(self, file_path: Union[str, Path]) -> str:
        """Read a file strictly; decoding problems raise UnicodeDecodeError."""
        return Path(file_path).read_bytes().decode(self.encoding)

    def parse(self, source: str, file_path: Union[str, Path] = "<string>") -> JavaSyntaxTree:
        # Parser instances are not shared between threads.
        parser = Parser(JAVA_LANGUAGE)
        tree = parser.parse(source.encode(self.encoding))
        if tree.root_node.has_error:
            line = _first_error_line(tree)
            raise ParseError(file_path, "malformed Java source", line_number=line)
        logger.debug(f"Parsed {file_path}")
        return JavaSyntaxTree(tree)

    def parse_file(self, file_path: Union[str, Path]) -> JavaSyntaxTree:
        return self.parse(self.read_source(file_path), file_path)
