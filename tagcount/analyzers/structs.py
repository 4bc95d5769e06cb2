"""Tree-sitter powered struct declaration counter."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_parser

from ..logging import get_logger
from ..models import Counts

_LANGUAGE = "go"


def walk(node: Node, visit: Callable[[Node], bool]) -> None:
    """Visit ``node`` and its descendants in pre-order.

    Children are only visited when ``visit`` returns True for their parent.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if visit(current):
            stack.extend(reversed(current.children))


class StructCounter:
    """Counts non-empty struct types and those with at least one field tag."""

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None
        self.logger = get_logger("structs")

    def count(self, path: Path) -> Counts:
        try:
            source = Path(path).read_bytes()
        except OSError as exc:
            self.logger.debug("Skipping unreadable file %s: %s", path, exc)
            return Counts()
        counts = self.count_source(source)
        self.logger.debug("%s: %d structs, %d tagged", path, counts.total, counts.tagged)
        return counts

    def count_source(self, source: bytes) -> Counts:
        if not _is_valid_source(source):
            return Counts()
        tree = self._get_parser().parse(source)
        if tree.root_node.has_error:
            return Counts()

        total = 0
        tagged = 0

        def visit(node: Node) -> bool:
            nonlocal total, tagged
            if node.type == "struct_type":
                fields = _fields(node)
                # Skip struct{}.
                if fields:
                    total += 1
                    if any(field.child_by_field_name("tag") is not None for field in fields):
                        tagged += 1
            return True

        walk(tree.root_node, visit)
        return Counts(total=total, tagged=tagged)

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = get_parser(_LANGUAGE)
        return self._parser


def _is_valid_source(source: bytes) -> bool:
    # The Go scanner rejects invalid UTF-8 and NUL bytes anywhere in a file.
    if b"\x00" in source:
        return False
    try:
        source.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def _fields(struct_node: Node) -> list[Node]:
    for child in struct_node.named_children:
        if child.type == "field_declaration_list":
            return [field for field in child.named_children if field.type == "field_declaration"]
    return []


__all__ = ["StructCounter", "walk"]
