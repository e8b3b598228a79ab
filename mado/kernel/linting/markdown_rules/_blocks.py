"""Small structural helpers shared by the block-level rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mado.kernel.linting.models import Position
from mado.kernel.syntax_tree import Node, NodeKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from mado.kernel.document import Document


def top_level(doc: Document, kind: NodeKind) -> Iterator[Node]:
    """Direct children of the document root of the given kind."""
    return (node for node in doc.ast.children() if node.kind == kind)


def of_kind(doc: Document, *kinds: NodeKind) -> Iterator[Node]:
    """Every node in the document of one of the given kinds, in document order."""
    return (node for node in doc.ast.descendants() if node.kind in kinds)


def directly_after(previous: Node | None, node: Node) -> bool:
    """True if ``node`` starts on the line right after ``previous`` ends."""
    if previous is None or previous.kind == NodeKind.FRONT_MATTER:
        return False
    return node.position.start.line == previous.position.end.line + 1


def line_span(doc: Document, lineno: int, start_column: int = 1) -> Position:
    """Position covering line ``lineno`` from ``start_column`` to its last character."""
    return Position.line(lineno, start_column, max(len(doc.line(lineno)), start_column))


def covered_lines(nodes: Iterable[Node]) -> set[int]:
    """Every line number spanned by any of ``nodes``."""
    lines: set[int] = set()
    for node in nodes:
        lines.update(range(node.position.start.line, node.position.end.line + 1))
    return lines
