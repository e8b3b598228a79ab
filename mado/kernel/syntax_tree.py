"""Arena-backed Markdown syntax tree.

markdown-it-py produces a flat token stream where block tokens only know
their line range. ``SyntaxTree.from_tokens`` folds that stream into an arena
of ``Node`` records addressed by index. Parent, child and sibling links are
stored as indices so the tree has no reference cycles. Columns are recovered
from the source lines while the tree is built.

The tree is never modified once ``from_tokens`` returns.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING

from mado.kernel.linting.models import Point, Position

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from markdown_it.token import Token


class NodeKind(StrEnum):
    """Kinds of nodes in the syntax tree."""

    DOCUMENT = "document"
    FRONT_MATTER = "front_matter"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BLOCK_QUOTE = "block_quote"
    BULLET_LIST = "bullet_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    HTML_BLOCK = "html_block"
    THEMATIC_BREAK = "thematic_break"
    TABLE = "table"
    TEXT = "text"
    CODE = "code"
    HTML_INLINE = "html_inline"
    LINK = "link"
    IMAGE = "image"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"
    SOFTBREAK = "softbreak"
    HARDBREAK = "hardbreak"


LIST_KINDS = frozenset({NodeKind.BULLET_LIST, NodeKind.ORDERED_LIST})

_OPEN_KINDS = {
    "heading_open": NodeKind.HEADING,
    "paragraph_open": NodeKind.PARAGRAPH,
    "blockquote_open": NodeKind.BLOCK_QUOTE,
    "bullet_list_open": NodeKind.BULLET_LIST,
    "ordered_list_open": NodeKind.ORDERED_LIST,
    "list_item_open": NodeKind.LIST_ITEM,
}

_LEAF_KINDS = {
    "fence": NodeKind.CODE_BLOCK,
    "code_block": NodeKind.CODE_BLOCK,
    "html_block": NodeKind.HTML_BLOCK,
    "hr": NodeKind.THEMATIC_BREAK,
    "front_matter": NodeKind.FRONT_MATTER,
}

_SPAN_KINDS = {
    "em": NodeKind.EMPHASIS,
    "strong": NodeKind.STRONG,
    "s": NodeKind.STRIKETHROUGH,
}


@dataclass(slots=True)
class Node:
    """One node of the syntax tree.

    Attributes
    ----------
    index : int
        Position of the node in the arena
    kind : NodeKind
        What the node represents
    position : Position
        1-indexed inclusive source span
    level : int
        Heading level (1-6)
    markup : str
        Marker characters (``#``/``=``/``-`` for headings, list bullet or
        ordered delimiter, fence string, emphasis marker, ``autolink``)
    info : str
        Fence info string or the literal ordinal of an ordered list item
    content : str
        Literal payload (text, code, HTML, link destination)
    raw : str
        Source text between code span backticks
    setext : bool
        Heading uses an underline
    fenced : bool
        Code block is delimited by a fence
    number : int | None
        Parsed ordinal of an ordered list item
    """

    index: int
    kind: NodeKind
    position: Position
    parent: int | None = None
    first_child: int | None = None
    last_child: int | None = None
    previous_sibling: int | None = None
    next_sibling: int | None = None
    level: int = 0
    markup: str = ""
    info: str = ""
    content: str = ""
    raw: str = ""
    setext: bool = False
    fenced: bool = False
    number: int | None = None

    @property
    def is_list(self) -> bool:
        return self.kind in LIST_KINDS


class SyntaxTree:
    """Read-only arena of nodes with index-based structural links."""

    __slots__ = ("_nodes",)

    def __init__(self, nodes: list[Node]) -> None:
        if not nodes or nodes[0].kind != NodeKind.DOCUMENT:
            raise ValueError("A syntax tree needs a document root at index 0")
        self._nodes = nodes

    @classmethod
    def from_tokens(cls, tokens: Sequence[Token], lines: Sequence[str]) -> SyntaxTree:
        """Build the arena from a markdown-it token stream and the source lines."""
        return cls(_TreeBuilder(lines).build(tokens))

    @property
    def root(self) -> Node:
        return self._nodes[0]

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __iter__(self) -> Iterator[Node]:
        """Iterate every node in document (pre-)order."""
        return iter(self._nodes)

    def _get(self, index: int | None) -> Node | None:
        return None if index is None else self._nodes[index]

    def parent(self, node: Node) -> Node | None:
        return self._get(node.parent)

    def first_child(self, node: Node | None = None) -> Node | None:
        return self._get((node or self.root).first_child)

    def last_child(self, node: Node | None = None) -> Node | None:
        return self._get((node or self.root).last_child)

    def previous_sibling(self, node: Node) -> Node | None:
        return self._get(node.previous_sibling)

    def next_sibling(self, node: Node) -> Node | None:
        return self._get(node.next_sibling)

    def children(self, node: Node | None = None) -> Iterator[Node]:
        """Direct children of ``node`` (the root when omitted)."""
        current = self._get((node or self.root).first_child)
        while current is not None:
            yield current
            current = self._get(current.next_sibling)

    def descendants(self, node: Node | None = None) -> Iterator[Node]:
        """All nodes below ``node`` in pre-order, excluding ``node`` itself."""
        stack = list(self.children(node))
        stack.reverse()
        while stack:
            current = stack.pop()
            yield current
            children = list(self.children(current))
            children.reverse()
            stack.extend(children)

    def ancestors(self, node: Node) -> Iterator[Node]:
        """Parents of ``node`` from the nearest up to the root."""
        current = self._get(node.parent)
        while current is not None:
            yield current
            current = self._get(current.parent)

    def inline_text(self, node: Node) -> str:
        """Concatenated plain text of every text and code descendant."""
        parts = []
        for child in self.descendants(node):
            if child.kind in (NodeKind.TEXT, NodeKind.CODE, NodeKind.HTML_INLINE):
                parts.append(child.content)
            elif child.kind in (NodeKind.SOFTBREAK, NodeKind.HARDBREAK):
                parts.append(" ")
        return "".join(parts)


def _skip_spaces(line: str, start: int) -> int:
    index = min(start, len(line))
    while index < len(line) and line[index] in " \t":
        index += 1
    return index


def _matching_paren(line: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(line)):
        char = line[index]
        if char == "\\":
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    return len(line) - 1


class _Cursor:
    __slots__ = ("column", "line")

    def __init__(self, line: int, column: int) -> None:
        self.line = line
        self.column = column


class _TreeBuilder:
    """Folds block and inline tokens into a node arena."""

    def __init__(self, lines: Sequence[str]) -> None:
        self._lines = lines
        self._nodes: list[Node] = []
        last = len(lines)
        self._add(
            NodeKind.DOCUMENT,
            Position.of(1, 1, max(last, 1), max(len(lines[-1]), 1) if lines else 1),
            parent=None,
        )

    def _line(self, index: int) -> str:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return ""

    def _add(self, kind: NodeKind, position: Position, parent: int | None, **payload) -> Node:
        node = Node(index=len(self._nodes), kind=kind, position=position, parent=parent, **payload)
        self._nodes.append(node)
        if parent is not None:
            owner = self._nodes[parent]
            if owner.last_child is None:
                owner.first_child = node.index
            else:
                self._nodes[owner.last_child].next_sibling = node.index
                node.previous_sibling = owner.last_child
            owner.last_child = node.index
        return node

    def build(self, tokens: Sequence[Token]) -> list[Node]:
        # (node index, column where that container's content starts)
        stack: list[tuple[int, int]] = [(0, 0)]
        index = 0
        while index < len(tokens):
            token = tokens[index]
            parent, base = stack[-1]

            if token.type == "table_open":
                start, position = self._span(token, base)
                self._add(NodeKind.TABLE, position, parent)
                index = self._skip_table(tokens, index)
                continue

            if token.nesting == 1:
                kind = _OPEN_KINDS.get(token.type)
                if kind is None:
                    stack.append((parent, base))
                else:
                    stack.append(self._open_block(kind, token, parent, base))
            elif token.nesting == -1:
                stack.pop()
            elif token.type == "inline":
                self._build_inline(token, parent, base)
            elif token.type in _LEAF_KINDS:
                self._leaf_block(token, parent, base)
            index += 1

        return self._nodes

    @staticmethod
    def _skip_table(tokens: Sequence[Token], index: int) -> int:
        depth = 0
        while index < len(tokens):
            if tokens[index].type == "table_open":
                depth += 1
            elif tokens[index].type == "table_close":
                depth -= 1
                if depth == 0:
                    return index + 1
            index += 1
        return index

    def _span(self, token: Token, base: int) -> tuple[int, Position]:
        """First content column and span of a block token, minus trailing blank lines."""
        begin, end = token.map if token.map else (0, 1)
        start = _skip_spaces(self._line(begin), base)
        last = max(end - 1, begin)
        while last > begin and not self._line(last).strip():
            last -= 1
        end_column = max(len(self._line(last)), 1)
        return start, Position.of(begin + 1, start + 1, last + 1, end_column)

    def _open_block(
        self, kind: NodeKind, token: Token, parent: int, base: int
    ) -> tuple[int, int]:
        start, position = self._span(token, base)
        line = self._line(token.map[0]) if token.map else ""

        if kind == NodeKind.BLOCK_QUOTE:
            content = start + 1 if line[start : start + 1] == ">" else start
            if line[content : content + 1] == " ":
                content += 1
            node = self._add(kind, position, parent)
            return node.index, content

        if kind in LIST_KINDS:
            node = self._add(kind, position, parent, markup=token.markup)
            return node.index, base

        if kind == NodeKind.LIST_ITEM:
            marker = len(token.info) + len(token.markup)
            after = start + marker
            spaces = _skip_spaces(line, after) - after
            content = after + (1 if spaces == 0 or spaces > 4 else spaces)
            number = int(token.info) if token.info.isdigit() else None
            node = self._add(
                kind, position, parent, markup=token.markup, info=token.info, number=number
            )
            return node.index, content

        if kind == NodeKind.HEADING:
            setext = token.markup in ("=", "-")
            level = int(token.tag[1:])
            content = start if setext else _skip_spaces(line, start + level)
            node = self._add(
                kind, position, parent, level=level, markup=token.markup, setext=setext
            )
            return node.index, content

        node = self._add(kind, position, parent)
        return node.index, start

    def _leaf_block(self, token: Token, parent: int, base: int) -> None:
        kind = _LEAF_KINDS[token.type]
        _, position = self._span(token, base)
        self._add(
            kind,
            position,
            parent,
            markup=token.markup,
            info=token.info.strip(),
            content=token.content,
            fenced=token.type == "fence",
        )

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _find(self, needle: str, cursor: _Cursor) -> int:
        line = self._line(cursor.line)
        found = line.find(needle, cursor.column)
        return found if found >= 0 else min(cursor.column, len(line))

    def _point(self, cursor: _Cursor, column: int) -> Point:
        return Point(cursor.line + 1, column + 1)

    def _close(self, index: int, cursor: _Cursor, end_column: int) -> None:
        node = self._nodes[index]
        node.position = replace(node.position, end=self._point(cursor, end_column))

    def _build_inline(self, token: Token, parent: int, base: int) -> None:
        if not token.children or not token.map:
            return

        cursor = _Cursor(token.map[0], _skip_spaces(self._line(token.map[0]), base))
        stack = [parent]

        for child in token.children:
            kind_name = child.type
            owner = stack[-1]

            if kind_name == "text":
                if not child.content:
                    continue
                start = self._find(child.content, cursor)
                end = start + len(child.content) - 1
                self._add(
                    NodeKind.TEXT,
                    Position(self._point(cursor, start), self._point(cursor, end)),
                    owner,
                    content=child.content,
                )
                cursor.column = end + 1

            elif kind_name in ("softbreak", "hardbreak"):
                kind = NodeKind.SOFTBREAK if kind_name == "softbreak" else NodeKind.HARDBREAK
                at = self._point(cursor, cursor.column)
                self._add(kind, Position(at, at), owner)
                cursor.line += 1
                cursor.column = _skip_spaces(self._line(cursor.line), base)

            elif kind_name == "code_inline":
                line = self._line(cursor.line)
                start = self._find(child.markup, cursor)
                inner = start + len(child.markup)
                close = line.find(child.markup, inner)
                if close < 0:
                    raw, end = line[inner:], max(len(line) - 1, start)
                else:
                    raw, end = line[inner:close], close + len(child.markup) - 1
                self._add(
                    NodeKind.CODE,
                    Position(self._point(cursor, start), self._point(cursor, end)),
                    owner,
                    markup=child.markup,
                    content=child.content,
                    raw=raw,
                )
                cursor.column = end + 1

            elif kind_name == "html_inline":
                start = self._find(child.content, cursor)
                end = start + len(child.content) - 1
                self._add(
                    NodeKind.HTML_INLINE,
                    Position(self._point(cursor, start), self._point(cursor, end)),
                    owner,
                    content=child.content,
                )
                cursor.column = end + 1

            elif kind_name == "link_open":
                start = self._find("<" if child.markup == "autolink" else "[", cursor)
                at = self._point(cursor, start)
                node = self._add(
                    NodeKind.LINK,
                    Position(at, at),
                    owner,
                    markup=child.markup,
                    content=str(child.attrGet("href") or ""),
                )
                stack.append(node.index)
                cursor.column = start + 1

            elif kind_name == "link_close":
                link = stack.pop() if len(stack) > 1 else owner
                end = self._link_end(cursor, autolink=child.markup == "autolink")
                self._close(link, cursor, end)
                cursor.column = end + 1

            elif kind_name == "image":
                start = self._find("![", cursor)
                cursor.column = start + 2
                end = self._link_end(cursor, autolink=False)
                self._add(
                    NodeKind.IMAGE,
                    Position(self._point(cursor, start), self._point(cursor, end)),
                    owner,
                    content=child.content,
                )
                cursor.column = end + 1

            elif kind_name.endswith("_open") and kind_name[:-5] in _SPAN_KINDS:
                start = self._find(child.markup, cursor)
                at = self._point(cursor, start)
                node = self._add(_SPAN_KINDS[kind_name[:-5]], Position(at, at), owner, markup=child.markup)
                stack.append(node.index)
                cursor.column = start + len(child.markup)

            elif kind_name.endswith("_close") and kind_name[:-6] in _SPAN_KINDS:
                span = stack.pop() if len(stack) > 1 else owner
                start = self._find(child.markup, cursor)
                end = start + len(child.markup) - 1
                self._close(span, cursor, end)
                cursor.column = end + 1

    def _link_end(self, cursor: _Cursor, *, autolink: bool) -> int:
        line = self._line(cursor.line)
        if autolink:
            return self._find(">", cursor)
        close = self._find("]", cursor)
        following = line[close + 1 : close + 2]
        if following == "(":
            return _matching_paren(line, close + 1)
        if following == "[":
            reference_end = line.find("]", close + 2)
            return reference_end if reference_end >= 0 else close
        return close
