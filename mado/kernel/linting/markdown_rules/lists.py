"""List rules: markers, indentation, numbering and spacing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mado.kernel.config.models import ListStyle, OrderedListStyle
from mado.kernel.linting.markdown_rules._blocks import directly_after, of_kind
from mado.kernel.linting.models import Position, RuleMetadata, Tag, Violation
from mado.kernel.linting.rules import RuleBase
from mado.kernel.syntax_tree import LIST_KINDS, Node, NodeKind

if TYPE_CHECKING:
    from mado.kernel.config.models import LintConfig
    from mado.kernel.document import Document
    from mado.kernel.syntax_tree import SyntaxTree

_MARKERS = {
    ListStyle.ASTERISK: "*",
    ListStyle.PLUS: "+",
    ListStyle.DASH: "-",
}


def _enclosing_lists(tree: SyntaxTree, item: Node) -> list[Node]:
    """Lists containing ``item``, nearest first."""
    return [node for node in tree.ancestors(item) if node.kind in LIST_KINDS]


def _items(doc: Document) -> list[Node]:
    return list(of_kind(doc, NodeKind.LIST_ITEM))


class UlStyleRule(RuleBase):
    """MD004: Unordered list style.

    ``sublist`` keeps one marker per nesting depth and requires it to differ
    from the marker of the parent list.
    """

    metadata = RuleMetadata(
        name="MD004",
        description="Unordered list style",
        tags=(Tag.BULLET, Tag.UL),
        aliases=("ul-style",),
    )

    def __init__(self, style: ListStyle = ListStyle.CONSISTENT) -> None:
        self.style = style

    @classmethod
    def from_config(cls, config: LintConfig) -> UlStyleRule:
        return cls(config.md004.style)

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        first_marker: str | None = None
        depth_markers: dict[int, str] = {}

        for item in _items(doc):
            lists = _enclosing_lists(doc.ast, item)
            if lists[0].kind != NodeKind.BULLET_LIST:
                continue
            marker = item.markup

            if self.style == ListStyle.CONSISTENT:
                first_marker = first_marker or marker
                violated = marker != first_marker
            elif self.style == ListStyle.SUBLIST:
                depth = len(lists) - 1
                expected = depth_markers.setdefault(depth, marker)
                parent_bullets = [node for node in lists[1:] if node.kind == NodeKind.BULLET_LIST]
                violated = marker != expected or (
                    bool(parent_bullets) and parent_bullets[0].markup == marker
                )
            else:
                violated = marker != _MARKERS[self.style]

            if violated:
                violations.append(self.to_violation(doc.path, item.position))
        return violations


class ListIndentRule(RuleBase):
    """MD005: Inconsistent indentation for list items at the same level."""

    metadata = RuleMetadata(
        name="MD005",
        description="Inconsistent indentation for list items at the same level",
        tags=(Tag.BULLET, Tag.UL, Tag.INDENTATION),
        aliases=("list-indent",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        columns: dict[int, int] = {}
        for item in _items(doc):
            depth = len(_enclosing_lists(doc.ast, item)) - 1
            expected = columns.setdefault(depth, item.position.start.column)
            if item.position.start.column != expected:
                violations.append(self.to_violation(doc.path, item.position))
        return violations


class UlStartLeftRule(RuleBase):
    """MD006: Consider starting bulleted lists at the beginning of the line."""

    metadata = RuleMetadata(
        name="MD006",
        description="Consider starting bulleted lists at the beginning of the line",
        tags=(Tag.BULLET, Tag.UL, Tag.INDENTATION),
        aliases=("ul-start-left",),
    )

    def check(self, doc: Document) -> list[Violation]:
        return [
            self.to_violation(doc.path, item.position)
            for bullet_list in doc.ast.children()
            if bullet_list.kind == NodeKind.BULLET_LIST
            for item in doc.ast.children(bullet_list)
            if item.position.start.column > 1
        ]


class UlIndentRule(RuleBase):
    """MD007: Unordered list indentation.

    Only items nested exclusively in bullet lists are checked. Each level
    must sit ``indent`` columns further right than the outermost list.
    """

    metadata = RuleMetadata(
        name="MD007",
        description="Unordered list indentation",
        tags=(Tag.BULLET, Tag.UL, Tag.INDENTATION),
        aliases=("ul-indent",),
    )

    def __init__(self, indent: int = 4) -> None:
        self.indent = indent

    @classmethod
    def from_config(cls, config: LintConfig) -> UlIndentRule:
        return cls(config.md007.indent)

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for item in _items(doc):
            lists = _enclosing_lists(doc.ast, item)
            if len(lists) < 2 or any(node.kind != NodeKind.BULLET_LIST for node in lists):
                continue
            depth = len(lists) - 1
            expected = lists[-1].position.start.column + depth * self.indent
            if item.position.start.column != expected:
                violations.append(self.to_violation(doc.path, item.position))
        return violations


class OlPrefixRule(RuleBase):
    """MD029: Ordered list item prefix.

    ``one`` requires every item to be numbered 1. ``ordered`` requires each
    item to follow the previous one; the first item may start anywhere.
    """

    metadata = RuleMetadata(
        name="MD029",
        description="Ordered list item prefix",
        tags=(Tag.OL,),
        aliases=("ol-prefix",),
    )

    def __init__(self, style: OrderedListStyle = OrderedListStyle.ONE) -> None:
        self.style = style

    @classmethod
    def from_config(cls, config: LintConfig) -> OlPrefixRule:
        return cls(config.md029.style)

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for ordered_list in of_kind(doc, NodeKind.ORDERED_LIST):
            previous: int | None = None
            for item in doc.ast.children(ordered_list):
                if self.style == OrderedListStyle.ONE:
                    violated = item.number != 1
                else:
                    violated = previous is not None and item.number != previous + 1
                if violated:
                    violations.append(self.to_violation(doc.path, item.position))
                previous = item.number
        return violations


class ListMarkerSpaceRule(RuleBase):
    """MD030: Spaces after list markers.

    A list counts as multi-paragraph when any of its items holds more than
    one block.
    """

    metadata = RuleMetadata(
        name="MD030",
        description="Spaces after list markers",
        tags=(Tag.OL, Tag.UL, Tag.WHITESPACE),
        aliases=("list-marker-space",),
    )

    def __init__(self, ul_single: int = 1, ol_single: int = 1, ul_multi: int = 1, ol_multi: int = 1) -> None:
        self.ul_single = ul_single
        self.ol_single = ol_single
        self.ul_multi = ul_multi
        self.ol_multi = ol_multi

    @classmethod
    def from_config(cls, config: LintConfig) -> ListMarkerSpaceRule:
        params = config.md030
        return cls(params.ul_single, params.ol_single, params.ul_multi, params.ol_multi)

    def _expected(self, ordered: bool, multi: bool) -> int:
        if ordered:
            return self.ol_multi if multi else self.ol_single
        return self.ul_multi if multi else self.ul_single

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for node in doc.ast.descendants():
            if node.kind not in LIST_KINDS:
                continue
            items = list(doc.ast.children(node))
            multi = any(len(list(doc.ast.children(item))) > 1 for item in items)
            expected = self._expected(node.kind == NodeKind.ORDERED_LIST, multi)

            for item in items:
                if item.first_child is None:
                    continue
                line = doc.line(item.position.start.line)
                marker_end = item.position.start.column - 1 + len(item.info) + len(item.markup)
                rest = line[marker_end:]
                spaces = len(rest) - len(rest.lstrip(" "))
                if spaces != expected:
                    position = Position.line(
                        item.position.start.line, item.position.start.column, marker_end + spaces
                    )
                    violations.append(self.to_violation(doc.path, position))
        return violations


class BlanksAroundListsRule(RuleBase):
    """MD032: Lists should be surrounded by blank lines.

    Lists nested inside list items are exempt.
    """

    metadata = RuleMetadata(
        name="MD032",
        description="Lists should be surrounded by blank lines",
        tags=(Tag.BULLET, Tag.UL, Tag.OL, Tag.BLANK_LINES),
        aliases=("blanks-around-lists",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for node in doc.ast.descendants():
            if node.kind not in LIST_KINDS:
                continue
            parent = doc.ast.parent(node)
            if parent is not None and parent.kind == NodeKind.LIST_ITEM:
                continue
            previous = doc.ast.previous_sibling(node)
            following = doc.ast.next_sibling(node)
            if directly_after(previous, node):
                start = node.position.start
                violations.append(self.to_violation(doc.path, Position(start, start)))
            if following is not None and directly_after(node, following):
                end = node.position.end
                violations.append(self.to_violation(doc.path, Position(end, end)))
        return violations
