"""Content rules: inline HTML, bare URLs, emphasis, links and thematic breaks."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from mado.kernel.linting.markdown_rules._blocks import of_kind
from mado.kernel.linting.models import Point, Position, RuleMetadata, Tag, Violation
from mado.kernel.linting.rules import RuleBase
from mado.kernel.syntax_tree import Node, NodeKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mado.kernel.config.models import LintConfig
    from mado.kernel.document import Document

# Comments, processing instructions, declarations and CDATA
_NON_ELEMENT_HTML = ("<!--", "<?", "<!")

_BARE_URL = re.compile(
    r"(?:https?|ftp)://[^\s<>\"'`]+"
    r"|[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}"
)
_URL_TRAILING = ".,;:!?'\")"

_EMPHASIS = re.compile(r"(?<![*_\\\w])(\*\*|\*|__|_)([^*_\n]+?)\1(?![*_\w])")


def _offset(node: Node, start: int, end: int) -> Position:
    """Position of ``[start, end)`` inside the single-line text of ``node``."""
    line = node.position.start.line
    column = node.position.start.column
    return Position(Point(line, column + start), Point(line, column + end - 1))


class NoInlineHtmlRule(RuleBase):
    """MD033: Inline HTML.

    Each top-level element of an HTML fragment whose tag is not in
    ``allowed_elements`` is reported at the fragment's position.
    """

    metadata = RuleMetadata(
        name="MD033",
        description="Inline HTML",
        tags=(Tag.HTML,),
        aliases=("no-inline-html",),
    )

    def __init__(self, allowed_elements: Iterable[str] = ()) -> None:
        self.allowed_elements = frozenset(element.lower() for element in allowed_elements)

    @classmethod
    def from_config(cls, config: LintConfig) -> NoInlineHtmlRule:
        return cls(config.md033.allowed_elements)

    def _disallowed(self, html: str) -> list[str]:
        soup = BeautifulSoup(html, "html.parser")
        return [
            element.name
            for element in soup.find_all(recursive=False)
            if element.name.lower() not in self.allowed_elements
        ]

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for node in of_kind(doc, NodeKind.HTML_INLINE, NodeKind.HTML_BLOCK):
            if node.content.lstrip().startswith(_NON_ELEMENT_HTML):
                continue
            for _ in self._disallowed(node.content):
                violations.append(self.to_violation(doc.path, node.position))
        return violations


class NoBareUrlsRule(RuleBase):
    """MD034: Bare URL used."""

    metadata = RuleMetadata(
        name="MD034",
        description="Bare URL used",
        tags=(Tag.LINKS, Tag.URL),
        aliases=("no-bare-urls",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for node in of_kind(doc, NodeKind.TEXT):
            if any(ancestor.kind == NodeKind.LINK for ancestor in doc.ast.ancestors(node)):
                continue
            for match in _BARE_URL.finditer(node.content):
                end = match.end()
                while end > match.start() and node.content[end - 1] in _URL_TRAILING:
                    end -= 1
                violations.append(self.to_violation(doc.path, _offset(node, match.start(), end)))
        return violations


class HrStyleRule(RuleBase):
    """MD035: Horizontal rule style.

    ``consistent`` compares every thematic break with the first one;
    any other value is the exact text every break must use.
    """

    metadata = RuleMetadata(
        name="MD035",
        description="Horizontal rule style",
        tags=(Tag.HR,),
        aliases=("hr-style",),
    )

    def __init__(self, style: str = "consistent") -> None:
        self.style = style

    @classmethod
    def from_config(cls, config: LintConfig) -> HrStyleRule:
        return cls(config.md035.style)

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        expected = None if self.style == "consistent" else self.style
        for rule in of_kind(doc, NodeKind.THEMATIC_BREAK):
            start = rule.position.start
            text = doc.line(start.line)[start.column - 1 :].rstrip()
            if expected is None:
                expected = text
            elif text != expected:
                position = Position.line(start.line, start.column, start.column + len(text) - 1)
                violations.append(self.to_violation(doc.path, position))
        return violations


class NoSpaceInEmphasisRule(RuleBase):
    """MD037: Spaces inside emphasis markers.

    ``** bold **`` is not emphasis in CommonMark, so it survives as plain
    text and is found there.
    """

    metadata = RuleMetadata(
        name="MD037",
        description="Spaces inside emphasis markers",
        tags=(Tag.WHITESPACE, Tag.EMPHASIS),
        aliases=("no-space-in-emphasis",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for node in of_kind(doc, NodeKind.TEXT):
            for match in _EMPHASIS.finditer(node.content):
                inner = match.group(2)
                if inner.strip() and inner != inner.strip():
                    violations.append(
                        self.to_violation(doc.path, _offset(node, match.start(), match.end()))
                    )
        return violations


class NoSpaceInLinksRule(RuleBase):
    """MD039: Spaces inside link text."""

    metadata = RuleMetadata(
        name="MD039",
        description="Spaces inside link text",
        tags=(Tag.WHITESPACE, Tag.LINKS),
        aliases=("no-space-in-links",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for link in of_kind(doc, NodeKind.LINK):
            text = doc.ast.first_child(link)
            if text is not None and text.kind == NodeKind.TEXT and text.content.strip() != text.content:
                violations.append(self.to_violation(doc.path, text.position))
        return violations
