"""Heading rules: levels, styles, spacing and content of headers."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mado.kernel.config.models import DEFAULT_PUNCTUATION, HeadingStyle
from mado.kernel.linting.markdown_rules._blocks import directly_after, top_level
from mado.kernel.linting.models import RuleMetadata, Tag, Violation
from mado.kernel.linting.rules import RuleBase
from mado.kernel.syntax_tree import Node, NodeKind

if TYPE_CHECKING:
    from mado.kernel.config.models import LintConfig
    from mado.kernel.document import Document

_MISSING_SPACE_ATX = re.compile(r"^#+[^#\s]")


def _atx_spacing(line: str, level: int) -> tuple[int, int | None]:
    """Spaces after the opening hashes and before the closing ones.

    The second value is None when the heading is not closed.
    """
    stripped = line.strip()
    body = stripped[level:]
    opening = len(body) - len(body.lstrip(" \t"))
    inner = body.strip(" \t")
    if not inner.endswith("#"):
        return opening, None
    text = inner.rstrip("#")
    if not text or text[-1] not in " \t":
        return opening, None
    return opening, len(text) - len(text.rstrip(" \t"))


def _is_atx_closed(doc: Document, heading: Node) -> bool:
    if heading.setext:
        return False
    return _atx_spacing(doc.line(heading.position.start.line), heading.level)[1] is not None


def _headings(doc: Document) -> list[Node]:
    return list(top_level(doc, NodeKind.HEADING))


class HeaderIncrementRule(RuleBase):
    """MD001: Header levels should only increment by one level at a time."""

    metadata = RuleMetadata(
        name="MD001",
        description="Header levels should only increment by one level at a time",
        tags=(Tag.HEADERS,),
        aliases=("header-increment",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        previous_level: int | None = None
        for heading in _headings(doc):
            if previous_level is not None and heading.level > previous_level + 1:
                violations.append(self.to_violation(doc.path, heading.position))
            previous_level = heading.level
        return violations


class FirstHeaderH1Rule(RuleBase):
    """MD002: First header should be a top level header."""

    metadata = RuleMetadata(
        name="MD002",
        description="First header should be a top level header",
        tags=(Tag.HEADERS,),
        aliases=("first-header-h1",),
    )

    def __init__(self, level: int = 1) -> None:
        self.level = level

    @classmethod
    def from_config(cls, config: LintConfig) -> FirstHeaderH1Rule:
        return cls(config.md002.level)

    def check(self, doc: Document) -> list[Violation]:
        first = next(top_level(doc, NodeKind.HEADING), None)
        if first is not None and first.level != self.level:
            return [self.to_violation(doc.path, first.position)]
        return []


class HeaderStyleRule(RuleBase):
    """MD003: Header style.

    ``consistent`` takes the style of the first heading; the others require
    a fixed style. ``setext-with-atx`` wants setext for levels 1 and 2.
    """

    metadata = RuleMetadata(
        name="MD003",
        description="Header style",
        tags=(Tag.HEADERS,),
        aliases=("header-style",),
    )

    def __init__(self, style: HeadingStyle = HeadingStyle.CONSISTENT) -> None:
        self.style = style

    @classmethod
    def from_config(cls, config: LintConfig) -> HeaderStyleRule:
        return cls(config.md003.style)

    def _violates(self, setext: bool, closed: bool, level: int, first: tuple[bool, bool] | None) -> bool:
        match self.style:
            case HeadingStyle.CONSISTENT:
                return first is not None and (setext, closed) != first
            case HeadingStyle.ATX:
                return setext or closed
            case HeadingStyle.ATX_CLOSED:
                return setext or not closed
            case HeadingStyle.SETEXT:
                return not setext
            case HeadingStyle.SETEXT_WITH_ATX:
                return level < 3 and not setext
        return False

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        first_style: tuple[bool, bool] | None = None
        for heading in _headings(doc):
            closed = _is_atx_closed(doc, heading)
            if self._violates(heading.setext, closed, heading.level, first_style):
                violations.append(self.to_violation(doc.path, heading.position))
            if first_style is None:
                first_style = (heading.setext, closed)
        return violations


class NoMissingSpaceAtxRule(RuleBase):
    """MD018: No space after hash on atx style header.

    ``#Heading`` is not a heading in CommonMark, so the offending text is
    found at the start of paragraph lines.
    """

    metadata = RuleMetadata(
        name="MD018",
        description="No space after hash on atx style header",
        tags=(Tag.HEADERS, Tag.ATX, Tag.SPACES),
        aliases=("no-missing-space-atx",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for node in doc.ast.descendants():
            if node.kind != NodeKind.TEXT:
                continue
            parent = doc.ast.parent(node)
            previous = doc.ast.previous_sibling(node)
            starts_line = previous is None or previous.kind in (NodeKind.SOFTBREAK, NodeKind.HARDBREAK)
            if (
                parent is not None
                and parent.kind == NodeKind.PARAGRAPH
                and starts_line
                and _MISSING_SPACE_ATX.match(node.content)
            ):
                violations.append(self.to_violation(doc.path, node.position))
        return violations


class NoMultipleSpaceAtxRule(RuleBase):
    """MD019: Multiple spaces after hash on atx style header."""

    metadata = RuleMetadata(
        name="MD019",
        description="Multiple spaces after hash on atx style header",
        tags=(Tag.HEADERS, Tag.ATX, Tag.SPACES),
        aliases=("no-multiple-space-atx",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for heading in _headings(doc):
            if heading.setext or heading.first_child is None:
                continue
            opening, closing = _atx_spacing(doc.line(heading.position.start.line), heading.level)
            if closing is None and opening > 1:
                violations.append(self.to_violation(doc.path, heading.position))
        return violations


class NoMissingSpaceClosedAtxRule(RuleBase):
    """MD020: No space inside hashes on closed atx style header."""

    metadata = RuleMetadata(
        name="MD020",
        description="No space inside hashes on closed atx style header",
        tags=(Tag.HEADERS, Tag.ATX_CLOSED, Tag.SPACES),
        aliases=("no-missing-space-closed-atx",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for node in doc.ast.children():
            line = doc.line(node.position.start.line).strip()
            if node.kind == NodeKind.PARAGRAPH:
                if node.position.start.column == 1 and len(line) > 1 and line[0] == line[-1] == "#":
                    violations.append(self.to_violation(doc.path, node.position))
            elif node.kind == NodeKind.HEADING and not node.setext and node.first_child is not None:
                unclosed = _atx_spacing(line, node.level)[1] is None
                if unclosed and line.endswith("#") and not line.endswith("\\#"):
                    violations.append(self.to_violation(doc.path, node.position))
        return violations


class NoMultipleSpaceClosedAtxRule(RuleBase):
    """MD021: Multiple spaces inside hashes on closed atx style header."""

    metadata = RuleMetadata(
        name="MD021",
        description="Multiple spaces inside hashes on closed atx style header",
        tags=(Tag.HEADERS, Tag.ATX_CLOSED, Tag.SPACES),
        aliases=("no-multiple-space-closed-atx",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for heading in _headings(doc):
            if heading.setext:
                continue
            opening, closing = _atx_spacing(doc.line(heading.position.start.line), heading.level)
            if closing is not None and (opening > 1 or closing > 1):
                violations.append(self.to_violation(doc.path, heading.position))
        return violations


class BlanksAroundHeadersRule(RuleBase):
    """MD022: Headers should be surrounded by blank lines."""

    metadata = RuleMetadata(
        name="MD022",
        description="Headers should be surrounded by blank lines",
        tags=(Tag.HEADERS, Tag.BLANK_LINES),
        aliases=("blanks-around-headers",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for node in doc.ast.children():
            previous = doc.ast.previous_sibling(node)
            if previous is None or not directly_after(previous, node):
                continue
            if previous.kind == NodeKind.HEADING:
                violations.append(self.to_violation(doc.path, previous.position))
            elif node.kind == NodeKind.HEADING:
                violations.append(self.to_violation(doc.path, node.position))
        return violations


class HeaderStartLeftRule(RuleBase):
    """MD023: Headers must start at the beginning of the line."""

    metadata = RuleMetadata(
        name="MD023",
        description="Headers must start at the beginning of the line",
        tags=(Tag.HEADERS, Tag.SPACES),
        aliases=("header-start-left",),
    )

    def check(self, doc: Document) -> list[Violation]:
        return [
            self.to_violation(doc.path, heading.position)
            for heading in _headings(doc)
            if heading.position.start.column > 1
        ]


class NoDuplicateHeaderRule(RuleBase):
    """MD024: Multiple headers with the same content."""

    metadata = RuleMetadata(
        name="MD024",
        description="Multiple headers with the same content",
        tags=(Tag.HEADERS,),
        aliases=("no-duplicate-header",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        seen: set[str] = set()
        for heading in _headings(doc):
            text = doc.ast.inline_text(heading)
            if text in seen:
                violations.append(self.to_violation(doc.path, heading.position))
            else:
                seen.add(text)
        return violations


class SingleH1Rule(RuleBase):
    """MD025: Multiple top level headers in the same document."""

    metadata = RuleMetadata(
        name="MD025",
        description="Multiple top level headers in the same document",
        tags=(Tag.HEADERS,),
        aliases=("single-h1",),
    )

    def __init__(self, level: int = 1) -> None:
        self.level = level

    @classmethod
    def from_config(cls, config: LintConfig) -> SingleH1Rule:
        return cls(config.md025.level)

    def check(self, doc: Document) -> list[Violation]:
        top = [heading for heading in _headings(doc) if heading.level == self.level]
        return [self.to_violation(doc.path, heading.position) for heading in top[1:]]


class NoTrailingPunctuationRule(RuleBase):
    """MD026: Trailing punctuation in header."""

    metadata = RuleMetadata(
        name="MD026",
        description="Trailing punctuation in header",
        tags=(Tag.HEADERS,),
        aliases=("no-trailing-punctuation",),
    )

    def __init__(self, punctuation: str = DEFAULT_PUNCTUATION) -> None:
        self.punctuation = punctuation

    @classmethod
    def from_config(cls, config: LintConfig) -> NoTrailingPunctuationRule:
        return cls(config.md026.punctuation)

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for heading in _headings(doc):
            text = doc.ast.inline_text(heading).rstrip()
            if text and text[-1] in self.punctuation:
                violations.append(self.to_violation(doc.path, heading.position))
        return violations


class NoEmphasisAsHeaderRule(RuleBase):
    """MD036: Emphasis used instead of a header."""

    metadata = RuleMetadata(
        name="MD036",
        description="Emphasis used instead of a header",
        tags=(Tag.HEADERS, Tag.EMPHASIS),
        aliases=("no-emphasis-as-header",),
    )

    def __init__(self, punctuation: str = DEFAULT_PUNCTUATION) -> None:
        self.punctuation = punctuation

    @classmethod
    def from_config(cls, config: LintConfig) -> NoEmphasisAsHeaderRule:
        return cls(config.md036.punctuation)

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for paragraph in doc.ast.descendants():
            if paragraph.kind != NodeKind.PARAGRAPH:
                continue
            position = paragraph.position
            if position.end.line > position.start.line or position.start.column > 1:
                continue
            children = list(doc.ast.children(paragraph))
            if len(children) != 1 or children[0].kind not in (NodeKind.EMPHASIS, NodeKind.STRONG):
                continue
            text = doc.ast.inline_text(children[0]).rstrip()
            if text and text[-1] not in self.punctuation:
                violations.append(self.to_violation(doc.path, position))
        return violations


class FirstLineH1Rule(RuleBase):
    """MD041: First line in file should be a top level header."""

    metadata = RuleMetadata(
        name="MD041",
        description="First line in file should be a top level header",
        tags=(Tag.HEADERS,),
        aliases=("first-line-h1",),
    )

    def __init__(self, level: int = 1) -> None:
        self.level = level

    @classmethod
    def from_config(cls, config: LintConfig) -> FirstLineH1Rule:
        return cls(config.md041.level)

    def check(self, doc: Document) -> list[Violation]:
        first = next(
            (node for node in doc.ast.children() if node.kind != NodeKind.FRONT_MATTER), None
        )
        if first is None or (first.kind == NodeKind.HEADING and first.level == self.level):
            return []
        return [self.to_violation(doc.path, first.position)]
