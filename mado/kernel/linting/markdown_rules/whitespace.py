"""Line-oriented whitespace rules."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mado.kernel.linting.markdown_rules._blocks import covered_lines, of_kind
from mado.kernel.linting.models import Position, RuleMetadata, Tag, Violation
from mado.kernel.linting.rules import RuleBase
from mado.kernel.syntax_tree import NodeKind

if TYPE_CHECKING:
    from mado.kernel.config.models import LintConfig
    from mado.kernel.document import Document

_WHITESPACE = re.compile(r"\s")


class NoTrailingSpacesRule(RuleBase):
    """MD009: Trailing spaces."""

    metadata = RuleMetadata(
        name="MD009",
        description="Trailing spaces",
        tags=(Tag.WHITESPACE,),
        aliases=("no-trailing-spaces",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for lineno, line in enumerate(doc.lines, start=1):
            content = line.rstrip(" \t")
            if len(content) < len(line):
                position = Position.line(lineno, len(content) + 1, len(line))
                violations.append(self.to_violation(doc.path, position))
        return violations


class NoHardTabsRule(RuleBase):
    """MD010: Hard tabs. Reported once per line, at the first tab."""

    metadata = RuleMetadata(
        name="MD010",
        description="Hard tabs",
        tags=(Tag.WHITESPACE, Tag.HARD_TAB),
        aliases=("no-hard-tabs",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for lineno, line in enumerate(doc.lines, start=1):
            index = line.find("\t")
            if index >= 0:
                violations.append(self.to_violation(doc.path, Position.line(lineno, index + 1)))
        return violations


class NoMultipleBlanksRule(RuleBase):
    """MD012: Multiple consecutive blank lines.

    Lines inside code blocks and front matter are ignored. Every blank line
    that follows another blank line is reported.
    """

    metadata = RuleMetadata(
        name="MD012",
        description="Multiple consecutive blank lines",
        tags=(Tag.WHITESPACE, Tag.BLANK_LINES),
        aliases=("no-multiple-blanks",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        code_lines = covered_lines(of_kind(doc, NodeKind.CODE_BLOCK))
        previous_blank = False
        for lineno in range(doc.front_matter_end + 1, len(doc.lines) + 1):
            blank = not doc.line(lineno).strip()
            if blank and previous_blank and lineno not in code_lines:
                violations.append(self.to_violation(doc.path, Position.line(lineno)))
            previous_blank = blank
        return violations


class LineLengthRule(RuleBase):
    """MD013: Line length.

    A line violates when it is longer than ``line_length`` and whitespace
    occurs at or after that column, so a long unbreakable word (a URL, for
    instance) running past the limit is tolerated.
    """

    metadata = RuleMetadata(
        name="MD013",
        description="Line length",
        tags=(Tag.LINE_LENGTH,),
        aliases=("line-length",),
    )

    def __init__(self, line_length: int = 80, code_blocks: bool = True, tables: bool = True) -> None:
        self.line_length = line_length
        self.code_blocks = code_blocks
        self.tables = tables

    @classmethod
    def from_config(cls, config: LintConfig) -> LineLengthRule:
        params = config.md013
        return cls(params.line_length, params.code_blocks, params.tables)

    def _skipped_lines(self, doc: Document) -> set[int]:
        kinds = []
        if not self.code_blocks:
            kinds.append(NodeKind.CODE_BLOCK)
        if not self.tables:
            kinds.append(NodeKind.TABLE)
        return covered_lines(of_kind(doc, *kinds)) if kinds else set()

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        skipped = self._skipped_lines(doc)
        limit = self.line_length
        for lineno, line in enumerate(doc.lines, start=1):
            if lineno in skipped or len(line) <= limit:
                continue
            if _WHITESPACE.search(line, limit):
                position = Position.line(lineno, limit + 1, len(line))
                violations.append(self.to_violation(doc.path, position))
        return violations


class NoMultipleSpaceBlockquoteRule(RuleBase):
    """MD027: Multiple spaces after blockquote symbol."""

    metadata = RuleMetadata(
        name="MD027",
        description="Multiple spaces after blockquote symbol",
        tags=(Tag.BLOCKQUOTE, Tag.WHITESPACE, Tag.INDENTATION),
        aliases=("no-multiple-space-blockquote",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        quoted: set[int] = set()
        code: set[int] = set()
        for quote in of_kind(doc, NodeKind.BLOCK_QUOTE):
            quoted.update(range(quote.position.start.line, quote.position.end.line + 1))
            code |= covered_lines(
                node for node in doc.ast.descendants(quote) if node.kind == NodeKind.CODE_BLOCK
            )

        for lineno in sorted(quoted - code):
            line = doc.line(lineno)
            index = len(line) - len(line.lstrip(" "))
            while index < len(line) and line[index] == ">":
                after = index + 1
                spaces = len(line) - after - len(line[after:].lstrip(" "))
                following = after + spaces
                if following < len(line) and line[following] == ">":
                    index = following
                    continue
                if spaces > 1 and following < len(line):
                    position = Position.line(lineno, index + 1, following)
                    violations.append(self.to_violation(doc.path, position))
                break
        return violations


class NoBlanksBlockquoteRule(RuleBase):
    """MD028: Blank line inside blockquote.

    Two block quotes separated only by blank lines render as separate quotes
    in some parsers and as one in others.
    """

    metadata = RuleMetadata(
        name="MD028",
        description="Blank line inside blockquote",
        tags=(Tag.BLOCKQUOTE, Tag.WHITESPACE),
        aliases=("no-blanks-blockquote",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for quote in of_kind(doc, NodeKind.BLOCK_QUOTE):
            following = doc.ast.next_sibling(quote)
            if following is None or following.kind != NodeKind.BLOCK_QUOTE:
                continue
            between = range(quote.position.end.line + 1, following.position.start.line)
            if all(not doc.line(lineno).strip() for lineno in between):
                for lineno in between:
                    violations.append(self.to_violation(doc.path, Position.line(lineno)))
        return violations


class SingleTrailingNewlineRule(RuleBase):
    """MD047: File should end with a single newline character."""

    metadata = RuleMetadata(
        name="MD047",
        description="File should end with a single newline character",
        tags=(Tag.BLANK_LINES,),
        aliases=("single-trailing-newline",),
    )

    def check(self, doc: Document) -> list[Violation]:
        if not doc.text or doc.text.endswith(("\n", "\r")):
            return []
        lineno = len(doc.lines)
        column = len(doc.line(lineno)) + 1
        return [self.to_violation(doc.path, Position.line(lineno, column))]
