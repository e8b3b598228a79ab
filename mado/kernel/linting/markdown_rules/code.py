"""Code block and code span rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mado.kernel.config.models import CodeBlockStyle
from mado.kernel.linting.markdown_rules._blocks import directly_after, line_span, of_kind
from mado.kernel.linting.models import RuleMetadata, Tag, Violation
from mado.kernel.linting.rules import RuleBase
from mado.kernel.syntax_tree import NodeKind

if TYPE_CHECKING:
    from mado.kernel.config.models import LintConfig
    from mado.kernel.document import Document


class CommandsShowOutputRule(RuleBase):
    """MD014: Dollar signs used before commands without showing output."""

    metadata = RuleMetadata(
        name="MD014",
        description="Dollar signs used before commands without showing output",
        tags=(Tag.CODE,),
        aliases=("commands-show-output",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for block in of_kind(doc, NodeKind.CODE_BLOCK):
            lines = [line for line in block.content.splitlines() if line.strip()]
            if lines and all(line.startswith("$ ") for line in lines):
                violations.append(self.to_violation(doc.path, block.position))
        return violations


class BlanksAroundFencesRule(RuleBase):
    """MD031: Fenced code blocks should be surrounded by blank lines."""

    metadata = RuleMetadata(
        name="MD031",
        description="Fenced code blocks should be surrounded by blank lines",
        tags=(Tag.CODE, Tag.BLANK_LINES),
        aliases=("blanks-around-fences",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for block in of_kind(doc, NodeKind.CODE_BLOCK):
            if not block.fenced:
                continue
            start, end = block.position.start, block.position.end
            if directly_after(doc.ast.previous_sibling(block), block):
                violations.append(self.to_violation(doc.path, line_span(doc, start.line, start.column)))
            following = doc.ast.next_sibling(block)
            if following is not None and directly_after(block, following):
                violations.append(self.to_violation(doc.path, line_span(doc, end.line, start.column)))
        return violations


class NoSpaceInCodeRule(RuleBase):
    """MD038: Spaces inside code span elements.

    A single space padding both sides is allowed when the code itself
    begins or ends with a backtick, since that is the only way to write it.
    """

    metadata = RuleMetadata(
        name="MD038",
        description="Spaces inside code span elements",
        tags=(Tag.WHITESPACE, Tag.CODE),
        aliases=("no-space-in-code",),
    )

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        for span in of_kind(doc, NodeKind.CODE):
            raw = span.raw
            inner = raw.strip()
            if not inner or raw == inner:
                continue
            padded = raw.startswith(" ") and raw.endswith(" ") and raw[1:-1] == inner
            if padded and (inner.startswith("`") or inner.endswith("`")):
                continue
            violations.append(self.to_violation(doc.path, span.position))
        return violations


class FencedCodeLanguageRule(RuleBase):
    """MD040: Fenced code blocks should have a language specified."""

    metadata = RuleMetadata(
        name="MD040",
        description="Fenced code blocks should have a language specified",
        tags=(Tag.CODE, Tag.LANGUAGE),
        aliases=("fenced-code-language",),
    )

    def check(self, doc: Document) -> list[Violation]:
        return [
            self.to_violation(doc.path, block.position)
            for block in of_kind(doc, NodeKind.CODE_BLOCK)
            if block.fenced and not block.info
        ]


class CodeBlockStyleRule(RuleBase):
    """MD046: Code block style."""

    metadata = RuleMetadata(
        name="MD046",
        description="Code block style",
        tags=(Tag.CODE,),
        aliases=("code-block-style",),
    )

    def __init__(self, style: CodeBlockStyle = CodeBlockStyle.FENCED) -> None:
        self.style = style

    @classmethod
    def from_config(cls, config: LintConfig) -> CodeBlockStyleRule:
        return cls(config.md046.style)

    def check(self, doc: Document) -> list[Violation]:
        violations = []
        first_fenced: bool | None = None
        for block in of_kind(doc, NodeKind.CODE_BLOCK):
            match self.style:
                case CodeBlockStyle.FENCED:
                    violated = not block.fenced
                case CodeBlockStyle.INDENTED:
                    violated = block.fenced
                case _:
                    violated = first_fenced is not None and block.fenced != first_fenced
            if violated:
                violations.append(self.to_violation(doc.path, block.position))
            if first_fenced is None:
                first_fenced = block.fenced
        return violations
