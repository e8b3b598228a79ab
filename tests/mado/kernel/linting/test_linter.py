"""Tests for mado.kernel.linting.linter."""

from __future__ import annotations

from pathlib import Path

import pytest

from mado.kernel.config.models import LintConfig
from mado.kernel.document import Document
from mado.kernel.exceptions import LintError, UnknownRuleError
from mado.kernel.linting.linter import Linter
from mado.kernel.linting.markdown_rules import (
    HeaderIncrementRule,
    NoMultipleBlanksRule,
    NoTrailingSpacesRule,
)
from mado.kernel.linting.models import Position, RuleMetadata, Tag, Violation
from mado.kernel.linting.rules import RuleBase

TEXT = "# Title\n\n### Skipped  \n\n\nText\n"


def _doc(text: str = TEXT) -> Document:
    return Document.from_text(Path("test.md"), text)


class BrokenRule(RuleBase):
    metadata = RuleMetadata("MD900", "Always breaks", (Tag.WHITESPACE,), ("broken",))

    def check(self, doc: Document) -> list[Violation]:
        raise ValueError("bad pattern")


class RaisingLintErrorRule(RuleBase):
    metadata = RuleMetadata("MD901", "Raises its own error", (Tag.WHITESPACE,), ("raising",))

    def check(self, doc: Document) -> list[Violation]:
        raise LintError(self.name, doc.path, "custom failure")


class FirstLineRule(RuleBase):
    metadata = RuleMetadata("MD902", "Flags line one", (Tag.WHITESPACE,), ("first-line",))

    def check(self, doc: Document) -> list[Violation]:
        return [self.to_violation(doc.path, Position.line(1))]


class TestLinterConstruction:
    def test_defaults_enable_every_rule(self) -> None:
        assert len(Linter().rules) == 38

    def test_selected_rules(self) -> None:
        linter = Linter(LintConfig(rules=["MD009", "MD001"]))
        assert [rule.metadata.name for rule in linter.rules] == ["MD009", "MD001"]

    def test_unknown_rule_fails_at_construction(self) -> None:
        with pytest.raises(UnknownRuleError):
            Linter(LintConfig(rules=["MD001", "MD404"]))

    def test_explicit_rules(self) -> None:
        linter = Linter(rules=[FirstLineRule()])
        assert [rule.metadata.name for rule in linter.rules] == ["MD902"]


class TestLinterCheck:
    def test_violations_are_sorted(self) -> None:
        linter = Linter(rules=[NoTrailingSpacesRule(), NoMultipleBlanksRule(), HeaderIncrementRule()])
        violations = linter.check(_doc())
        assert [(v.name, v.position.start.line) for v in violations] == [
            ("MD001", 3),
            ("MD009", 3),
            ("MD012", 5),
        ]
        assert violations == sorted(violations)

    def test_rule_order_does_not_change_the_result(self) -> None:
        rules = [NoTrailingSpacesRule(), NoMultipleBlanksRule(), HeaderIncrementRule()]
        forward = Linter(rules=rules).check(_doc())
        backward = Linter(rules=list(reversed(rules))).check(_doc())
        assert forward == backward

    def test_deterministic(self) -> None:
        linter = Linter()
        doc = _doc()
        assert linter.check(doc) == linter.check(doc)

    def test_clean_document(self) -> None:
        assert Linter().check(_doc("# Title\n\n## Section\n\nSome text.\n")) == []

    def test_carriage_return_line_endings(self) -> None:
        doc = _doc("# H1\r\r### H3\r")
        violations = Linter(LintConfig(rules=["MD001"])).check(doc)
        assert [(v.name, v.position.start.line) for v in violations] == [("MD001", 3)]

    def test_line_endings_do_not_change_the_result(self) -> None:
        linter = Linter()
        results = [
            [(v.name, v.position.start.line) for v in linter.check(_doc(TEXT.replace("\n", eol)))]
            for eol in ("\n", "\r", "\r\n")
        ]
        assert results[0] == results[1] == results[2]

    def test_unexpected_exception_becomes_lint_error(self) -> None:
        linter = Linter(rules=[FirstLineRule(), BrokenRule()])
        with pytest.raises(LintError) as exc_info:
            linter.check(_doc())
        assert exc_info.value.rule == "MD900"
        assert exc_info.value.path == Path("test.md")
        assert "ValueError: bad pattern" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_lint_error_propagates_unchanged(self) -> None:
        linter = Linter(rules=[RaisingLintErrorRule()])
        with pytest.raises(LintError, match="custom failure"):
            linter.check(_doc())
