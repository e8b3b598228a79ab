"""Tests for mado.kernel.linting.rules."""

from pathlib import Path

import pytest

from mado.kernel.document import Document
from mado.kernel.linting.models import Position, RuleMetadata, Tag, Violation
from mado.kernel.linting.rules import RuleBase, RuleLike


class NoCheckRule(RuleBase):
    metadata = RuleMetadata("MD910", "Forgets to check", (Tag.WHITESPACE,), ("no-check",))


class LastLineRule(RuleBase):
    metadata = RuleMetadata("MD911", "Flags the last line", (Tag.WHITESPACE,), ("last-line",))

    def check(self, doc: Document) -> list[Violation]:
        return [self.to_violation(doc.path, Position.line(len(doc.lines)))]


class TestRuleBase:
    def test_check_is_required(self) -> None:
        with pytest.raises(TypeError, match="check"):
            NoCheckRule()

    def test_rule_base_itself_cannot_be_created(self) -> None:
        with pytest.raises(TypeError):
            RuleBase()

    def test_complete_rule(self) -> None:
        rule = LastLineRule()
        assert isinstance(rule, RuleLike)
        violations = rule.check(Document.from_text(Path("a.md"), "one\ntwo\n"))
        assert [(v.name, v.alias, v.position.start.line) for v in violations] == [
            ("MD911", "last-line", 2)
        ]
