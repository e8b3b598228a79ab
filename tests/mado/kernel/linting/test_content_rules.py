"""Tests for mado.kernel.linting.markdown_rules.content."""

from __future__ import annotations

from pathlib import Path

from mado.kernel.document import Document
from mado.kernel.linting.markdown_rules import (
    HrStyleRule,
    NoBareUrlsRule,
    NoInlineHtmlRule,
    NoSpaceInEmphasisRule,
    NoSpaceInLinksRule,
)
from mado.kernel.linting.models import Position


def _doc(text: str) -> Document:
    """Helper to parse a document under a fixed path."""
    return Document.from_text(Path("test.md"), text)


def _lines(violations: list) -> list[int]:
    return sorted(v.position.start.line for v in violations)


class TestNoInlineHtmlRule:
    def test_plain_markdown(self) -> None:
        assert NoInlineHtmlRule().check(_doc("Some **bold** text\n")) == []

    def test_inline_element(self) -> None:
        violations = NoInlineHtmlRule().check(_doc("Some <b>bold</b> text\n"))
        assert len(violations) == 1
        assert violations[0].position == Position.of(1, 6, 1, 8)

    def test_block_element(self) -> None:
        assert _lines(NoInlineHtmlRule().check(_doc("<div>\nhi\n</div>\n"))) == [1]

    def test_allowed_elements(self) -> None:
        rule = NoInlineHtmlRule(allowed_elements=["B", "div"])
        assert rule.check(_doc("Some <b>bold</b> text\n\n<div>\nhi\n</div>\n")) == []

    def test_comments_are_ignored(self) -> None:
        assert NoInlineHtmlRule().check(_doc("<!-- note -->\n\nText <!-- inline -->\n")) == []


class TestNoBareUrlsRule:
    rule = NoBareUrlsRule()

    def test_bare_url(self) -> None:
        violations = self.rule.check(_doc("Visit https://example.com.\n"))
        assert len(violations) == 1
        assert violations[0].position == Position.of(1, 7, 1, 25)

    def test_bare_email(self) -> None:
        assert _lines(self.rule.check(_doc("Mail user@example.com today\n"))) == [1]

    def test_autolink(self) -> None:
        assert self.rule.check(_doc("Visit <https://example.com>\n")) == []

    def test_inline_link(self) -> None:
        assert self.rule.check(_doc("Visit [site](https://example.com)\n")) == []

    def test_code_span(self) -> None:
        assert self.rule.check(_doc("Run `curl https://example.com`\n")) == []


class TestHrStyleRule:
    def test_consistent(self) -> None:
        assert HrStyleRule().check(_doc("Text\n\n---\n\nMore\n\n---\n")) == []

    def test_inconsistent(self) -> None:
        violations = HrStyleRule().check(_doc("Text\n\n---\n\nMore\n\n***\n"))
        assert len(violations) == 1
        assert violations[0].position == Position.of(7, 1, 7, 3)

    def test_configured_style(self) -> None:
        rule = HrStyleRule(style="***")
        assert rule.check(_doc("Text\n\n***\n")) == []
        assert _lines(rule.check(_doc("Text\n\n- - -\n"))) == [3]


class TestNoSpaceInEmphasisRule:
    rule = NoSpaceInEmphasisRule()

    def test_clean(self) -> None:
        assert self.rule.check(_doc("Some **bold** and *italic* text\n")) == []

    def test_spaces_inside_markers(self) -> None:
        violations = self.rule.check(_doc("Some ** bold ** text\n"))
        assert len(violations) == 1
        assert violations[0].position == Position.of(1, 6, 1, 15)

    def test_one_sided_space(self) -> None:
        assert _lines(self.rule.check(_doc("Some __bold __ text\n"))) == [1]


class TestNoSpaceInLinksRule:
    rule = NoSpaceInLinksRule()

    def test_clean(self) -> None:
        assert self.rule.check(_doc("[link](https://example.com)\n")) == []

    def test_spaces_inside_text(self) -> None:
        violations = self.rule.check(_doc("[ link ](https://example.com)\n"))
        assert len(violations) == 1
        assert violations[0].position == Position.of(1, 2, 1, 7)
