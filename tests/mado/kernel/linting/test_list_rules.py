"""Tests for mado.kernel.linting.markdown_rules.lists."""

from __future__ import annotations

from pathlib import Path

from mado.kernel.config.models import ListStyle, OrderedListStyle
from mado.kernel.document import Document
from mado.kernel.linting.markdown_rules import (
    BlanksAroundListsRule,
    ListIndentRule,
    ListMarkerSpaceRule,
    OlPrefixRule,
    UlIndentRule,
    UlStartLeftRule,
    UlStyleRule,
)
from mado.kernel.linting.models import Position


def _doc(text: str) -> Document:
    """Helper to parse a document under a fixed path."""
    return Document.from_text(Path("test.md"), text)


def _lines(violations: list) -> list[int]:
    return sorted(v.position.start.line for v in violations)


class TestUlStyleRule:
    def test_consistent(self) -> None:
        assert UlStyleRule().check(_doc("* a\n* b\n")) == []

    def test_inconsistent(self) -> None:
        assert _lines(UlStyleRule().check(_doc("* a\n- b\n+ c\n"))) == [2, 3]

    def test_fixed_style(self) -> None:
        rule = UlStyleRule(ListStyle.DASH)
        assert rule.check(_doc("- a\n- b\n")) == []
        assert _lines(rule.check(_doc("* a\n"))) == [1]

    def test_ordered_items_are_ignored(self) -> None:
        assert UlStyleRule(ListStyle.ASTERISK).check(_doc("1. a\n2. b\n")) == []

    def test_sublist(self) -> None:
        rule = UlStyleRule(ListStyle.SUBLIST)
        assert rule.check(_doc("* a\n    - b\n")) == []
        assert _lines(rule.check(_doc("* a\n    * b\n"))) == [2]


class TestListIndentRule:
    rule = ListIndentRule()

    def test_consistent(self) -> None:
        assert self.rule.check(_doc("- a\n- b\n    - c\n    - d\n")) == []

    def test_inconsistent_siblings(self) -> None:
        violations = self.rule.check(_doc("- a\n - b\n"))
        assert _lines(violations) == [2]


class TestUlStartLeftRule:
    rule = UlStartLeftRule()

    def test_at_column_one(self) -> None:
        assert self.rule.check(_doc("- a\n- b\n")) == []

    def test_indented_list(self) -> None:
        assert _lines(self.rule.check(_doc("Text\n\n  - a\n  - b\n"))) == [3, 4]

    def test_nested_lists_are_fine(self) -> None:
        assert self.rule.check(_doc("- a\n    - b\n")) == []


class TestUlIndentRule:
    def test_default_indent(self) -> None:
        assert UlIndentRule().check(_doc("- a\n    - b\n")) == []

    def test_wrong_indent(self) -> None:
        violations = UlIndentRule().check(_doc("- a\n  - b\n"))
        assert _lines(violations) == [2]

    def test_configured_indent(self) -> None:
        assert UlIndentRule(indent=2).check(_doc("- a\n  - b\n")) == []

    def test_bullets_under_ordered_lists_are_skipped(self) -> None:
        assert UlIndentRule().check(_doc("1. a\n   - b\n")) == []


class TestOlPrefixRule:
    def test_one_style(self) -> None:
        rule = OlPrefixRule(OrderedListStyle.ONE)
        assert rule.check(_doc("1. a\n1. b\n1. c\n")) == []
        assert _lines(rule.check(_doc("1. a\n2. b\n3. c\n"))) == [2, 3]

    def test_ordered_style(self) -> None:
        rule = OlPrefixRule(OrderedListStyle.ORDERED)
        assert rule.check(_doc("1. a\n2. b\n3. c\n")) == []
        assert _lines(rule.check(_doc("1. a\n1. b\n1. c\n"))) == [2, 3]

    def test_ordered_style_may_start_anywhere(self) -> None:
        assert OlPrefixRule(OrderedListStyle.ORDERED).check(_doc("3. a\n4. b\n")) == []

    def test_default_is_one(self) -> None:
        assert OlPrefixRule().style == OrderedListStyle.ONE


class TestListMarkerSpaceRule:
    def test_single_space(self) -> None:
        assert ListMarkerSpaceRule().check(_doc("- a\n- b\n\n1. c\n")) == []

    def test_bullet_with_two_spaces(self) -> None:
        violations = ListMarkerSpaceRule().check(_doc("-  a\n"))
        assert len(violations) == 1
        assert violations[0].position == Position.of(1, 1, 1, 3)

    def test_ordered_with_two_spaces(self) -> None:
        assert _lines(ListMarkerSpaceRule().check(_doc("1.  a\n"))) == [1]

    def test_configured_spacing(self) -> None:
        rule = ListMarkerSpaceRule(ul_single=2)
        assert rule.check(_doc("-  a\n-  b\n")) == []
        assert _lines(rule.check(_doc("- a\n"))) == [1]

    def test_multi_paragraph_lists(self) -> None:
        rule = ListMarkerSpaceRule(ul_multi=3)
        assert rule.check(_doc("-   a\n\n    more\n")) == []


class TestBlanksAroundListsRule:
    rule = BlanksAroundListsRule()

    def test_surrounded(self) -> None:
        assert self.rule.check(_doc("Text\n\n- a\n- b\n\nMore\n")) == []

    def test_text_directly_above(self) -> None:
        violations = self.rule.check(_doc("Text\n- a\n"))
        assert len(violations) == 1
        assert violations[0].position.start.line == 2

    def test_heading_directly_below(self) -> None:
        assert _lines(self.rule.check(_doc("- a\n# Heading\n"))) == [1]

    def test_nested_lists_are_exempt(self) -> None:
        assert self.rule.check(_doc("- a\n    - b\n- c\n")) == []
