"""Tests for mado.kernel.linting.registry."""

import pytest

from mado.kernel.config.models import LintConfig, MD013Config, MD029Config, OrderedListStyle
from mado.kernel.exceptions import ConfigurationError, UnknownRuleError
from mado.kernel.linting.markdown_rules import LineLengthRule, NoHardTabsRule, OlPrefixRule
from mado.kernel.linting.registry import (
    RULE_CLASSES,
    RuleId,
    all_metadata,
    build_rule,
    resolve_rule_id,
    resolve_rules,
)
from mado.kernel.linting.rules import RuleBase, RuleLike


class TestDispatchTable:
    def test_every_identifier_has_a_rule(self) -> None:
        assert set(RULE_CLASSES) == set(RuleId)
        assert len(RuleId) == 38

    def test_metadata_matches_identifier(self) -> None:
        for rule_id, rule_class in RULE_CLASSES.items():
            assert rule_class.metadata.name == rule_id.value
            assert rule_class.metadata.aliases
            assert rule_class.metadata.description

    def test_rules_satisfy_the_protocol(self) -> None:
        for rule_class in RULE_CLASSES.values():
            assert issubclass(rule_class, RuleBase)
            assert isinstance(rule_class(), RuleLike)

    def test_aliases_are_unique(self) -> None:
        aliases = [alias for meta in all_metadata() for alias in meta.aliases]
        assert len(aliases) == len(set(aliases))


class TestResolveRuleId:
    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("MD010", RuleId.MD010),
            ("md010", RuleId.MD010),
            ("no-hard-tabs", RuleId.MD010),
            (" line-length ", RuleId.MD013),
            ("Header-Increment", RuleId.MD001),
        ],
    )
    def test_names_and_aliases(self, identifier: str, expected: RuleId) -> None:
        assert resolve_rule_id(identifier) is expected

    def test_unknown_identifier(self) -> None:
        with pytest.raises(UnknownRuleError) as exc_info:
            resolve_rule_id("MD999")
        assert exc_info.value.identifier == "MD999"
        assert isinstance(exc_info.value, ConfigurationError)
        assert "MD999" in str(exc_info.value)


class TestResolveRules:
    def test_default_selects_every_rule(self) -> None:
        rules = resolve_rules(LintConfig())
        assert [rule.name for rule in rules] == [rule_id.value for rule_id in RuleId]

    def test_configuration_order_is_kept(self) -> None:
        rules = resolve_rules(LintConfig(rules=["MD013", "MD001", "no-hard-tabs"]))
        assert [rule.name for rule in rules] == ["MD013", "MD001", "MD010"]

    def test_duplicates_are_built_once(self) -> None:
        rules = resolve_rules(LintConfig(rules=["MD010", "no-hard-tabs", "md010"]))
        assert rules == [NoHardTabsRule()]

    def test_empty_selection(self) -> None:
        assert resolve_rules(LintConfig(rules=[])) == []

    def test_unknown_rule_fails(self) -> None:
        with pytest.raises(UnknownRuleError):
            resolve_rules(LintConfig(rules=["MD001", "not-a-rule"]))

    def test_parameters_come_from_config(self) -> None:
        config = LintConfig(
            md013=MD013Config(line_length=120, tables=False),
            md029=MD029Config(style=OrderedListStyle.ORDERED),
        )
        line_length = build_rule(RuleId.MD013, config)
        assert isinstance(line_length, LineLengthRule)
        assert line_length.line_length == 120
        assert line_length.tables is False
        assert build_rule(RuleId.MD029, config) == OlPrefixRule(OrderedListStyle.ORDERED)


class TestAllMetadata:
    def test_sorted_by_name(self) -> None:
        names = [meta.name for meta in all_metadata()]
        assert names == sorted(names)
        assert names[0] == "MD001"
        assert names[-1] == "MD047"
