"""Closed set of rule identifiers and their dispatch to rule classes.

Every ``RuleId`` member must map to exactly one rule class whose metadata
carries the same name. The check runs at import time, so a rule added to
the enumeration without a class (or the other way round) stops the program
before any configuration is read.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from mado.kernel.exceptions import UnknownRuleError
from mado.kernel.linting import markdown_rules as rules

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mado.kernel.config.models import LintConfig
    from mado.kernel.linting.models import RuleMetadata
    from mado.kernel.linting.rules import RuleBase


class RuleId(StrEnum):
    MD001 = "MD001"
    MD002 = "MD002"
    MD003 = "MD003"
    MD004 = "MD004"
    MD005 = "MD005"
    MD006 = "MD006"
    MD007 = "MD007"
    MD009 = "MD009"
    MD010 = "MD010"
    MD012 = "MD012"
    MD013 = "MD013"
    MD014 = "MD014"
    MD018 = "MD018"
    MD019 = "MD019"
    MD020 = "MD020"
    MD021 = "MD021"
    MD022 = "MD022"
    MD023 = "MD023"
    MD024 = "MD024"
    MD025 = "MD025"
    MD026 = "MD026"
    MD027 = "MD027"
    MD028 = "MD028"
    MD029 = "MD029"
    MD030 = "MD030"
    MD031 = "MD031"
    MD032 = "MD032"
    MD033 = "MD033"
    MD034 = "MD034"
    MD035 = "MD035"
    MD036 = "MD036"
    MD037 = "MD037"
    MD038 = "MD038"
    MD039 = "MD039"
    MD040 = "MD040"
    MD041 = "MD041"
    MD046 = "MD046"
    MD047 = "MD047"


RULE_CLASSES: dict[RuleId, type[RuleBase]] = {
    RuleId.MD001: rules.HeaderIncrementRule,
    RuleId.MD002: rules.FirstHeaderH1Rule,
    RuleId.MD003: rules.HeaderStyleRule,
    RuleId.MD004: rules.UlStyleRule,
    RuleId.MD005: rules.ListIndentRule,
    RuleId.MD006: rules.UlStartLeftRule,
    RuleId.MD007: rules.UlIndentRule,
    RuleId.MD009: rules.NoTrailingSpacesRule,
    RuleId.MD010: rules.NoHardTabsRule,
    RuleId.MD012: rules.NoMultipleBlanksRule,
    RuleId.MD013: rules.LineLengthRule,
    RuleId.MD014: rules.CommandsShowOutputRule,
    RuleId.MD018: rules.NoMissingSpaceAtxRule,
    RuleId.MD019: rules.NoMultipleSpaceAtxRule,
    RuleId.MD020: rules.NoMissingSpaceClosedAtxRule,
    RuleId.MD021: rules.NoMultipleSpaceClosedAtxRule,
    RuleId.MD022: rules.BlanksAroundHeadersRule,
    RuleId.MD023: rules.HeaderStartLeftRule,
    RuleId.MD024: rules.NoDuplicateHeaderRule,
    RuleId.MD025: rules.SingleH1Rule,
    RuleId.MD026: rules.NoTrailingPunctuationRule,
    RuleId.MD027: rules.NoMultipleSpaceBlockquoteRule,
    RuleId.MD028: rules.NoBlanksBlockquoteRule,
    RuleId.MD029: rules.OlPrefixRule,
    RuleId.MD030: rules.ListMarkerSpaceRule,
    RuleId.MD031: rules.BlanksAroundFencesRule,
    RuleId.MD032: rules.BlanksAroundListsRule,
    RuleId.MD033: rules.NoInlineHtmlRule,
    RuleId.MD034: rules.NoBareUrlsRule,
    RuleId.MD035: rules.HrStyleRule,
    RuleId.MD036: rules.NoEmphasisAsHeaderRule,
    RuleId.MD037: rules.NoSpaceInEmphasisRule,
    RuleId.MD038: rules.NoSpaceInCodeRule,
    RuleId.MD039: rules.NoSpaceInLinksRule,
    RuleId.MD040: rules.FencedCodeLanguageRule,
    RuleId.MD041: rules.FirstLineH1Rule,
    RuleId.MD046: rules.CodeBlockStyleRule,
    RuleId.MD047: rules.SingleTrailingNewlineRule,
}


def _verify_dispatch() -> dict[str, RuleId]:
    """Check the enumeration against the class table and index every alias."""
    missing = [rule_id.value for rule_id in RuleId if rule_id not in RULE_CLASSES]
    if missing:
        raise RuntimeError(f"Rules without an implementation: {', '.join(missing)}")

    lookup: dict[str, RuleId] = {}
    for rule_id, rule_class in RULE_CLASSES.items():
        if rule_class.metadata.name != rule_id.value:
            raise RuntimeError(
                f"{rule_class.__name__} declares {rule_class.metadata.name}, registered as {rule_id}"
            )
        for key in (rule_id.value, *rule_class.metadata.aliases):
            if lookup.setdefault(key.lower(), rule_id) is not rule_id:
                raise RuntimeError(f"Identifier '{key}' is claimed by two rules")
    return lookup


_LOOKUP = _verify_dispatch()


def resolve_rule_id(identifier: str) -> RuleId:
    """Map a rule name or alias (any case) to its ``RuleId``.

    Raises
    ------
    UnknownRuleError
        If no rule has that name or alias
    """
    try:
        return _LOOKUP[identifier.strip().lower()]
    except KeyError:
        raise UnknownRuleError(identifier, [rule_id.value for rule_id in RuleId]) from None


def build_rule(rule_id: RuleId, config: LintConfig) -> RuleBase:
    """Instantiate the rule for ``rule_id`` with its parameters from ``config``."""
    return RULE_CLASSES[rule_id].from_config(config)


def resolve_rules(config: LintConfig) -> list[RuleBase]:
    """Build every rule selected by ``config`` in configuration order.

    ``config.rules`` of None selects every rule. Duplicates (including a
    name and its alias) are built once, at their first position.
    """
    identifiers: Iterable[str] = config.rules if config.rules is not None else list(RuleId)
    selected: list[RuleId] = []
    for identifier in identifiers:
        rule_id = resolve_rule_id(identifier)
        if rule_id not in selected:
            selected.append(rule_id)
    return [build_rule(rule_id, config) for rule_id in selected]


def all_metadata() -> list[RuleMetadata]:
    """Metadata of every rule, ordered by name."""
    return [RULE_CLASSES[rule_id].metadata for rule_id in RuleId]
