"""Built-in Markdown rules, grouped by what they inspect."""

from mado.kernel.linting.markdown_rules.code import (
    BlanksAroundFencesRule,
    CodeBlockStyleRule,
    CommandsShowOutputRule,
    FencedCodeLanguageRule,
    NoSpaceInCodeRule,
)
from mado.kernel.linting.markdown_rules.content import (
    HrStyleRule,
    NoBareUrlsRule,
    NoInlineHtmlRule,
    NoSpaceInEmphasisRule,
    NoSpaceInLinksRule,
)
from mado.kernel.linting.markdown_rules.headings import (
    BlanksAroundHeadersRule,
    FirstHeaderH1Rule,
    FirstLineH1Rule,
    HeaderIncrementRule,
    HeaderStartLeftRule,
    HeaderStyleRule,
    NoDuplicateHeaderRule,
    NoEmphasisAsHeaderRule,
    NoMissingSpaceAtxRule,
    NoMissingSpaceClosedAtxRule,
    NoMultipleSpaceAtxRule,
    NoMultipleSpaceClosedAtxRule,
    NoTrailingPunctuationRule,
    SingleH1Rule,
)
from mado.kernel.linting.markdown_rules.lists import (
    BlanksAroundListsRule,
    ListIndentRule,
    ListMarkerSpaceRule,
    OlPrefixRule,
    UlIndentRule,
    UlStartLeftRule,
    UlStyleRule,
)
from mado.kernel.linting.markdown_rules.whitespace import (
    LineLengthRule,
    NoBlanksBlockquoteRule,
    NoHardTabsRule,
    NoMultipleBlanksRule,
    NoMultipleSpaceBlockquoteRule,
    NoTrailingSpacesRule,
    SingleTrailingNewlineRule,
)

__all__ = [
    "BlanksAroundFencesRule",
    "BlanksAroundHeadersRule",
    "BlanksAroundListsRule",
    "CodeBlockStyleRule",
    "CommandsShowOutputRule",
    "FencedCodeLanguageRule",
    "FirstHeaderH1Rule",
    "FirstLineH1Rule",
    "HeaderIncrementRule",
    "HeaderStartLeftRule",
    "HeaderStyleRule",
    "HrStyleRule",
    "LineLengthRule",
    "ListIndentRule",
    "ListMarkerSpaceRule",
    "NoBareUrlsRule",
    "NoBlanksBlockquoteRule",
    "NoDuplicateHeaderRule",
    "NoEmphasisAsHeaderRule",
    "NoHardTabsRule",
    "NoInlineHtmlRule",
    "NoMissingSpaceAtxRule",
    "NoMissingSpaceClosedAtxRule",
    "NoMultipleBlanksRule",
    "NoMultipleSpaceAtxRule",
    "NoMultipleSpaceBlockquoteRule",
    "NoMultipleSpaceClosedAtxRule",
    "NoSpaceInCodeRule",
    "NoSpaceInEmphasisRule",
    "NoSpaceInLinksRule",
    "NoTrailingPunctuationRule",
    "NoTrailingSpacesRule",
    "OlPrefixRule",
    "SingleH1Rule",
    "SingleTrailingNewlineRule",
    "UlIndentRule",
    "UlStartLeftRule",
    "UlStyleRule",
]
