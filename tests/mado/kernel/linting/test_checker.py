"""Tests for mado.kernel.linting.checker."""

from __future__ import annotations

import io
import json
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from mado.kernel.config.models import LintConfig, MadoConfig, OutputFormat
from mado.kernel.exceptions import UnknownRuleError
from mado.kernel.linting.checker import Checker, ExitCode, summary_line
from mado.kernel.linting.markdown_rules import HeaderIncrementRule
from mado.kernel.linting.models import LintReport, Position


def _checker(*rules: str, output_format: OutputFormat | None = None) -> tuple[Checker, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, force_terminal=False, color_system=None)
    config = MadoConfig(lint=LintConfig(rules=list(rules) or None))
    return Checker(config, console=console, output_format=output_format, max_workers=2), buffer


class TestSummaryLine:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "Found 0 errors."), (1, "Found 1 error."), (2, "Found 2 errors."), (12, "Found 12 errors.")],
    )
    def test_singular_and_plural(self, count: int, expected: str) -> None:
        assert summary_line(count) == expected


class TestChecker:
    def test_clean_run(self, write_markdown: Callable[[str, str], Path]) -> None:
        path = write_markdown("clean.md", "# Title\n\n## Section\n\nText.\n")
        checker, buffer = _checker()
        assert checker.check([path]) is ExitCode.SUCCESS
        assert buffer.getvalue() == "All checks passed!\n"

    def test_single_violation(self, write_markdown: Callable[[str, str], Path]) -> None:
        path = write_markdown("skip.md", "# H1\n\n### H3\n")
        checker, buffer = _checker("MD001")
        assert checker.check([path]) is ExitCode.FAILURE
        lines = buffer.getvalue().splitlines()
        assert lines == [
            f"{path}:3:1: MD001 Header levels should only increment by one level at a time",
            "",
            "Found 1 error.",
        ]

    def test_plural_summary(self, write_markdown: Callable[[str, str], Path]) -> None:
        path = write_markdown("blanks.md", "Text\n\n\n\nMore\n")
        checker, buffer = _checker("MD012")
        assert checker.check([path]) is ExitCode.FAILURE
        assert buffer.getvalue().splitlines()[-1] == "Found 2 errors."

    def test_unreadable_file_fails_the_run(
        self, tmp_path: Path, write_markdown: Callable[[str, str], Path]
    ) -> None:
        good = write_markdown("good.md", "# Title\n")
        missing = tmp_path / "missing.md"
        checker, buffer = _checker("MD001")
        assert checker.check([good, missing]) is ExitCode.FAILURE
        output = buffer.getvalue()
        assert output.startswith(f"{missing}: ")
        assert output.splitlines()[-1] == "Found 1 error."

    def test_output_format_override(self, write_markdown: Callable[[str, str], Path]) -> None:
        path = write_markdown("skip.md", "# H1\n\n### H3\n")
        checker, buffer = _checker("MD001", output_format=OutputFormat.MDL)
        checker.check([path])
        assert buffer.getvalue().splitlines()[0] == (
            f"{path}:3: MD001 Header levels should only increment by one level at a time"
        )

    def test_json_output_has_no_summary(self, write_markdown: Callable[[str, str], Path]) -> None:
        path = write_markdown("skip.md", "# H1\n\n### H3\n")
        checker, buffer = _checker("MD001", output_format=OutputFormat.JSON)
        assert checker.check([path]) is ExitCode.FAILURE
        data = json.loads(buffer.getvalue())
        assert data == [
            {
                "path": str(path),
                "line": 3,
                "column": 1,
                "end_line": 3,
                "end_column": 6,
                "rule": "MD001",
                "alias": "header-increment",
                "description": "Header levels should only increment by one level at a time",
            }
        ]

    def test_json_output_when_clean(self, write_markdown: Callable[[str, str], Path]) -> None:
        path = write_markdown("clean.md", "# Title\n")
        checker, buffer = _checker("MD001", output_format=OutputFormat.JSON)
        assert checker.check([path]) is ExitCode.SUCCESS
        assert json.loads(buffer.getvalue()) == []

    def test_markup_in_paths_is_not_interpreted(self) -> None:
        path = Path("[bold]odd.md")
        report = LintReport()
        report.extend([HeaderIncrementRule().to_violation(path, Position.line(3, 1, 6))])
        checker, buffer = _checker("MD001")
        checker.report(report)
        assert buffer.getvalue().startswith("[bold]odd.md:3:1: MD001")

    def test_unknown_rule_fails_at_construction(self) -> None:
        with pytest.raises(UnknownRuleError):
            _checker("MD001", "bogus")

    def test_lint_returns_the_raw_report(self, write_markdown: Callable[[str, str], Path]) -> None:
        path = write_markdown("skip.md", "# H1\n\n### H3\n")
        checker, buffer = _checker("MD001")
        report = checker.lint([path])
        assert len(report.violations) == 1
        assert buffer.getvalue() == ""


class TestExitCode:
    def test_values(self) -> None:
        assert (ExitCode.SUCCESS, ExitCode.FAILURE, ExitCode.ERROR) == (0, 1, 2)
