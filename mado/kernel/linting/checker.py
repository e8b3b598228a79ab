"""Top-level check orchestration: config in, exit status out."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from rich.console import Console

from mado.core.logging import get_logger
from mado.kernel.config.models import MadoConfig, OutputFormat
from mado.kernel.linting.linter import Linter
from mado.kernel.linting.runner import DEFAULT_CAPACITY, ParallelLintRunner
from mado.kernel.linting.walker import FileWalker
from mado.output.formatters import get_formatter

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from mado.kernel.linting.models import LintReport

logger = get_logger(__name__)


class ExitCode(IntEnum):
    SUCCESS = 0
    FAILURE = 1
    ERROR = 2


def summary_line(count: int) -> str:
    """``Found 1 error.`` or ``Found N errors.``"""
    return f"Found {count} error." if count == 1 else f"Found {count} errors."


class Checker:
    """Lint a set of paths and report the result.

    Parameters
    ----------
    config : MadoConfig | None
        Resolved configuration; defaults when omitted
    console : Console | None
        Destination for diagnostics; stdout when omitted
    output_format : OutputFormat | None
        Overrides ``config.lint.output_format``
    max_workers : int | None
        Worker threads for the runner

    Raises
    ------
    UnknownRuleError
        At construction, if the configuration names an unknown rule
    """

    def __init__(
        self,
        config: MadoConfig | None = None,
        console: Console | None = None,
        output_format: OutputFormat | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.config = config or MadoConfig()
        self.console = console or Console(soft_wrap=True)
        self.output_format = output_format or self.config.lint.output_format
        self.max_workers = max_workers
        self.linter = Linter(self.config.lint)

    def lint(self, patterns: Iterable[str | Path]) -> LintReport:
        """Run the parallel runner over ``patterns`` and return the raw report."""
        runner = ParallelLintRunner(
            FileWalker(patterns),
            self.linter,
            capacity=DEFAULT_CAPACITY,
            max_workers=self.max_workers,
        )
        return runner.run()

    def check(self, patterns: Iterable[str | Path]) -> ExitCode:
        """Lint ``patterns``, print every diagnostic and a summary.

        Returns
        -------
        ExitCode
            SUCCESS when nothing was reported, FAILURE otherwise
        """
        report = self.lint(patterns)
        self.report(report)
        return ExitCode.SUCCESS if report.is_clean else ExitCode.FAILURE

    def report(self, report: LintReport) -> None:
        """Write ``report`` in the configured format."""
        formatter = get_formatter(self.output_format)
        diagnostics = [*report.violations, *report.failures]

        if not diagnostics and formatter.summary:
            self.console.print("[green]All checks passed![/green]", soft_wrap=True)
            return

        for line in formatter.render(diagnostics):
            self.console.print(line, markup=formatter.markup, highlight=False, soft_wrap=True)

        if formatter.summary:
            self.console.print()
            self.console.print(summary_line(len(diagnostics)), highlight=False, soft_wrap=True)

        logger.debug(
            "Reported {violations} violations and {failures} read failures",
            violations=len(report.violations),
            failures=len(report.failures),
        )
