"""Diagnostic renderers for the supported output formats.

Text formatters return one line of rich markup per diagnostic; colour only
reaches the terminal when the console supports it.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from rich.markup import escape

from mado.kernel.config.models import OutputFormat
from mado.kernel.linting.models import (
    Diagnostic,
    FileFailure,
    Violation,
    by_path_name_position,
    by_path_position_name,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence


class Formatter(ABC):
    """Base class: sorts diagnostics and renders them line by line."""

    sort_key: ClassVar[Callable[[Diagnostic], tuple]] = staticmethod(by_path_position_name)
    markup: ClassVar[bool] = True
    summary: ClassVar[bool] = True

    def render(self, diagnostics: Sequence[Diagnostic]) -> Iterator[str]:
        """Yield output lines for ``diagnostics`` in this format's order."""
        for diagnostic in sorted(diagnostics, key=type(self).sort_key):
            if isinstance(diagnostic, FileFailure):
                yield self.format_failure(diagnostic)
            else:
                yield self.format_violation(diagnostic)

    def format_failure(self, failure: FileFailure) -> str:
        return f"[bold]{escape(str(failure.path))}[/bold]: [red]{escape(failure.message)}[/red]"

    @abstractmethod
    def format_violation(self, violation: Violation) -> str:
        """Render one violation as a single line."""


class ConciseFormatter(Formatter):
    """``path:line:column: NAME description``"""

    def format_violation(self, violation: Violation) -> str:
        start = violation.position.start
        return (
            f"[bold]{escape(str(violation.path))}[/bold]:{start.line}:{start.column}: "
            f"[red]{violation.name}[/red] {escape(violation.description)}"
        )


class MdlFormatter(Formatter):
    """``path:line: NAME description``, ordered by path, rule and position."""

    sort_key = staticmethod(by_path_name_position)

    def format_violation(self, violation: Violation) -> str:
        return (
            f"[bold]{escape(str(violation.path))}[/bold]:{violation.position.start.line}: "
            f"[yellow]{violation.name}[/yellow] {escape(violation.description)}"
        )


class MarkdownlintFormatter(Formatter):
    """``path:line:column NAME/alias description``"""

    def format_violation(self, violation: Violation) -> str:
        start = violation.position.start
        return (
            f"[bold]{escape(str(violation.path))}[/bold]:{start.line}:{start.column} "
            f"[red]{violation.name}/{violation.alias}[/red] {escape(violation.description)}"
        )


class JsonFormatter(Formatter):
    """A single JSON array; read failures carry an ``error`` key."""

    sort_key = staticmethod(by_path_name_position)
    markup = False
    summary = False

    @staticmethod
    def to_dict(diagnostic: Diagnostic) -> dict[str, Any]:
        if isinstance(diagnostic, FileFailure):
            return {"path": str(diagnostic.path), "error": diagnostic.message}
        position = diagnostic.position
        return {
            "path": str(diagnostic.path),
            "line": position.start.line,
            "column": position.start.column,
            "end_line": position.end.line,
            "end_column": position.end.column,
            "rule": diagnostic.name,
            "alias": diagnostic.alias,
            "description": diagnostic.description,
        }

    def format_violation(self, violation: Violation) -> str:
        return json.dumps(self.to_dict(violation))

    def render(self, diagnostics: Sequence[Diagnostic]) -> Iterator[str]:
        ordered = sorted(diagnostics, key=type(self).sort_key)
        yield json.dumps([self.to_dict(diagnostic) for diagnostic in ordered], indent=2)


FORMATTERS: dict[OutputFormat, type[Formatter]] = {
    OutputFormat.CONCISE: ConciseFormatter,
    OutputFormat.MDL: MdlFormatter,
    OutputFormat.MARKDOWNLINT: MarkdownlintFormatter,
    OutputFormat.JSON: JsonFormatter,
}


def get_formatter(output_format: OutputFormat | str) -> Formatter:
    """Return a formatter instance for ``output_format``."""
    return FORMATTERS[OutputFormat(output_format)]()
