"""Core models for the mado linting framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


@dataclass(frozen=True, slots=True, order=True)
class Point:
    """A 1-indexed line/column location in a source file."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Position:
    """An inclusive start/end span in a source file."""

    start: Point
    end: Point

    @classmethod
    def of(cls, start_line: int, start_column: int, end_line: int, end_column: int) -> Position:
        """Build a position from four integers."""
        return cls(Point(start_line, start_column), Point(end_line, end_column))

    @classmethod
    def line(cls, lineno: int, start_column: int = 1, end_column: int | None = None) -> Position:
        """Build a position covering (part of) a single line."""
        return cls.of(lineno, start_column, lineno, start_column if end_column is None else end_column)


class Tag(StrEnum):
    """Categories a rule belongs to."""

    ATX = "atx"
    ATX_CLOSED = "atx_closed"
    BLANK_LINES = "blank_lines"
    BLOCKQUOTE = "blockquote"
    BULLET = "bullet"
    CODE = "code"
    EMPHASIS = "emphasis"
    HARD_TAB = "hard_tab"
    HEADERS = "headers"
    HR = "hr"
    HTML = "html"
    INDENTATION = "indentation"
    LANGUAGE = "language"
    LINE_LENGTH = "line_length"
    LINKS = "links"
    OL = "ol"
    SPACES = "spaces"
    UL = "ul"
    URL = "url"
    WHITESPACE = "whitespace"


@dataclass(frozen=True, slots=True)
class RuleMetadata:
    """Static description of a rule, independent of its configuration."""

    name: str
    description: str
    tags: tuple[Tag, ...]
    aliases: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.aliases:
            raise ValueError(f"Rule {self.name} must declare at least one alias")

    @property
    def alias(self) -> str:
        """The primary alias."""
        return self.aliases[0]


@dataclass(frozen=True, slots=True)
class Violation:
    """A single rule finding at a position in a document.

    Only built through ``RuleBase.to_violation`` so the metadata always
    matches exactly one rule definition. Ordered by (path, name, start).
    """

    path: Path
    name: str
    description: str
    alias: str
    position: Position

    @property
    def sort_key(self) -> tuple[str, str, Point]:
        return (str(self.path), self.name, self.position.start)

    def __lt__(self, other: Violation) -> bool:
        if not isinstance(other, Violation):
            return NotImplemented
        return self.sort_key < other.sort_key


@dataclass(frozen=True, slots=True)
class FileFailure:
    """A file that could not be checked (e.g. unreadable or not UTF-8)."""

    path: Path
    message: str


Diagnostic = Violation | FileFailure


def by_path_name_position(diagnostic: Diagnostic) -> tuple[str, str, Point]:
    """Canonical order: path, rule name, start position."""
    if isinstance(diagnostic, FileFailure):
        return (str(diagnostic.path), "", Point(0, 0))
    return diagnostic.sort_key


def by_path_position_name(diagnostic: Diagnostic) -> tuple[str, Point, str]:
    """Source order: path, start position, rule name."""
    if isinstance(diagnostic, FileFailure):
        return (str(diagnostic.path), Point(0, 0), "")
    return (str(diagnostic.path), diagnostic.position.start, diagnostic.name)


@dataclass(slots=True)
class LintReport:
    """Aggregated results of linting a set of files."""

    violations: list[Violation] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    def extend(self, violations: Iterable[Violation]) -> None:
        """Append a batch of violations."""
        self.violations.extend(violations)

    def add_failure(self, failure: FileFailure) -> None:
        """Record a file that could not be checked."""
        self.failures.append(failure)

    @property
    def is_clean(self) -> bool:
        """True if no violations and no failures were recorded."""
        return not self.violations and not self.failures

    @property
    def has_failures(self) -> bool:
        """True if any file could not be checked."""
        return bool(self.failures)

    def __len__(self) -> int:
        return len(self.violations) + len(self.failures)

    def sorted_diagnostics(
        self, key: Callable[[Diagnostic], tuple] = by_path_name_position
    ) -> list[Diagnostic]:
        """All violations and failures in one deterministically sorted list."""
        diagnostics: list[Diagnostic] = [*self.violations, *self.failures]
        return sorted(diagnostics, key=key)
