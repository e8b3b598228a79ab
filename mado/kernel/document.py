"""Markdown document: source text plus its parsed syntax tree."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property, lru_cache
from pathlib import Path

from markdown_it import MarkdownIt
from mdit_py_plugins.front_matter import front_matter_plugin

from mado.kernel.exceptions import DocumentReadError
from mado.kernel.syntax_tree import NodeKind, SyntaxTree


@lru_cache(maxsize=1)
def markdown_parser() -> MarkdownIt:
    """Return the shared CommonMark parser (tables, strikethrough, front matter)."""
    md = MarkdownIt("commonmark", {"html": True})
    md.enable("table")
    md.enable("strikethrough")
    md.use(front_matter_plugin)
    return md


_LINE_BREAK = re.compile(r"\r\n?|\n")


def split_lines(text: str) -> list[str]:
    """Split on ``\\r\\n``, ``\\r`` or ``\\n``, as the parser does.

    A final line break does not start an extra empty line.
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


@dataclass(frozen=True)
class Document:
    """One Markdown file as text and syntax tree.

    The tree is built eagerly and never modified, so any number of rules
    may read it during a check pass.

    Attributes
    ----------
    path : Path
        File the text came from; identifies the document in violations
    text : str
        Full UTF-8 source
    ast : SyntaxTree
        Parsed tree
    """

    path: Path
    text: str
    ast: SyntaxTree = field(repr=False, compare=False)

    @classmethod
    def open(cls, path: Path | str) -> Document:
        """Read ``path`` as UTF-8 and parse it.

        Raises
        ------
        DocumentReadError
            If the file is missing, unreadable or not valid UTF-8
        """
        path = Path(path)
        try:
            text = path.read_bytes().decode("utf-8")
        except OSError as e:
            raise DocumentReadError(path, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise DocumentReadError(path, f"invalid UTF-8: {e.reason}") from e
        return cls.from_text(path, text)

    @classmethod
    def from_text(cls, path: Path | str, text: str) -> Document:
        """Parse ``text`` as if it had been read from ``path``."""
        tokens = markdown_parser().parse(text)
        return cls(Path(path), text, SyntaxTree.from_tokens(tokens, split_lines(text)))

    @cached_property
    def lines(self) -> tuple[str, ...]:
        """Source lines without line terminators."""
        return tuple(split_lines(self.text))

    def line(self, lineno: int) -> str:
        """Return the 1-indexed line ``lineno``."""
        return self.lines[lineno - 1]

    @cached_property
    def front_matter(self) -> str | None:
        """Raw contents of a leading ``---`` metadata block, if there is one."""
        first = self.ast.first_child()
        if first is not None and first.kind == NodeKind.FRONT_MATTER:
            return first.content
        return None

    @cached_property
    def front_matter_end(self) -> int:
        """Last line occupied by front matter, 0 when there is none."""
        first = self.ast.first_child()
        if first is not None and first.kind == NodeKind.FRONT_MATTER:
            return first.position.end.line
        return 0
