"""Markdown file discovery."""

from __future__ import annotations

import glob
import os
from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import GitIgnoreSpec

from mado.core.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = get_logger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


class _IgnoreRules:
    """Patterns from one ``.gitignore``, matched relative to its directory.

    Matching follows git: the last pattern that matches decides, so a
    ``!pattern`` re-includes what an earlier line excluded.
    """

    def __init__(self, base: Path, lines: Iterable[str]) -> None:
        self.base = base
        self.spec = GitIgnoreSpec.from_lines(lines)

    @classmethod
    def load(cls, directory: Path) -> _IgnoreRules | None:
        path = directory / ".gitignore"
        if not path.is_file():
            return None
        try:
            return cls(directory, path.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable {path}: {error}", path=path, error=e)
            return None

    def decide(self, path: Path, is_dir: bool) -> bool | None:
        """True if ignored, False if re-included, None when no pattern applies."""
        try:
            relative = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        if is_dir:
            relative += "/"
        return self.spec.check_file(relative).include


class FileWalker:
    """Resolves path patterns into the Markdown files to lint.

    Parameters
    ----------
    patterns : Iterable[str | Path]
        Files, directories (searched recursively) or glob patterns
    respect_gitignore : bool, default=True
        Skip entries matched by ``.gitignore`` files in walked directories

    Notes
    -----
    Explicitly named files are always yielded, whatever their suffix, so a
    missing or unreadable file surfaces as a read failure instead of being
    dropped. Hidden directories are never entered.
    """

    def __init__(self, patterns: Iterable[str | Path], respect_gitignore: bool = True) -> None:
        self.patterns = [str(pattern) for pattern in patterns] or ["."]
        self.respect_gitignore = respect_gitignore

    def __iter__(self) -> Iterator[Path]:
        seen: set[Path] = set()
        for path in self._candidates():
            if path not in seen:
                seen.add(path)
                yield path

    def _candidates(self) -> Iterator[Path]:
        for pattern in self.patterns:
            path = Path(pattern)
            if path.is_dir():
                yield from self._walk(path)
            elif glob.has_magic(pattern):
                for match in sorted(glob.glob(pattern, recursive=True)):
                    match_path = Path(match)
                    if match_path.is_dir():
                        yield from self._walk(match_path)
                    elif match_path.suffix.lower() in MARKDOWN_SUFFIXES:
                        yield match_path
            else:
                yield path

    def _walk(self, root: Path) -> Iterator[Path]:
        ignores: dict[Path, list[_IgnoreRules]] = {}
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            inherited = ignores.pop(current, [])
            rules = inherited
            if self.respect_gitignore and (local := _IgnoreRules.load(current)) is not None:
                rules = [*inherited, local]

            dirnames[:] = sorted(
                name
                for name in dirnames
                if not name.startswith(".") and not self._ignored(current / name, rules, is_dir=True)
            )
            for name in dirnames:
                ignores[current / name] = rules

            for name in sorted(filenames):
                path = current / name
                if path.suffix.lower() not in MARKDOWN_SUFFIXES:
                    continue
                if not self._ignored(path, rules, is_dir=False):
                    yield path

    @staticmethod
    def _ignored(path: Path, rules: list[_IgnoreRules], is_dir: bool) -> bool:
        # The deepest .gitignore with a matching pattern wins
        for rule in reversed(rules):
            decision = rule.decide(path, is_dir)
            if decision is not None:
                return decision
        return False
