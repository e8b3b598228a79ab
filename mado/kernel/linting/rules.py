"""Lint rule protocol and the base class every Markdown rule extends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

from mado.kernel.linting.models import Position, RuleMetadata, Violation

if TYPE_CHECKING:
    from pathlib import Path

    from mado.kernel.config.models import LintConfig
    from mado.kernel.document import Document


@runtime_checkable
class RuleLike(Protocol):
    """Protocol for a single lint rule."""

    metadata: RuleMetadata

    def check(self, doc: Document) -> list[Violation]:
        """Inspect ``doc`` and return its violations in any order.

        Returns an empty list when nothing matches. Raises ``LintError``
        only for failures internal to the rule.
        """
        ...


class RuleBase(ABC):
    """Shared plumbing for rules: metadata and violation construction.

    Subclasses set ``metadata`` and implement ``check``. Any scan state
    lives in locals of ``check`` so one instance can serve every document
    and every worker thread.
    """

    metadata: ClassVar[RuleMetadata]

    @classmethod
    def from_config(cls, config: LintConfig) -> RuleBase:
        """Build the rule with parameters taken from ``config``."""
        return cls()

    @property
    def name(self) -> str:
        return self.metadata.name

    @abstractmethod
    def check(self, doc: Document) -> list[Violation]:
        """Inspect ``doc`` and return its violations."""

    def to_violation(self, path: Path, position: Position) -> Violation:
        """Build a violation carrying this rule's name, description and alias."""
        return Violation(
            path=path,
            name=self.metadata.name,
            description=self.metadata.description,
            alias=self.metadata.alias,
            position=position,
        )

    def __repr__(self) -> str:
        params = ", ".join(
            f"{key}={value!r}" for key, value in vars(self).items() if not key.startswith("_")
        )
        return f"{type(self).__name__}({params})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), self.metadata.name))
