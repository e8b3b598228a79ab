"""Apply a resolved rule set to one document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mado.core.logging import get_logger
from mado.kernel.config.models import LintConfig
from mado.kernel.exceptions import LintError
from mado.kernel.linting.registry import resolve_rules

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mado.kernel.document import Document
    from mado.kernel.linting.models import Violation
    from mado.kernel.linting.rules import RuleLike

logger = get_logger(__name__)


class Linter:
    """Runs every enabled rule against a document.

    Rules are resolved once, at construction, so an unknown identifier
    fails before any file is read. The linter holds no per-document state
    and may be shared by any number of threads.

    Parameters
    ----------
    config : LintConfig | None
        Rule selection and parameters; defaults enable every rule
    rules : Sequence[RuleLike] | None
        Ready-made rules, used instead of resolving ``config``
    """

    def __init__(
        self, config: LintConfig | None = None, rules: Sequence[RuleLike] | None = None
    ) -> None:
        self.config = config or LintConfig()
        self.rules: tuple[RuleLike, ...] = (
            tuple(rules) if rules is not None else tuple(resolve_rules(self.config))
        )
        logger.debug(
            "Resolved {count} rules: {names}",
            count=len(self.rules),
            names=", ".join(rule.metadata.name for rule in self.rules),
        )

    def check(self, doc: Document) -> list[Violation]:
        """Run all rules in order and return their violations sorted.

        Raises
        ------
        LintError
            As soon as one rule fails; partial results are discarded
        """
        violations: list[Violation] = []
        for rule in self.rules:
            try:
                violations.extend(rule.check(doc))
            except LintError:
                raise
            except Exception as e:
                raise LintError(rule.metadata.name, doc.path, f"{type(e).__name__}: {e}") from e
        violations.sort()
        return violations
