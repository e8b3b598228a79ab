"""mado kernel: documents, syntax trees, rules and the lint pipeline.

The kernel never reads configuration files or writes to the terminal;
``mado.compiler`` turns files into validated models and ``mado.cli``
owns all user-facing output.
"""

from mado.kernel.document import Document
from mado.kernel.exceptions import (
    ConcurrencyError,
    ConfigurationError,
    DocumentReadError,
    LintError,
    MadoError,
    UnknownRuleError,
    ValidationError,
)
from mado.kernel.syntax_tree import Node, NodeKind, SyntaxTree

__all__ = [
    "ConcurrencyError",
    "ConfigurationError",
    "Document",
    "DocumentReadError",
    "LintError",
    "MadoError",
    "Node",
    "NodeKind",
    "SyntaxTree",
    "UnknownRuleError",
    "ValidationError",
]
