"""Configuration models."""

from mado.kernel.config.models import (
    CodeBlockStyle,
    HeadingStyle,
    LintConfig,
    ListStyle,
    LoggingConfig,
    MadoConfig,
    OrderedListStyle,
    OutputFormat,
)

__all__ = [
    "CodeBlockStyle",
    "HeadingStyle",
    "LintConfig",
    "ListStyle",
    "LoggingConfig",
    "MadoConfig",
    "OrderedListStyle",
    "OutputFormat",
]
