"""Output formatting for lint diagnostics."""

from mado.output.formatters import FORMATTERS, Formatter, get_formatter

__all__ = ["FORMATTERS", "Formatter", "get_formatter"]
