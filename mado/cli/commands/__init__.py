"""CLI command modules."""

from . import check_cmd, rules_cmd

__all__ = ["check_cmd", "rules_cmd"]
