"""Core exception hierarchy for mado.

All mado exceptions inherit from MadoError so callers (the CLI in particular)
can separate "could not check" from "checked and found violations".
"""

from __future__ import annotations

from pathlib import Path

# ============================================================================
# Base Exception
# ============================================================================


class MadoError(Exception):
    """Base exception for all mado errors.

    Catch this to handle every fatal condition raised by the linter.
    """

    pass


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(MadoError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("mado.toml", "expected a [lint] table")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the configuration source or section
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class UnknownRuleError(ConfigurationError):
    """Raised when a configured rule identifier has no rule behind it.

    Examples
    --------
    Example usage::

        raise UnknownRuleError("MD999", ["MD001", "MD002"])
    """

    def __init__(self, identifier: str, available: list[str] | None = None) -> None:
        """Initialize unknown rule error.

        Args
        ----
            identifier: The rule name or alias that could not be resolved
            available: Known rule names (optional)
        """
        reason = f"unknown rule '{identifier}'"
        if available:
            reason += f". Available: {', '.join(available[:5])}"
            if len(available) > 5:
                reason += f" ... and {len(available) - 5} more"
        super().__init__("lint.rules", reason)
        self.identifier = identifier
        self.available = available


class ValidationError(MadoError):
    """Raised when a configuration value fails validation.

    Examples
    --------
    Example usage::

        raise ValidationError("md013.line_length", "must be positive", value=-1)
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the field that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


# ============================================================================
# Document & Lint Errors
# ============================================================================


class DocumentReadError(MadoError):
    """Raised when a file cannot be read as UTF-8 text.

    Attributable to exactly one path. The runner records it as a file
    failure and keeps linting the remaining files.

    Examples
    --------
    Example usage::

        raise DocumentReadError(Path("README.md"), "No such file or directory")
    """

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize document read error.

        Args
        ----
            path: The file that could not be read
            reason: Operating system or decoding message
        """
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class LintError(MadoError):
    """Raised when a rule fails for a reason internal to the rule.

    Aborts the result for the document and, through the runner, the run.

    Examples
    --------
    Example usage::

        raise LintError("MD013", Path("README.md"), "invalid pattern")
    """

    def __init__(self, rule: str, path: Path, reason: str) -> None:
        """Initialize lint error.

        Args
        ----
            rule: Name of the failing rule
            path: Document being checked
            reason: What went wrong
        """
        super().__init__(f"{path}: rule {rule} failed: {reason}")
        self.rule = rule
        self.path = path
        self.reason = reason


# ============================================================================
# Concurrency Errors
# ============================================================================


class ConcurrencyError(MadoError):
    """Raised when the aggregation pipeline cannot complete.

    Covers a failed aggregator thread, a join that never finishes and a
    collection that is still shared when the result is taken.

    Examples
    --------
    Example usage::

        raise ConcurrencyError("aggregator thread failed: ...")
    """

    def __init__(self, reason: str) -> None:
        """Initialize concurrency error.

        Args
        ----
            reason: Description of the failure
        """
        super().__init__(f"Concurrency error: {reason}")
        self.reason = reason


__all__ = [
    "ConcurrencyError",
    "ConfigurationError",
    "DocumentReadError",
    "LintError",
    "MadoError",
    "UnknownRuleError",
    "ValidationError",
]
