"""Tests for mado.kernel.exceptions."""

from pathlib import Path

from mado.kernel.exceptions import (
    ConcurrencyError,
    ConfigurationError,
    DocumentReadError,
    LintError,
    MadoError,
    UnknownRuleError,
    ValidationError,
)


class TestHierarchy:
    def test_everything_is_a_mado_error(self) -> None:
        for error_class in (
            ConcurrencyError,
            ConfigurationError,
            DocumentReadError,
            LintError,
            UnknownRuleError,
            ValidationError,
        ):
            assert issubclass(error_class, MadoError)

    def test_unknown_rule_is_a_configuration_error(self) -> None:
        assert issubclass(UnknownRuleError, ConfigurationError)


class TestMessages:
    def test_configuration_error(self) -> None:
        error = ConfigurationError("mado.toml", "expected a table")
        assert str(error) == "Configuration error in 'mado.toml': expected a table"
        assert error.component == "mado.toml"
        assert error.reason == "expected a table"

    def test_unknown_rule_lists_a_few_alternatives(self) -> None:
        error = UnknownRuleError("MD999", [f"MD00{i}" for i in range(1, 8)])
        assert "unknown rule 'MD999'" in str(error)
        assert "MD001, MD002, MD003, MD004, MD005 ... and 2 more" in str(error)

    def test_validation_error(self) -> None:
        error = ValidationError("md013.line_length", "must be positive", value=-1)
        assert str(error) == "Validation failed for 'md013.line_length': must be positive (got -1)"

    def test_document_read_error(self) -> None:
        error = DocumentReadError(Path("a.md"), "No such file or directory")
        assert str(error) == "a.md: No such file or directory"
        assert error.path == Path("a.md")

    def test_lint_error(self) -> None:
        error = LintError("MD013", Path("a.md"), "invalid pattern")
        assert str(error) == "a.md: rule MD013 failed: invalid pattern"
        assert (error.rule, error.reason) == ("MD013", "invalid pattern")

    def test_concurrency_error(self) -> None:
        assert str(ConcurrencyError("join timed out")) == "Concurrency error: join timed out"
