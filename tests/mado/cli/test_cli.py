"""Tests for the mado command line interface."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mado import __version__
from mado.cli.main import app


@pytest.fixture
def runner():
    """Fixture providing a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestMainApp:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "mado" in result.output
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "rules" in result.output

    def test_invalid_log_level(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--log-level", "loud", "rules"])
        assert result.exit_code != 0


class TestCheckCommand:
    def test_clean_file(self, runner: CliRunner, write_markdown: Callable[[str, str], Path]) -> None:
        path = write_markdown("clean.md", "# Title\n\n## Section\n\nText.\n")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 0
        assert "All checks passed!" in result.output

    def test_violations(self, runner: CliRunner, write_markdown: Callable[[str, str], Path]) -> None:
        write_markdown("skip.md", "# H1\n\n### H3\n")
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "skip.md:3:1: MD001" in result.output
        assert "Found 1 error." in result.output

    def test_output_format_option(
        self, runner: CliRunner, write_markdown: Callable[[str, str], Path]
    ) -> None:
        write_markdown("skip.md", "# H1\n\n### H3\n")
        result = runner.invoke(app, ["check", "skip.md", "--output-format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert [item["rule"] for item in data] == ["MD001"]

    def test_config_from_working_directory(
        self, runner: CliRunner, workdir: Path, write_markdown: Callable[[str, str], Path]
    ) -> None:
        write_markdown("skip.md", "# H1\n\n### H3\n")
        (workdir / "mado.toml").write_text('[lint]\nrules = ["MD009"]\n')
        result = runner.invoke(app, ["check", "skip.md"])
        assert result.exit_code == 0

    def test_explicit_config(
        self, runner: CliRunner, workdir: Path, write_markdown: Callable[[str, str], Path]
    ) -> None:
        write_markdown("skip.md", "# H1\n\n### H3\n")
        (workdir / "custom.toml").write_text('[lint]\noutput-format = "mdl"\nrules = ["MD001"]\n')
        result = runner.invoke(app, ["check", "skip.md", "--config", "custom.toml"])
        assert result.exit_code == 1
        assert "skip.md:3: MD001" in result.output

    def test_missing_config_is_an_error(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["check", "--config", "absent.toml"])
        assert result.exit_code == 2
        assert "file not found" in result.output

    def test_unknown_rule_is_an_error(self, runner: CliRunner, workdir: Path) -> None:
        (workdir / "mado.toml").write_text('[lint]\nrules = ["MD999"]\n')
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 2
        assert "MD999" in result.output

    def test_unreadable_file(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["check", "missing.md"])
        assert result.exit_code == 1
        assert "missing.md:" in result.output
        assert "Found 1 error." in result.output


class TestRulesCommand:
    def test_table(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "MD001" in result.output
        assert "38 rules" in result.output

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["rules", "--format", "json"])
        assert result.exit_code == 0
        assert '"MD047"' in result.output
        assert '"header-increment"' in result.output
