"""Markdown checking command for the mado CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from mado.compiler.config_loader import load_config
from mado.core.logging import configure_logging
from mado.kernel.config.models import OutputFormat
from mado.kernel.exceptions import MadoError
from mado.kernel.linting.checker import Checker, ExitCode

console = Console(soft_wrap=True)
err_console = Console(stderr=True)


def check(
    ctx: typer.Context,
    paths: Annotated[
        list[Path] | None,
        typer.Argument(
            help="Files, directories or glob patterns to check (default: current directory)"
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option(
            "--output-format",
            "-o",
            help="Output format (concise, mdl, markdownlint, json)",
            case_sensitive=False,
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a mado.toml, pyproject.toml or YAML config file",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Check Markdown files against the configured rules.

    Exits with 0 when no problems were found, 1 when violations or
    unreadable files were reported and 2 on configuration or internal
    errors.

    Examples
    --------
    mado check
    mado check README.md docs/
    mado check "docs/**/*.md" --output-format mdl
    """
    try:
        mado_config = load_config(config)
        settings = ctx.obj or {}
        if not settings.get("log_level_explicit"):
            configure_logging(level=mado_config.logging.level, format=mado_config.logging.format)

        checker = Checker(mado_config, console=console, output_format=output_format)
        exit_code = checker.check([str(path) for path in paths] if paths else ["."])
    except MadoError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(ExitCode.ERROR) from e

    raise typer.Exit(int(exit_code))
