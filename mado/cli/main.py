"""mado CLI - Main entrypoint."""

from enum import StrEnum

import typer
from rich.console import Console

from mado import __version__
from mado.cli.commands import check_cmd, rules_cmd
from mado.core.logging import configure_logging

# Create the main Typer app
app = typer.Typer(
    name="mado",
    help="mado - A fast Markdown linter.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.command(name="check", help="Check Markdown files for style violations")(check_cmd.check)
app.command(name="rules", help="List the available rules")(rules_cmd.rules)


class LogLevelOption(StrEnum):
    """Accepted ``--log-level`` values."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]mado[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    log_level: LogLevelOption | None = typer.Option(
        None,
        "--log-level",
        help="Log level (overrides the logging section of the config file)",
        case_sensitive=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """mado - A fast Markdown linter.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    ctx.obj.update({
        "log_level": log_level,
        "log_level_explicit": log_level is not None,
    })

    if log_level is not None:
        configure_logging(level=log_level.upper())  # type: ignore[arg-type]


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
