"""Rule listing command for the mado CLI."""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from mado.kernel.linting.registry import all_metadata

console = Console()


class ListFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def rules(
    format: Annotated[
        ListFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format (table, json)",
        ),
    ] = ListFormat.TABLE,
) -> None:
    """List every available rule with its aliases and tags."""
    metadata = all_metadata()

    if format == ListFormat.JSON:
        data = [
            {
                "name": rule.name,
                "aliases": list(rule.aliases),
                "tags": [str(tag) for tag in rule.tags],
                "description": rule.description,
            }
            for rule in metadata
        ]
        console.print_json(json.dumps(data))
        return

    table = Table(title="Markdown Rules", show_header=True, border_style="dim")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Aliases", style="green")
    table.add_column("Tags", style="dim")
    table.add_column("Description")

    for rule in metadata:
        table.add_row(rule.name, ", ".join(rule.aliases), ", ".join(rule.tags), rule.description)

    console.print(table)
    console.print(f"\n[dim]{len(metadata)} rules[/dim]")
