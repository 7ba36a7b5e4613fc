"""CLI command for galscript vars - inspect the variable index."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from galscript.cli.formatters.base import OutputFormat
from galscript.cli.formatters.json_formatter import JsonFormatter
from galscript.cli.formatters.table_formatter import TableFormatter
from galscript.cli.utils.cli_handler import async_cli_command, open_project

console = Console()


@async_cli_command
async def vars_command(
    undefined: Annotated[
        bool,
        typer.Option("--undefined", "-u", help="Only list variables that are never set"),
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List variables defined with setVar and used in conditions."""
    project = await open_project()
    index = project.variables

    if undefined:
        names = index.get_undefined_variables()
        if json_output:
            print(JsonFormatter().format({"undefined": names}))
        elif not names:
            console.print("[green]All used variables are defined.[/green]")
        else:
            for name in names:
                console.print(f"[yellow]{name}[/yellow]")
        return

    records = [index.get_all_variables()[name] for name in sorted(index.get_all_variables())]
    if json_output:
        print(JsonFormatter().format(records))
        return

    rows = [
        {
            "name": record.name,
            "defined": "yes" if record.is_defined else "no",
            "definitions": len(record.definitions),
            "usages": len(record.usages),
        }
        for record in records
    ]
    if not rows:
        console.print("[yellow]No variables found.[/yellow]")
        return
    TableFormatter(console, title="Variables").print(rows, OutputFormat.TABLE)
