"""Table output formatter for CLI."""

from __future__ import annotations

import io
from typing import Any

from rich.console import Console
from rich.table import Table

from galscript.cli.formatters.base import OutputFormat, OutputFormatter


def render_table(table: Table) -> str:
    """Render a rich table to a string."""
    string_io = io.StringIO()
    Console(file=string_io, force_terminal=True, width=120).print(table)
    return string_io.getvalue()


class TableFormatter(OutputFormatter[list[dict[str, Any]]]):
    """Formatter for tabular data output."""

    def __init__(self, console: Console | None = None, title: str | None = None) -> None:
        super().__init__(console)
        self.title = title

    def build_table(self, data: list[dict[str, Any]]) -> Table:
        """Create a rich table with one column per key of the first row."""
        columns = list(data[0].keys()) if data else []
        table = Table(title=self.title, show_header=True, header_style="bold magenta")
        for col in columns:
            table.add_column(col.replace("_", " ").title())
        for row in data:
            table.add_row(*[str(row.get(col, "")) for col in columns])
        return table

    def format(
        self, data: list[dict[str, Any]], format_type: OutputFormat = OutputFormat.TABLE
    ) -> str:
        """Format rows as a rich table, or as plain lines for TEXT."""
        if not data:
            return "No data to display"

        if format_type == OutputFormat.TEXT:
            columns = list(data[0].keys())
            return "\n".join(
                "  ".join(str(row.get(col, "")) for col in columns) for row in data
            )
        return render_table(self.build_table(data))

    def print(
        self, data: list[dict[str, Any]], format_type: OutputFormat = OutputFormat.TABLE
    ) -> None:
        # Tables go straight to the console so it can size them itself
        if format_type == OutputFormat.TABLE and data:
            self.console.print(self.build_table(data))
        else:
            super().print(data, format_type)
