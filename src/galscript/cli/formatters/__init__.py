"""Output formatters for galscript CLI."""

from __future__ import annotations

from galscript.cli.formatters.base import OutputFormat, OutputFormatter
from galscript.cli.formatters.diagnostics_formatter import DiagnosticsFormatter
from galscript.cli.formatters.json_formatter import JsonFormatter
from galscript.cli.formatters.table_formatter import TableFormatter

__all__ = [
    "DiagnosticsFormatter",
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "TableFormatter",
]
