"""Formatter for diagnostics reports."""

from __future__ import annotations

from typing import Any

from rich.markup import escape

from galscript.cli.formatters.base import OutputFormat, OutputFormatter
from galscript.cli.formatters.json_formatter import JsonFormatter
from galscript.diagnostics.models import Diagnostic, Severity

SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.HINT: "cyan",
}

Report = dict[str, list[Diagnostic]]


def summarize(report: Report) -> dict[str, int]:
    """Count files and diagnostics per severity."""
    summary = {"files": len(report)}
    for severity in Severity:
        summary[f"{severity.value}s"] = sum(
            1
            for diagnostics in report.values()
            for diagnostic in diagnostics
            if diagnostic.severity is severity
        )
    return summary


class DiagnosticsFormatter(OutputFormatter[Report]):
    """Render diagnostics grouped by file.

    Line and column numbers are shown 1-based, as editors display them.
    """

    def format(self, data: Report, format_type: OutputFormat = OutputFormat.TEXT) -> str:
        if format_type == OutputFormat.JSON:
            payload: dict[str, Any] = {
                "files": {
                    path: [d.to_dict() for d in diagnostics]
                    for path, diagnostics in data.items()
                },
                "summary": summarize(data),
            }
            return JsonFormatter().format(payload)

        lines = []
        for path, diagnostics in data.items():
            for d in diagnostics:
                style = SEVERITY_STYLES[d.severity]
                lines.append(
                    f"{escape(path)}:{d.line_number + 1}:{d.start_col + 1} "
                    f"[{style}]{d.severity.value}[/{style}] {escape(d.message)} "
                    f"[dim]({d.code.value})[/dim]"
                )

        summary = summarize(data)
        lines.append(
            f"[bold]{summary['files']} file(s) checked:[/bold] "
            f"{summary['errors']} error(s), {summary['warnings']} warning(s), "
            f"{summary['hints']} hint(s)"
        )
        return "\n".join(lines)
