"""Tests for CLI output formatters."""

import json
from io import StringIO

import pytest
from rich.console import Console

from galscript.cli.formatters import (
    DiagnosticsFormatter,
    JsonFormatter,
    OutputFormat,
    TableFormatter,
)
from galscript.cli.formatters.diagnostics_formatter import summarize
from galscript.cli.formatters.json_formatter import to_jsonable
from galscript.diagnostics.models import Diagnostic, DiagnosticCode, Severity
from galscript.exceptions import ValidationError
from galscript.scenes.models import SceneCreationOptions


@pytest.fixture
def report():
    return {
        "start.txt": [
            Diagnostic(2, 10, 17, "label not defined: x", Severity.ERROR, DiagnosticCode.UNDEFINED_LABEL),
            Diagnostic(0, 0, 12, "label unused: start", Severity.HINT, DiagnosticCode.UNUSED_LABEL),
        ],
        "chapter1/[draft].txt": [],
    }


def quiet_console():
    return Console(file=StringIO(), width=200, color_system=None)


class TestJsonFormatter:
    def test_dataclasses_and_models(self):
        output = JsonFormatter().format([SceneCreationOptions(create_file=True)])
        assert json.loads(output) == [
            {
                "create_file": True,
                "create_directory": False,
                "directory": None,
                "file_name": None,
            }
        ]

    def test_scalars_are_wrapped(self):
        assert json.loads(JsonFormatter().format(3)) == {"value": 3}

    def test_to_jsonable_converts_nested(self):
        assert to_jsonable({1: (1, 2), "s": {"a"}}) == {"1": [1, 2], "s": ["a"]}

    def test_success_response(self):
        payload = json.loads(JsonFormatter().format_success("done", {"path": "x"}))
        assert payload == {"success": True, "message": "done", "data": {"path": "x"}}

    def test_error_response_includes_hint(self):
        error = ValidationError("bad input", hint="try again")
        payload = json.loads(JsonFormatter().format_error_response(error, 2))
        assert payload == {
            "success": False,
            "code": 2,
            "error": "bad input",
            "hint": "try again",
        }

    def test_error_response_plain_exception(self):
        payload = json.loads(JsonFormatter().format_error_response(RuntimeError("x")))
        assert payload["error"] == "x"


class TestTableFormatter:
    def test_table(self):
        output = TableFormatter(title="Scenes").format(
            [{"relative_path": "a.txt", "exists": "yes"}]
        )
        assert "Relative Path" in output
        assert "a.txt" in output

    def test_text(self):
        output = TableFormatter().format(
            [{"a": 1, "b": 2}, {"a": 3, "b": 4}], OutputFormat.TEXT
        )
        assert output == "1  2\n3  4"

    def test_empty(self):
        assert TableFormatter().format([]) == "No data to display"

    def test_print_table_to_console(self):
        console = quiet_console()
        TableFormatter(console).print([{"name": "score"}])
        assert "score" in console.file.getvalue()


class TestDiagnosticsFormatter:
    def test_summary(self, report):
        assert summarize(report) == {"files": 2, "errors": 1, "warnings": 0, "hints": 1}

    def test_text_lines_are_one_based(self, report):
        console = quiet_console()
        DiagnosticsFormatter(console).print(report)
        output = console.file.getvalue()

        assert "start.txt:3:11 error label not defined: x (undefined-label)" in output
        assert "start.txt:1:1 hint label unused: start (unused-label)" in output
        assert "2 file(s) checked: 1 error(s), 0 warning(s), 1 hint(s)" in output

    def test_json(self, report):
        payload = json.loads(DiagnosticsFormatter().format(report, OutputFormat.JSON))

        assert payload["summary"]["errors"] == 1
        assert payload["files"]["chapter1/[draft].txt"] == []
        first = payload["files"]["start.txt"][0]
        assert first == {
            "line_number": 2,
            "start_col": 10,
            "end_col": 17,
            "message": "label not defined: x",
            "severity": "error",
            "code": "undefined-label",
            "file_path": "",
        }
