"""Diagnostics engine for script documents.

Checks every command line against the command catalog, the asset index and
the variable index, then reports labels that nothing jumps to. The engine
never modifies the document and never stops at the first problem.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from galscript.catalog.assets import AssetType
from galscript.catalog.commands import CommandCatalog, default_catalog
from galscript.config import get_logger
from galscript.diagnostics.models import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticsConfig,
    Severity,
)
from galscript.index.variable_index import VariableIndex
from galscript.parser.expressions import unique_identifiers
from galscript.parser.line_parser import LineParser, get_default_parser
from galscript.parser.models import ParsedLine
from galscript.parser.symbols import (
    extract_labels,
    find_label_references,
    parse_choose_options,
)

logger = get_logger(__name__)

AssetPredicate = Callable[[str, AssetType], bool]

# Content that clears an asset slot instead of naming a file
NONE_SENTINEL = "none"


def _content_span(line: ParsedLine) -> tuple[int, int]:
    start = line.raw_line.find(":") + 1
    return start, start + len(line.content or "")


class DiagnosticsEngine:
    """Produce diagnostics for one document at a time."""

    def __init__(
        self,
        catalog: CommandCatalog | None = None,
        variable_index: VariableIndex | None = None,
        asset_exists: AssetPredicate | None = None,
        parser: LineParser | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            catalog: Commands considered valid
            variable_index: Index used to decide whether condition variables exist;
                the undefined-variable check is skipped without one
            asset_exists: Predicate for the resource check; skipped without one
            parser: Line parser; its vocabulary decides what counts as a command
                line, so names it knows but the catalog lacks are unknown commands
        """
        self.catalog = catalog or default_catalog()
        self.variable_index = variable_index
        self.asset_exists = asset_exists
        self.parser = parser or get_default_parser()

    def diagnose(
        self,
        text: str,
        file_path: str = "",
        config: DiagnosticsConfig | None = None,
    ) -> list[Diagnostic]:
        """Diagnose a whole document.

        Args:
            text: Document text
            file_path: Path recorded on each diagnostic
            config: Per-call options

        Returns:
            Diagnostics in line order, followed by unused-label hints
        """
        config = config or DiagnosticsConfig()
        lines = self.parser.parse_lines(text)
        labels = extract_labels(lines, file_path)
        label_names = {label.name for label in labels}

        diagnostics: list[Diagnostic] = []
        for line in lines:
            if line.is_command:
                diagnostics.extend(
                    self._check_command(line, label_names, config, file_path)
                )

        for label in labels:
            if not find_label_references(lines, label.name):
                label_line = lines[label.line_number]
                diagnostics.append(
                    self._make(
                        label_line,
                        0,
                        len(label_line.raw_line),
                        f"label unused: {label.name}",
                        Severity.HINT,
                        DiagnosticCode.UNUSED_LABEL,
                        file_path,
                    )
                )

        logger.debug(
            "Diagnosed document",
            path=file_path,
            lines=len(lines),
            diagnostics=len(diagnostics),
        )
        return diagnostics

    def _check_command(
        self,
        line: ParsedLine,
        label_names: set[str],
        config: DiagnosticsConfig,
        file_path: str,
    ) -> list[Diagnostic]:
        command = line.command or ""
        content = line.content or ""
        found: list[Diagnostic] = []

        if command not in self.catalog:
            return [
                self._make(
                    line,
                    0,
                    len(command),
                    f"unknown command: {command}",
                    Severity.ERROR,
                    DiagnosticCode.UNKNOWN_COMMAND,
                    file_path,
                )
            ]

        required = self.catalog.required_primary_parameters(command)
        if required and not content.strip():
            found.append(
                self._make(
                    line,
                    0,
                    len(line.raw_line),
                    f"missing required parameter: {required[0]}",
                    Severity.ERROR,
                    DiagnosticCode.MISSING_PARAMETER,
                    file_path,
                )
            )

        if config.validate_resources and content and content != NONE_SENTINEL:
            asset_type = self.catalog.asset_type_for(command)
            if (
                asset_type is not None
                and self.asset_exists is not None
                and not self.asset_exists(content, asset_type)
            ):
                start, end = _content_span(line)
                found.append(
                    self._make(
                        line,
                        start,
                        end,
                        f"resource not found: {content}",
                        Severity.WARNING,
                        DiagnosticCode.RESOURCE_NOT_FOUND,
                        file_path,
                    )
                )

        if command == "jumpLabel" and content and content not in label_names:
            start, end = _content_span(line)
            found.append(
                self._make(
                    line,
                    start,
                    end,
                    f"label not defined: {content}",
                    Severity.ERROR,
                    DiagnosticCode.UNDEFINED_LABEL,
                    file_path,
                )
            )

        if command == "choose" and content:
            for option in parse_choose_options(content):
                if option.target and option.target not in label_names:
                    found.append(
                        self._make(
                            line,
                            0,
                            len(line.raw_line),
                            f"label not defined: {option.target}",
                            Severity.ERROR,
                            DiagnosticCode.UNDEFINED_LABEL,
                            file_path,
                        )
                    )

        condition = line.args.get("when")
        if condition and self.variable_index is not None:
            undefined = self.undefined_variables(condition)
            if undefined:
                found.append(
                    self._make(
                        line,
                        0,
                        len(line.raw_line),
                        f"undefined variable in condition: {', '.join(undefined)}",
                        Severity.WARNING,
                        DiagnosticCode.UNDEFINED_VARIABLE,
                        file_path,
                    )
                )

        return found

    def undefined_variables(self, expression: str) -> list[str]:
        """Identifiers in ``expression`` with no definition, in order of appearance."""
        if self.variable_index is None:
            return []
        return [
            name
            for name in unique_identifiers(expression)
            if not self.variable_index.is_variable_defined(name)
        ]

    @staticmethod
    def _make(
        line: ParsedLine,
        start: int,
        end: int,
        message: str,
        severity: Severity,
        code: DiagnosticCode,
        file_path: str,
    ) -> Diagnostic:
        return Diagnostic(
            line_number=line.line_number,
            start_col=start,
            end_col=end,
            message=message,
            severity=severity,
            code=code,
            file_path=file_path,
        )


def count_by_severity(diagnostics: Sequence[Diagnostic]) -> dict[Severity, int]:
    """Number of diagnostics per severity, including zero counts."""
    counts = {severity: 0 for severity in Severity}
    for diagnostic in diagnostics:
        counts[diagnostic.severity] += 1
    return counts
