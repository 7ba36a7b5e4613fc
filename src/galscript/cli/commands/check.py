"""CLI command for galscript check - diagnose scene scripts."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from galscript.catalog.assets import SCENE_EXTENSION
from galscript.cli.formatters.base import OutputFormat
from galscript.cli.formatters.diagnostics_formatter import DiagnosticsFormatter
from galscript.cli.utils.cli_handler import async_cli_command, open_project
from galscript.config import get_logger
from galscript.diagnostics.models import Diagnostic, DiagnosticsConfig
from galscript.exceptions import ScriptFileNotFoundError
from galscript.project import GalProject

logger = get_logger(__name__)
console = Console()


def _display_path(project: GalProject, path: Path) -> str:
    try:
        return path.resolve().relative_to(project.scene_root.resolve()).as_posix()
    except ValueError:
        return str(path)


async def _collect(
    project: GalProject, paths: list[Path], config: DiagnosticsConfig
) -> dict[str, list[Diagnostic]]:
    if not paths:
        return await project.diagnose_all(config)

    report: dict[str, list[Diagnostic]] = {}
    for path in paths:
        if not path.exists():
            raise ScriptFileNotFoundError(
                f"Script file not found: {path}",
                hint="Pass a scene file or a directory containing scene files",
                details={"scene_root": str(project.scene_root)},
            )
        files = (
            project.filesystem.walk_files(path, SCENE_EXTENSION)
            if path.is_dir()
            else [path]
        )
        for file_path in files:
            report[_display_path(project, file_path)] = await project.diagnose_file(
                file_path, config
            )
    return report


@async_cli_command
async def check_command(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Scene files or directories (default: all scenes)"),
    ] = None,
    no_resources: Annotated[
        bool,
        typer.Option("--no-resources", help="Skip checks for missing asset files"),
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Check scene scripts for unknown commands, missing labels and more.

    Exits with status 1 when any error is found.
    """
    project = await open_project()
    config = project.diagnostics_config
    if no_resources:
        config = DiagnosticsConfig(validate_resources=False)

    report = await _collect(project, paths or [], config)
    formatter = DiagnosticsFormatter(console)
    formatter.print(report, OutputFormat.JSON if json_output else OutputFormat.TEXT)

    error_count = sum(d.is_error for diagnostics in report.values() for d in diagnostics)
    logger.info("Check finished", files=len(report), errors=error_count)
    if error_count:
        raise typer.Exit(1)
