"""CLI commands for locating, listing and creating scene files."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from galscript.cli.formatters.base import OutputFormat
from galscript.cli.formatters.json_formatter import JsonFormatter
from galscript.cli.formatters.table_formatter import TableFormatter
from galscript.cli.utils.cli_handler import CLIHandler, cli_command, open_project
from galscript.scenes.models import SceneCreationOptions, ScenePathCandidate

console = Console()


def _candidate_rows(candidates: list[ScenePathCandidate]) -> list[dict[str, object]]:
    return [
        {
            "scene": c.scene_name,
            "relative_path": c.relative_path,
            "exists": "yes" if c.exists else "no",
        }
        for c in candidates
    ]


@cli_command(async_func=True)
async def resolve_command(
    name: Annotated[str, typer.Argument(help="Scene name as written in a script")],
    from_file: Annotated[
        Path | None,
        typer.Option(
            "--from",
            help="Script containing the reference (relative to the current directory)",
        ),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show where a scene reference could point, best match first."""
    if from_file is not None:
        from_file = from_file.resolve()
    project = await open_project(scan=False)
    candidates = project.resolver.resolve(name, from_file)

    if json_output:
        print(JsonFormatter().format(candidates))
        return
    if not candidates:
        console.print(f"[yellow]No candidates for '{name}'.[/yellow]")
        return
    TableFormatter(console, title=f"Candidates for {name}").print(
        _candidate_rows(candidates), OutputFormat.TABLE
    )


@cli_command(async_func=True)
async def scenes_command(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List every scene file under the scene directory."""
    project = await open_project(scan=False)
    scenes = project.resolver.get_all_scene_files()

    if json_output:
        print(JsonFormatter().format(scenes))
        return
    if not scenes:
        console.print(f"[yellow]No scene files in {project.scene_root}.[/yellow]")
        return
    TableFormatter(console, title="Scenes").print(
        [{"scene": s.scene_name, "relative_path": s.relative_path} for s in scenes],
        OutputFormat.TABLE,
    )


@cli_command(async_func=True)
async def new_scene_command(
    directory: Annotated[
        str | None,
        typer.Option("--dir", "-d", help="Directory relative to the scene directory"),
    ] = None,
    file_name: Annotated[
        str | None,
        typer.Option("--file", "-f", help="Scene file name, e.g. intro.txt"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Create a scene file from the template, or a scene directory.

    With only --dir a directory is created. Existing files are left untouched.
    """
    project = await open_project(scan=False)
    only_directory = directory is not None and file_name is None
    options = SceneCreationOptions(
        create_file=not only_directory,
        create_directory=directory is not None,
        directory=directory,
        file_name=file_name,
    )
    created = project.resolver.create_scene(options)

    CLIHandler(console).handle_success(
        f"Scene ready: {created}", {"path": str(created)}, json_output
    )
