"""CLI command for galscript watch - keep the indexes current while files change."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel

from galscript.cli.utils.cli_handler import async_cli_command, open_project
from galscript.common.events import AssetsUpdated, VariableIndexUpdated
from galscript.config import get_logger
from galscript.watch.handler import ProjectWatcher

logger = get_logger(__name__)
console = Console()


def _on_variables(event: VariableIndexUpdated) -> None:
    scope = "full scan" if event.full_scan else event.file_path
    console.print(
        f"[cyan]Variables updated[/cyan] ({scope}): {event.variable_count} variable(s)"
    )


def _on_assets(event: AssetsUpdated) -> None:
    console.print(f"[cyan]Assets updated[/cyan]: {event.asset_count} file(s)")


@async_cli_command
async def watch_command(
    timeout: Annotated[
        int,
        typer.Option(
            "--timeout",
            "-t",
            help="Maximum watch duration in seconds (0 for unlimited)",
        ),
    ] = 0,
) -> None:
    """Watch the game directory and rescan when files change.

    Press Ctrl+C to stop watching.
    """
    project = await open_project()
    project.events.subscribe(VariableIndexUpdated, _on_variables)
    project.events.subscribe(AssetsUpdated, _on_assets)

    console.print(
        Panel.fit(
            f"Watching [bold]{project.game_dir}[/bold]\n"
            f"{len(project.variables)} variable(s), "
            f"{project.assets.asset_count} asset file(s)",
            title="galscript watch",
        )
    )

    watcher = ProjectWatcher(project)
    try:
        await watcher.run(timeout=timeout or None)
    except KeyboardInterrupt:
        logger.debug("Watch interrupted")
    console.print("[yellow]Stopped watching.[/yellow]")
