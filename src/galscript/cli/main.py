"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from galscript import __version__
from galscript.cli.commands import (
    check_command,
    new_scene_command,
    resolve_command,
    scenes_command,
    vars_command,
    watch_command,
)
from galscript.cli.formatters.json_formatter import JsonFormatter
from galscript.cli.utils.cli_handler import CLIHandler
from galscript.config import (
    configure_logging,
    get_logger,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="galscript",
    help="Static analysis for visual-novel scene scripts",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="check")(check_command)
app.command(name="vars")(vars_command)
app.command(name="resolve")(resolve_command)
app.command(name="scenes")(scenes_command)
app.command(name="new-scene")(new_scene_command)
app.command(name="watch")(watch_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show galscript version."""
    version_info = {
        "name": "galscript",
        "version": __version__,
        "description": "Static analysis for visual-novel scene scripts",
    }
    if json_output:
        print(JsonFormatter().format(version_info))
    else:
        console.print(f"galscript v{version_info['version']}")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="GALSCRIPT_CONFIG",
        ),
    ] = None,
    project: Annotated[
        Path | None,
        typer.Option("--project", "-p", help="Project root containing the game directory"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging", envvar="GALSCRIPT_DEBUG"),
    ] = False,
) -> None:
    """Configure global options."""
    overrides: dict[str, Any] = {"project_root": project}
    if debug:
        overrides.update(debug=True, log_level="DEBUG")
    elif verbose:
        overrides["log_level"] = "INFO"

    try:
        settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
    except Exception as e:
        CLIHandler(console).handle_error(e)
        return

    set_settings(settings)
    configure_logging(settings)
    logger.debug("Settings loaded", game_dir=str(settings.game_dir))


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
