"""CLI helpers."""

from galscript.cli.utils.cli_handler import (
    CLIHandler,
    async_cli_command,
    cli_command,
    open_project,
)

__all__ = ["CLIHandler", "async_cli_command", "cli_command", "open_project"]
