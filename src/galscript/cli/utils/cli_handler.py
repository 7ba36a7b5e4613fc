"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import typer
from rich.console import Console

from galscript.cli.formatters.json_formatter import JsonFormatter
from galscript.config import get_logger, get_settings
from galscript.diagnostics.models import DiagnosticsConfig
from galscript.exceptions import GalScriptError
from galscript.project import GalProject

logger = get_logger(__name__)

T = TypeVar("T")


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Display an error consistently and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use
        """
        logger.error("Command failed", error=str(error), error_type=type(error).__name__)

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, GalScriptError):
            self.console.print(f"[red]{error.format_error()}[/red]", highlight=False)
        else:
            self.console.print(f"[red]Error: {error}[/red]", highlight=False)

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Display a success message, with optional data for JSON output."""
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]{message}[/green]")


async def open_project(scan: bool = True) -> GalProject:
    """Build a project from the active settings and optionally scan it.

    With ``auto_scan_resources`` disabled only variables are scanned, and
    resource validation is turned off since no asset index exists.
    """
    settings = get_settings()
    project = GalProject.from_settings(settings)
    if not scan:
        return project

    if settings.auto_scan_resources:
        await project.scan()
    else:
        await project.variables.scan_all()
        project.diagnostics_config = DiagnosticsConfig(validate_resources=False)
    return project


def cli_command(
    async_func: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator for CLI commands with standardized error handling.

    Args:
        async_func: Whether the decorated function is async

    Returns:
        Decorator function
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            handler = CLIHandler()
            try:
                if async_func or asyncio.iscoroutinefunction(func):
                    return asyncio.run(func(*args, **kwargs))
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except Exception as e:
                handler.handle_error(e, kwargs.get("json_output", False))

        return wrapper

    return decorator


def async_cli_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator specifically for async CLI commands."""
    return cli_command(async_func=True)(func)
