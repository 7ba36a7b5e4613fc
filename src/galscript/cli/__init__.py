"""galscript command-line interface."""

from galscript.cli.main import app, main

__all__ = ["app", "main"]
