"""galscript CLI commands."""

from __future__ import annotations

from galscript.cli.commands.check import check_command
from galscript.cli.commands.scenes import (
    new_scene_command,
    resolve_command,
    scenes_command,
)
from galscript.cli.commands.variables import vars_command
from galscript.cli.commands.watch import watch_command

__all__ = [
    "check_command",
    "new_scene_command",
    "resolve_command",
    "scenes_command",
    "vars_command",
    "watch_command",
]
