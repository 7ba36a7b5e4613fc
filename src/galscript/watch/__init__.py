"""Game directory watching."""

from galscript.watch.handler import GameDirectoryEventHandler, ProjectWatcher

__all__ = ["GameDirectoryEventHandler", "ProjectWatcher"]
