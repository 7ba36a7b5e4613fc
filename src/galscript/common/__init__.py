"""Collaborators shared by the analysis components."""

from galscript.common.events import (
    AssetsUpdated,
    Event,
    EventBus,
    VariableIndexUpdated,
)
from galscript.common.filesystem import (
    DirEntry,
    FileSystem,
    LocalFileSystem,
    ProjectPaths,
)
from galscript.common.scheduler import CoalescingScheduler

__all__ = [
    "AssetsUpdated",
    "CoalescingScheduler",
    "DirEntry",
    "Event",
    "EventBus",
    "FileSystem",
    "LocalFileSystem",
    "ProjectPaths",
    "VariableIndexUpdated",
]
