"""File watching for a game directory.

watchdog delivers events on its own thread; they are handed to the asyncio
loop with ``call_soon_threadsafe`` and turned into coalesced rescans.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from galscript.catalog.assets import AssetType
from galscript.config import get_logger

if TYPE_CHECKING:
    from galscript.project import GalProject

logger = get_logger(__name__)

FULL_SCAN_KEY = "full-scan"
ASSET_SCAN_KEY = "asset-scan"


class GameDirectoryEventHandler(FileSystemEventHandler):
    """Translate filesystem events into scheduled rescans."""

    def __init__(self, project: GalProject, loop: asyncio.AbstractEventLoop) -> None:
        """Initialize the handler.

        Args:
            project: Project whose index and assets are rescanned
            loop: Event loop that owns the project's scheduler
        """
        self.project = project
        self.loop = loop

    def _src_path(self, event: FileSystemEvent) -> Path | None:
        src_path = event.src_path
        if isinstance(src_path, bytes):
            src_path = src_path.decode()
        return Path(src_path) if src_path else None

    def _relevant(self, path: Path | None) -> bool:
        return path is not None and self.project.paths.asset_type_for_path(path) is not None

    def on_created(self, event: FileSystemEvent) -> None:
        if self._relevant(self._src_path(event)):
            self._dispatch(self.schedule_full_scan)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if self._relevant(self._src_path(event)):
            self._dispatch(self.schedule_full_scan)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._dispatch(self.schedule_full_scan)

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return

        path = self._src_path(event)
        if path is None:
            return

        if self.project.paths.is_scene_file(path):
            self._dispatch(self.schedule_file_scan, path)
        elif self.project.paths.asset_type_for_path(path) not in (None, AssetType.SCENE):
            self._dispatch(self.schedule_asset_scan)

    def _dispatch(self, callback: Callable[..., None], *args: Any) -> None:
        try:
            self.loop.call_soon_threadsafe(callback, *args)
        except RuntimeError:
            logger.debug("Event loop closed, dropping file event")

    # The schedule_* methods run on the event loop thread

    def schedule_full_scan(self) -> None:
        logger.debug("Scheduling full rescan")
        self.project.scheduler.schedule(FULL_SCAN_KEY, self.project.scan)

    def schedule_file_scan(self, path: Path) -> None:
        if self.project.scheduler.is_pending(FULL_SCAN_KEY):
            return
        logger.debug("Scheduling file rescan", path=str(path))
        self.project.scheduler.schedule(
            ("file-scan", str(path)), lambda: self.project.variables.scan_file(path)
        )

    def schedule_asset_scan(self) -> None:
        if self.project.scheduler.is_pending(FULL_SCAN_KEY):
            return
        logger.debug("Scheduling asset rescan")
        self.project.scheduler.schedule(ASSET_SCAN_KEY, self.project.assets.scan_all)


class ProjectWatcher:
    """Watch a project's game directory until stopped."""

    def __init__(self, project: GalProject) -> None:
        self.project = project
        self._observer: Observer | None = None
        self.handler: GameDirectoryEventHandler | None = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        """Start watching; must be called from the loop that runs rescans."""
        if self._observer is not None:
            return
        self.handler = GameDirectoryEventHandler(
            self.project, asyncio.get_running_loop()
        )
        observer = Observer()
        observer.schedule(self.handler, str(self.project.game_dir), recursive=True)
        observer.start()
        self._observer = observer
        logger.info("Watching game directory", path=str(self.project.game_dir))

    def stop(self, timeout: float = 5.0) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=timeout)
        self._observer = None
        self.project.scheduler.cancel_all()
        logger.info("Stopped watching", path=str(self.project.game_dir))

    async def run(self, timeout: float | None = None) -> None:
        """Watch until ``timeout`` seconds pass or the task is cancelled."""
        self.start()
        try:
            if timeout is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(timeout)
            await self.project.scheduler.wait_idle()
        finally:
            self.stop()
