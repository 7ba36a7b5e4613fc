"""Project facade wiring the analysis components together.

Each ``GalProject`` owns its own index, scanner, resolver and event bus, so
several projects can live in one process without sharing state.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from galscript.assets.scanner import AssetScanner
from galscript.catalog.commands import CommandCatalog, default_catalog
from galscript.common.events import EventBus
from galscript.common.filesystem import FileSystem, LocalFileSystem, ProjectPaths
from galscript.common.scheduler import CoalescingScheduler
from galscript.config import get_logger
from galscript.config.settings import GalScriptSettings
from galscript.diagnostics.engine import DiagnosticsEngine
from galscript.diagnostics.models import Diagnostic, DiagnosticsConfig
from galscript.index.variable_index import VariableIndex
from galscript.parser.line_parser import LineParser, get_default_parser
from galscript.scenes.resolver import ScenePathResolver

logger = get_logger(__name__)


class GalProject:
    """All analysis components for one game directory."""

    def __init__(
        self,
        paths: ProjectPaths,
        filesystem: FileSystem | None = None,
        catalog: CommandCatalog | None = None,
        parser: LineParser | None = None,
        events: EventBus | None = None,
        scheduler: CoalescingScheduler | None = None,
        diagnostics_config: DiagnosticsConfig | None = None,
    ) -> None:
        self.paths = paths
        self.filesystem = filesystem or LocalFileSystem()
        self.catalog = catalog or default_catalog()
        self.parser = parser or get_default_parser()
        self.events = events or EventBus()
        self.scheduler = scheduler or CoalescingScheduler()
        self.diagnostics_config = diagnostics_config or DiagnosticsConfig()

        self.assets = AssetScanner(paths, self.filesystem, self.events)
        self.variables = VariableIndex(paths, self.filesystem, self.events, self.parser)
        self.resolver = ScenePathResolver(paths, self.filesystem)
        self.engine = DiagnosticsEngine(
            catalog=self.catalog,
            variable_index=self.variables,
            asset_exists=self.assets.asset_exists,
            parser=self.parser,
        )

    @classmethod
    def from_settings(cls, settings: GalScriptSettings) -> GalProject:
        """Create a project for the game directory named by ``settings``."""
        return cls(
            paths=ProjectPaths(settings.game_dir),
            scheduler=CoalescingScheduler(settings.watch_debounce_seconds),
            diagnostics_config=DiagnosticsConfig.from_settings(settings),
        )

    @property
    def game_dir(self) -> Path:
        return self.paths.game_dir

    @property
    def scene_root(self) -> Path:
        return self.paths.scene_root

    async def scan(self) -> None:
        """Scan assets and variables concurrently."""
        logger.info("Scanning project", game_dir=str(self.game_dir))
        await asyncio.gather(self.assets.scan_all(), self.variables.scan_all())

    def diagnose_text(
        self,
        text: str,
        file_path: str | Path = "",
        config: DiagnosticsConfig | None = None,
    ) -> list[Diagnostic]:
        return self.engine.diagnose(
            text, str(file_path), config or self.diagnostics_config
        )

    async def diagnose_file(
        self, path: str | Path, config: DiagnosticsConfig | None = None
    ) -> list[Diagnostic]:
        """Read and diagnose one script file."""
        text = await asyncio.to_thread(self.filesystem.read_text, Path(path))
        return self.diagnose_text(text, path, config)

    async def diagnose_all(
        self, config: DiagnosticsConfig | None = None
    ) -> dict[str, list[Diagnostic]]:
        """Diagnose every scene file, keyed by scene-relative path."""
        results: dict[str, list[Diagnostic]] = {}
        for scene in self.resolver.get_all_scene_files():
            results[scene.relative_path] = await self.diagnose_file(
                scene.full_path, config
            )
        return results
