"""Asset scanner for the game directory.

Keeps a per-category list of asset files and answers existence queries for
the diagnostics engine.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from galscript.catalog.assets import ASSET_EXTENSIONS, AssetType
from galscript.common.events import AssetsUpdated, EventBus
from galscript.common.filesystem import FileSystem, LocalFileSystem, ProjectPaths
from galscript.config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AssetInfo:
    """One asset file."""

    asset_type: AssetType
    file_name: str
    full_path: Path
    relative_path: str

    def matches(self, name: str) -> bool:
        return name in (self.file_name, self.relative_path)


class AssetScanner:
    """Index of asset files per category."""

    def __init__(
        self,
        paths: ProjectPaths,
        filesystem: FileSystem | None = None,
        events: EventBus | None = None,
    ) -> None:
        self.paths = paths
        self.filesystem = filesystem or LocalFileSystem()
        self.events = events
        self._assets: dict[AssetType, list[AssetInfo]] = {t: [] for t in AssetType}

    async def scan_all(self) -> None:
        """Rescan every category concurrently and publish the new snapshot."""
        results = await asyncio.gather(
            *(asyncio.to_thread(self._scan_category, t) for t in AssetType)
        )
        self._assets = dict(zip(AssetType, results))

        counts = {t.value: len(assets) for t, assets in self._assets.items()}
        total = sum(counts.values())
        logger.info("Asset scan complete", assets=total)
        if self.events is not None:
            self.events.publish(AssetsUpdated(asset_count=total, counts=counts))

    def _scan_category(self, asset_type: AssetType) -> list[AssetInfo]:
        if asset_type is AssetType.SCENE:
            return self._scan_scenes()

        folder = self.paths.asset_dir(asset_type)
        extensions = ASSET_EXTENSIONS[asset_type]
        return [
            AssetInfo(
                asset_type=asset_type,
                file_name=entry.name,
                full_path=entry.path,
                relative_path=entry.name,
            )
            for entry in self.filesystem.list_dir(folder)
            if not entry.is_dir and Path(entry.name).suffix.lower() in extensions
        ]

    def _scan_scenes(self) -> list[AssetInfo]:
        scene_root = self.paths.scene_root
        assets = []
        for extension in ASSET_EXTENSIONS[AssetType.SCENE]:
            for path in self.filesystem.walk_files(scene_root, extension):
                assets.append(
                    AssetInfo(
                        asset_type=AssetType.SCENE,
                        file_name=path.name,
                        full_path=path,
                        relative_path=path.relative_to(scene_root).as_posix(),
                    )
                )
        return assets

    def get_assets(self, asset_type: AssetType) -> list[AssetInfo]:
        """Assets of one category from the last scan.

        Args:
            asset_type: Category to list

        Returns:
            A copy of the category's assets; empty before the first scan
        """
        return list(self._assets.get(asset_type, []))

    def get_all_assets(self) -> Mapping[AssetType, list[AssetInfo]]:
        """Read-only view of every category from the last scan."""
        return MappingProxyType(self._assets)

    def find_asset(self, name: str, asset_type: AssetType | None = None) -> AssetInfo | None:
        """Find an asset by file name or relative path.

        Args:
            name: File name or path relative to the category directory
            asset_type: Category to search; every category in catalog order if omitted

        Returns:
            The first matching asset, or None
        """
        types = [asset_type] if asset_type is not None else list(AssetType)
        for current in types:
            for asset in self._assets.get(current, []):
                if asset.matches(name):
                    return asset
        return None

    def asset_exists(self, name: str, asset_type: AssetType | None = None) -> bool:
        """Check whether the last scan found ``name``; see :meth:`find_asset`."""
        return self.find_asset(name, asset_type) is not None

    def resolve_asset_path(self, name: str, asset_type: AssetType) -> Path | None:
        """Full path of a known asset, or None if it was not found by the last scan."""
        asset = self.find_asset(name, asset_type)
        return asset.full_path if asset is not None else None

    @property
    def asset_count(self) -> int:
        return sum(len(assets) for assets in self._assets.values())
