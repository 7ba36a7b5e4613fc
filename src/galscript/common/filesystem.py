"""Filesystem collaborator used by the scanners and the scene resolver.

Read operations degrade silently: an unreadable file reads as empty text and
a missing directory lists as empty. Write operations raise ``OSError`` so
callers can report failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from galscript.catalog.assets import ASSET_FOLDERS, SCENE_EXTENSION, AssetType
from galscript.config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing."""

    name: str
    path: Path
    is_dir: bool


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem access."""

    def read_text(self, path: Path) -> str:
        """Read a file, returning an empty string if it cannot be read."""
        ...

    def exists(self, path: Path) -> bool:
        """Check whether a path exists."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check whether a path is an existing regular file."""
        ...

    def list_dir(self, path: Path) -> list[DirEntry]:
        """List a directory, returning an empty list if it cannot be listed."""
        ...

    def walk_files(self, root: Path, suffix: str) -> list[Path]:
        """Recursively list files under ``root`` ending in ``suffix``."""
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write a file, raising ``OSError`` on failure."""
        ...

    def make_dirs(self, path: Path) -> None:
        """Create a directory and its parents if missing."""
        ...


class LocalFileSystem:
    """FileSystem implementation over the local disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Could not read file", path=str(path), error=str(e))
            return ""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def list_dir(self, path: Path) -> list[DirEntry]:
        try:
            entries = sorted(path.iterdir())
        except OSError as e:
            logger.debug("Could not list directory", path=str(path), error=str(e))
            return []
        return [DirEntry(name=p.name, path=p, is_dir=p.is_dir()) for p in entries]

    def walk_files(self, root: Path, suffix: str) -> list[Path]:
        if not root.is_dir():
            logger.debug("Directory does not exist", path=str(root))
            return []
        suffix = suffix.lower()
        try:
            return sorted(
                p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == suffix
            )
        except OSError as e:
            logger.warning("Failed to walk directory", path=str(root), error=str(e))
            return []

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding=self.encoding)

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class ProjectPaths:
    """Well-known locations inside a game directory."""

    game_dir: Path

    @property
    def scene_root(self) -> Path:
        return self.game_dir / ASSET_FOLDERS[AssetType.SCENE]

    def asset_dir(self, asset_type: AssetType) -> Path:
        """Folder holding assets of ``asset_type``."""
        return self.game_dir / ASSET_FOLDERS[asset_type]

    def asset_type_for_path(self, path: Path) -> AssetType | None:
        """Asset category whose folder contains ``path``, if any."""
        try:
            relative = path.resolve().relative_to(self.game_dir.resolve())
        except ValueError:
            return None
        if not relative.parts:
            return None
        top = relative.parts[0]
        for asset_type, folder in ASSET_FOLDERS.items():
            if folder == top:
                return asset_type
        return None

    def is_scene_file(self, path: Path) -> bool:
        return (
            path.suffix.lower() == SCENE_EXTENSION
            and self.asset_type_for_path(path) is AssetType.SCENE
        )
