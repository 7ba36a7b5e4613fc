"""Data models for scene path resolution and scene creation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ScenePathCandidate:
    """A possible location of a referenced scene file.

    ``exists`` is the filesystem state at resolution time.
    """

    scene_name: str
    full_path: Path
    relative_path: str
    exists: bool
    directory: Path

    def to_dict(self) -> dict[str, Any]:
        return {
            "scene_name": self.scene_name,
            "full_path": str(self.full_path),
            "relative_path": self.relative_path,
            "exists": self.exists,
            "directory": str(self.directory),
        }


@dataclass(frozen=True)
class SceneCreationOptions:
    """What ``create_scene`` should create, relative to the scene root."""

    create_file: bool = False
    create_directory: bool = False
    directory: str | None = None
    file_name: str | None = None
