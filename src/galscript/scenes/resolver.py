"""Scene path resolution.

Turns a free-form scene reference such as ``start`` or ``chapter1/start.txt``
into ranked candidate files under the scene root. Candidates are generated
from the raw input, from the referencing file's directory and its parents,
and from a fixed list of conventional chapter layouts.
"""

from __future__ import annotations

import os
from pathlib import Path

from galscript.catalog.assets import SCENE_EXTENSION
from galscript.common.filesystem import FileSystem, LocalFileSystem, ProjectPaths
from galscript.config import get_logger
from galscript.exceptions import SceneCreationError, ValidationError
from galscript.scenes.models import SceneCreationOptions, ScenePathCandidate
from galscript.scenes.template import generate_scene_template, scene_name_from_file

logger = get_logger(__name__)

# Conventional layouts searched for every reference
COMMON_SCENE_DIRECTORIES: tuple[str, ...] = (
    "",
    "chapter1",
    "chapter2",
    "chapter3",
    "chapter4",
    "chapter5",
    "endings",
    "events",
    "prologue",
    "epilogue",
    "chapter1/act1",
    "chapter1/act2",
    "chapter1/act3",
    "chapter2/act1",
    "chapter2/act2",
    "chapter2/act3",
    "chapter3/act1",
    "chapter3/act2",
    "events/special",
    "events/battle",
    "events/dialogue",
    "endings/good",
    "endings/bad",
    "endings/true",
)

MAX_PARENT_LEVELS = 5
DEFAULT_SCENE_FILE = "new_scene.txt"
DEFAULT_SCENE_DIRECTORY = "new_scene"


def clean_scene_input(scene_input: str) -> str:
    """Strip whitespace and one pair of surrounding quotes."""
    cleaned = scene_input.strip()
    if cleaned[:1] in ("'", '"'):
        cleaned = cleaned[1:]
    if cleaned[-1:] in ("'", '"'):
        cleaned = cleaned[:-1]
    return cleaned


class ScenePathResolver:
    """Locate scene files under one project's scene root."""

    def __init__(
        self, paths: ProjectPaths, filesystem: FileSystem | None = None
    ) -> None:
        self.paths = paths
        self.filesystem = filesystem or LocalFileSystem()

    @property
    def scene_root(self) -> Path:
        return self.paths.scene_root

    def _with_extension(self, path: str) -> list[str]:
        if path.endswith(SCENE_EXTENSION):
            return [path]
        return [path, path + SCENE_EXTENSION]

    def _relative_directory(self, current_file_path: str | Path) -> str:
        current = Path(current_file_path)
        if not current.is_absolute():
            current = self.paths.game_dir / current
        return os.path.relpath(
            os.path.normpath(current.parent), os.path.normpath(self.scene_root)
        )

    def generate_search_paths(
        self, scene_input: str, current_file_path: str | Path | None = None
    ) -> list[str]:
        """Candidate paths relative to the scene root, in generation order."""
        search_paths = self._with_extension(scene_input)

        if current_file_path is not None:
            relative_dir = self._relative_directory(current_file_path)
            search_paths.extend(
                self._with_extension(os.path.join(relative_dir, scene_input))
            )

            current = relative_dir
            for _ in range(MAX_PARENT_LEVELS):
                parent = os.path.dirname(current)
                if parent in ("", ".") or parent == current:
                    break
                search_paths.extend(
                    self._with_extension(os.path.join(parent, scene_input))
                )
                current = parent

        for directory in COMMON_SCENE_DIRECTORIES:
            search_paths.extend(
                self._with_extension(os.path.join(directory, scene_input))
            )
        return search_paths

    def _is_within_scene_root(self, full_path: str) -> bool:
        root = os.path.normpath(self.scene_root)
        try:
            return os.path.commonpath([full_path, root]) == root
        except ValueError:
            return False

    def _candidate(self, full_path: str, exists: bool) -> ScenePathCandidate:
        path = Path(full_path)
        return ScenePathCandidate(
            scene_name=scene_name_from_file(path.name),
            full_path=path,
            relative_path=Path(
                os.path.relpath(full_path, os.path.normpath(self.scene_root))
            ).as_posix(),
            exists=exists,
            directory=path.parent,
        )

    def resolve(
        self, scene_input: str, current_file_path: str | Path | None = None
    ) -> list[ScenePathCandidate]:
        """Rank the possible files a scene reference points to.

        Args:
            scene_input: Scene name or path as written in the script
            current_file_path: File containing the reference; a relative path
                is taken relative to the game directory

        Returns:
            Unique candidates, existing files first, then by relative path
        """
        cleaned = clean_scene_input(scene_input)
        if not cleaned:
            return []

        root = os.path.normpath(self.scene_root)
        seen: set[str] = set()
        candidates: list[ScenePathCandidate] = []
        for search_path in self.generate_search_paths(cleaned, current_file_path):
            full_path = os.path.normpath(os.path.join(root, search_path))
            if full_path in seen:
                continue
            if not full_path.endswith(SCENE_EXTENSION):
                continue
            if not self._is_within_scene_root(full_path):
                continue
            seen.add(full_path)
            candidates.append(
                self._candidate(full_path, self.filesystem.is_file(Path(full_path)))
            )

        candidates.sort(key=lambda c: (not c.exists, c.relative_path))
        logger.debug(
            "Resolved scene reference",
            scene=cleaned,
            candidates=len(candidates),
            existing=sum(1 for c in candidates if c.exists),
        )
        return candidates

    def resolve_existing(
        self, scene_input: str, current_file_path: str | Path | None = None
    ) -> ScenePathCandidate | None:
        """Best existing match for a reference, if any."""
        for candidate in self.resolve(scene_input, current_file_path):
            if candidate.exists:
                return candidate
        return None

    def get_all_scene_files(self) -> list[ScenePathCandidate]:
        """Every scene file under the scene root, sorted by relative path."""
        files = self.filesystem.walk_files(self.scene_root, SCENE_EXTENSION)
        candidates = [self._candidate(os.path.normpath(p), True) for p in files]
        return sorted(candidates, key=lambda c: c.relative_path)

    def list_scene_directories(self) -> list[str]:
        """Relative paths of all directories under the scene root, root first as ``""``."""
        directories = [""]
        pending = [self.scene_root]
        while pending:
            current = pending.pop()
            for entry in self.filesystem.list_dir(current):
                if entry.is_dir:
                    directories.append(
                        entry.path.relative_to(self.scene_root).as_posix()
                    )
                    pending.append(entry.path)
        return [""] + sorted(directories[1:])

    def _target(self, *parts: str) -> Path:
        target = os.path.normpath(os.path.join(self.scene_root, *parts))
        if not self._is_within_scene_root(target):
            raise ValidationError(
                f"Scene path escapes the scene directory: {os.path.join(*parts)}",
                hint="Use a path relative to the scene directory without '..'",
                details={"scene_root": str(self.scene_root)},
            )
        return Path(target)

    def _write_template(self, file_path: Path) -> None:
        if self.filesystem.exists(file_path):
            logger.info("Scene file already exists, leaving it untouched", path=str(file_path))
            return
        self.filesystem.write_text(file_path, generate_scene_template(file_path.name))
        logger.info("Created scene file", path=str(file_path))

    def create_scene(self, options: SceneCreationOptions) -> Path | None:
        """Create a scene directory and/or a scene file from the template.

        Existing files are never overwritten.

        Returns:
            The created file, or the directory when only a directory was
            requested; None when neither creation flag is set

        Raises:
            ValidationError: If the target lies outside the scene root
            SceneCreationError: If a directory or file cannot be written
        """
        try:
            if options.create_directory:
                directory = self._target(options.directory or DEFAULT_SCENE_DIRECTORY)
                self.filesystem.make_dirs(directory)
                if options.create_file and options.file_name:
                    file_path = self._target(
                        options.directory or DEFAULT_SCENE_DIRECTORY, options.file_name
                    )
                    self._write_template(file_path)
                    return file_path
                return directory

            if options.create_file:
                file_name = options.file_name or DEFAULT_SCENE_FILE
                parts = [options.directory, file_name] if options.directory else [file_name]
                file_path = self._target(*parts)
                self.filesystem.make_dirs(file_path.parent)
                self._write_template(file_path)
                return file_path
        except OSError as e:
            raise SceneCreationError(
                f"Failed to create scene: {e}",
                hint="Check that the scene directory is writable",
                details={"scene_root": str(self.scene_root)},
            ) from e

        return None
