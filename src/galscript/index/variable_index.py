"""Project-wide index of variable definitions and usages.

The index is rebuilt by snapshot-and-swap: every scan builds a new mapping in
isolation and publishes it with a single assignment, so readers always see
the result of one complete pass.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from galscript.catalog.assets import SCENE_EXTENSION
from galscript.common.events import EventBus, VariableIndexUpdated
from galscript.common.filesystem import FileSystem, LocalFileSystem, ProjectPaths
from galscript.config import get_logger
from galscript.index.models import (
    UsageKind,
    VariableLocation,
    VariableRecord,
    VariableUsage,
)
from galscript.parser.expressions import extract_identifiers, split_assignment
from galscript.parser.line_parser import LineParser, get_default_parser
from galscript.parser.models import ParsedLine, VariableDefinition

logger = get_logger(__name__)


def _file_key(path: str | os.PathLike[str]) -> str:
    return os.fspath(path)


def _record(variables: dict[str, VariableRecord], name: str) -> VariableRecord:
    record = variables.get(name)
    if record is None:
        record = VariableRecord(name=name)
        variables[name] = record
    return record


def index_lines(
    variables: dict[str, VariableRecord],
    lines: Iterable[ParsedLine],
    file_path: str,
) -> None:
    """Add the definitions and usages found in ``lines`` to ``variables``.

    Entries are appended in line order. ``variables`` is mutated in place and
    must be a mapping private to the caller.
    """
    for line in lines:
        condition = line.args.get("when")
        if condition:
            for name in extract_identifiers(condition):
                _record(variables, name).usages.append(
                    VariableUsage(file_path, line.line_number, line.raw_line, UsageKind.READ)
                )

        if not line.is_command_named("setVar") or not line.content:
            continue
        assignment = split_assignment(line.content)
        if assignment is None:
            continue
        name, value = assignment
        target = _record(variables, name)
        target.definitions.append(
            VariableDefinition(
                name=name,
                value=value,
                line_number=line.line_number,
                file_path=file_path,
            )
        )
        target.usages.append(
            VariableUsage(file_path, line.line_number, line.raw_line, UsageKind.WRITE)
        )
        for read_name in extract_identifiers(value):
            _record(variables, read_name).usages.append(
                VariableUsage(file_path, line.line_number, line.raw_line, UsageKind.READ)
            )


def _without_file(
    variables: Mapping[str, VariableRecord], key: str
) -> dict[str, VariableRecord]:
    """Copy of ``variables`` with every entry from file ``key`` removed."""
    remaining: dict[str, VariableRecord] = {}
    for name, record in variables.items():
        kept = record.without_file(key)
        if not kept.is_empty:
            remaining[name] = kept
    return remaining


class VariableIndex:
    """Aggregates variable definitions and usages across all scene files.

    Per-file updates that land while a full scan is reading are remembered
    and replayed onto the full scan's mapping before it is published, so a
    rebuild never overwrites a newer edit with older file content.
    """

    def __init__(
        self,
        paths: ProjectPaths,
        filesystem: FileSystem | None = None,
        events: EventBus | None = None,
        parser: LineParser | None = None,
    ) -> None:
        """Initialize an empty index.

        Args:
            paths: Project locations; scene files are found under the scene root
            filesystem: Filesystem collaborator
            events: Bus that receives ``VariableIndexUpdated`` after each publish
            parser: Line parser to use; defaults to the built-in vocabulary
        """
        self.paths = paths
        self.filesystem = filesystem or LocalFileSystem()
        self.events = events
        self.parser = parser or get_default_parser()
        self._variables: dict[str, VariableRecord] = {}
        self._files: frozenset[str] = frozenset()
        self._lock = asyncio.Lock()
        self._generation = 0
        self._full_scans_running = 0
        # file key -> latest text, or None for a removed file
        self._edits_during_scan: dict[str, str | None] = {}

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def indexed_files(self) -> frozenset[str]:
        return self._files

    # Scanning

    async def scan_all(self) -> bool:
        """Rebuild the whole index from every scene file.

        Returns:
            False if a newer full scan started before this one could publish
        """
        self._generation += 1
        generation = self._generation
        if self._full_scans_running == 0:
            self._edits_during_scan = {}
        self._full_scans_running += 1
        try:
            files = await asyncio.to_thread(
                self.filesystem.walk_files, self.paths.scene_root, SCENE_EXTENSION
            )
            contents = await asyncio.gather(
                *(asyncio.to_thread(self.filesystem.read_text, path) for path in files)
            )

            variables: dict[str, VariableRecord] = {}
            for path, text in zip(files, contents):
                index_lines(variables, self.parser.iter_lines(text), _file_key(path))
            file_keys = {_file_key(path) for path in files}

            async with self._lock:
                if generation != self._generation:
                    logger.debug(
                        "Discarding superseded variable scan",
                        generation=generation,
                        current=self._generation,
                    )
                    return False

                for key, text in self._edits_during_scan.items():
                    variables = _without_file(variables, key)
                    if text is None:
                        file_keys.discard(key)
                    else:
                        index_lines(variables, self.parser.iter_lines(text), key)
                        file_keys.add(key)
                if self._edits_during_scan:
                    logger.debug(
                        "Replayed edits made during full scan",
                        files=len(self._edits_during_scan),
                    )
                self._edits_during_scan = {}
                self._variables = variables
                self._files = frozenset(file_keys)
        finally:
            self._full_scans_running -= 1

        logger.info(
            "Variable index rebuilt", files=len(file_keys), variables=len(variables)
        )
        self._publish(full_scan=True)
        return True

    async def scan_file(self, path: str | Path) -> None:
        """Re-index one file, replacing its previous contributions.

        A file that no longer exists is dropped from the index.
        """
        path = Path(path)
        key = _file_key(path)
        if not await asyncio.to_thread(self.filesystem.is_file, path):
            await self.remove_file(path)
            return

        text = await asyncio.to_thread(self.filesystem.read_text, path)
        async with self._lock:
            self._apply(key, text)
        self._publish(full_scan=False, file_path=key)

    def scan_text(self, text: str, file_path: str | Path) -> None:
        """Index in-memory text as the content of ``file_path``."""
        key = _file_key(file_path)
        self._apply(key, text)
        self._publish(full_scan=False, file_path=key)

    async def remove_file(self, path: str | Path) -> None:
        """Drop everything contributed by a deleted file."""
        key = _file_key(path)
        async with self._lock:
            self._apply(key, None)
        self._publish(full_scan=False, file_path=key)

    def clear(self) -> None:
        self._variables = {}
        self._files = frozenset()

    def _apply(self, key: str, text: str | None) -> None:
        variables = _without_file(self._variables, key)
        if text is None:
            self._files = self._files - {key}
        else:
            index_lines(variables, self.parser.iter_lines(text), key)
            self._files = self._files | {key}
        self._variables = variables
        if self._full_scans_running:
            self._edits_during_scan[key] = text
        logger.debug("Variable index updated for file", path=key, variables=len(variables))

    def _publish(self, full_scan: bool, file_path: str | None = None) -> None:
        if self.events is None:
            return
        self.events.publish(
            VariableIndexUpdated(
                full_scan=full_scan,
                variable_count=len(self._variables),
                file_path=file_path,
            )
        )

    # Queries

    def get_variable(self, name: str) -> VariableRecord | None:
        """Look up one variable.

        Args:
            name: Variable name as written in scripts

        Returns:
            The variable's definitions and usages, or None if it never appears
        """
        return self._variables.get(name)

    def get_all_variables(self) -> Mapping[str, VariableRecord]:
        """Read-only view of the current snapshot."""
        return MappingProxyType(self._variables)

    def is_variable_defined(self, name: str) -> bool:
        """Check whether ``name`` is assigned by at least one ``setVar``.

        Args:
            name: Variable name

        Returns:
            True if the variable has one or more definitions
        """
        record = self._variables.get(name)
        return record is not None and record.is_defined

    def get_undefined_variables(self) -> list[str]:
        """Names that are used somewhere but never defined, sorted."""
        return sorted(
            name
            for name, record in self._variables.items()
            if record.usages and not record.definitions
        )

    def find_variable_locations(
        self, name: str, include_definitions: bool = True
    ) -> list[VariableLocation]:
        """All sites where ``name`` is defined or used.

        Args:
            name: Variable name
            include_definitions: Also list ``setVar`` definition sites

        Returns:
            Definitions first, then usages, each in index order
        """
        record = self._variables.get(name)
        if record is None:
            return []
        locations = []
        if include_definitions:
            locations.extend(
                VariableLocation(d.file_path, d.line_number, "definition")
                for d in record.definitions
            )
        locations.extend(
            VariableLocation(u.file_path, u.line_number, u.kind.value)
            for u in record.usages
        )
        return locations

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, name: object) -> bool:
        return name in self._variables
