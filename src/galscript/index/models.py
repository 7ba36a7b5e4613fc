"""Data models for the project-wide variable index."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from galscript.parser.models import VariableDefinition


class UsageKind(str, Enum):
    """Whether a usage reads or assigns the variable."""

    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class VariableUsage:
    """One place where a variable is read or written."""

    file_path: str
    line_number: int
    context: str
    kind: UsageKind


@dataclass
class VariableRecord:
    """Everything known about one variable across the project."""

    name: str
    definitions: list[VariableDefinition] = field(default_factory=list)
    usages: list[VariableUsage] = field(default_factory=list)

    @property
    def is_defined(self) -> bool:
        return bool(self.definitions)

    @property
    def is_empty(self) -> bool:
        return not self.definitions and not self.usages

    def without_file(self, file_path: str) -> VariableRecord:
        """Copy of this record minus everything contributed by ``file_path``."""
        return VariableRecord(
            name=self.name,
            definitions=[d for d in self.definitions if d.file_path != file_path],
            usages=[u for u in self.usages if u.file_path != file_path],
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "definitions": [
                {
                    "file_path": d.file_path,
                    "line_number": d.line_number,
                    "value": d.value,
                }
                for d in self.definitions
            ],
            "usages": [
                {
                    "file_path": u.file_path,
                    "line_number": u.line_number,
                    "kind": u.kind.value,
                    "context": u.context,
                }
                for u in self.usages
            ],
        }


@dataclass(frozen=True)
class VariableLocation:
    """A definition or usage site returned by location queries."""

    file_path: str
    line_number: int
    kind: str
