"""Data models for parsed script lines and extracted symbols."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LineKind(str, Enum):
    """Classification of a single script line."""

    COMMAND = "command"
    DIALOGUE = "dialogue"
    COMMENT = "comment"
    EMPTY = "empty"


class SceneRefKind(str, Enum):
    """How a scene is entered from another scene."""

    CHANGE_SCENE = "changeScene"
    CALL_SCENE = "callScene"


@dataclass
class ParsedLine:
    """One classified source line.

    ``line_number`` is 0-based. ``args`` keeps argument order; a repeated
    key keeps its last value.
    """

    kind: LineKind
    raw_line: str
    line_number: int
    command: str | None = None
    speaker: str | None = None
    content: str | None = None
    args: dict[str, str] = field(default_factory=dict)

    @property
    def is_command(self) -> bool:
        return self.kind is LineKind.COMMAND

    def is_command_named(self, name: str) -> bool:
        """Check whether this line is the command ``name``."""
        return self.kind is LineKind.COMMAND and self.command == name


@dataclass
class LabelSymbol:
    """A ``label:`` definition."""

    name: str
    line_number: int
    file_path: str


@dataclass
class VariableDefinition:
    """A ``setVar:name=value`` assignment."""

    name: str
    value: str
    line_number: int
    file_path: str


@dataclass
class SceneReference:
    """A ``changeScene`` or ``callScene`` reference to another scene."""

    scene_name: str
    ref_kind: SceneRefKind
    line_number: int
    condition: str | None = None


@dataclass
class ChooseOption:
    """One ``display text:target label`` option of a ``choose`` command."""

    text: str
    target: str | None
