"""Symbol extraction over whole script documents.

Every extractor accepts either raw document text or lines that were already
parsed, so callers that need several symbol kinds only parse once.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from galscript.parser.expressions import split_assignment
from galscript.parser.line_parser import LineParser, get_default_parser
from galscript.parser.models import (
    ChooseOption,
    LabelSymbol,
    LineKind,
    ParsedLine,
    SceneReference,
    SceneRefKind,
    VariableDefinition,
)

ScriptSource = str | Sequence[ParsedLine]


def _as_lines(source: ScriptSource, parser: LineParser | None) -> Sequence[ParsedLine]:
    if isinstance(source, str):
        return (parser or get_default_parser()).parse_lines(source)
    return source


def parse_choose_options(content: str) -> list[ChooseOption]:
    """Split ``choose`` content into its ``text:target`` options.

    Options without a target segment get ``target=None``.
    """
    options = []
    for option in content.split("|"):
        segments = option.split(":")
        target = segments[1].strip() if len(segments) > 1 else ""
        options.append(ChooseOption(text=segments[0].strip(), target=target or None))
    return options


def extract_labels(
    source: ScriptSource, file_path: str = "", parser: LineParser | None = None
) -> list[LabelSymbol]:
    """Every ``label:`` command with a non-empty name, in source order."""
    return [
        LabelSymbol(name=line.content, line_number=line.line_number, file_path=file_path)
        for line in _as_lines(source, parser)
        if line.is_command_named("label") and line.content
    ]


def extract_variable_definitions(
    source: ScriptSource, file_path: str = "", parser: LineParser | None = None
) -> list[VariableDefinition]:
    """Every ``setVar:name=value`` assignment, in source order.

    Assignments without ``=`` are skipped.
    """
    definitions = []
    for line in _as_lines(source, parser):
        if not line.is_command_named("setVar") or not line.content:
            continue
        assignment = split_assignment(line.content)
        if assignment is None:
            continue
        name, value = assignment
        definitions.append(
            VariableDefinition(
                name=name,
                value=value,
                line_number=line.line_number,
                file_path=file_path,
            )
        )
    return definitions


def extract_scene_references(
    source: ScriptSource, parser: LineParser | None = None
) -> list[SceneReference]:
    """Every ``changeScene`` and ``callScene`` reference, in source order."""
    references = []
    for line in _as_lines(source, parser):
        if line.kind is not LineKind.COMMAND or not line.content:
            continue
        if line.command == SceneRefKind.CHANGE_SCENE.value:
            references.append(
                SceneReference(
                    scene_name=line.content,
                    ref_kind=SceneRefKind.CHANGE_SCENE,
                    line_number=line.line_number,
                )
            )
        elif line.command == SceneRefKind.CALL_SCENE.value:
            references.append(
                SceneReference(
                    scene_name=line.content,
                    ref_kind=SceneRefKind.CALL_SCENE,
                    line_number=line.line_number,
                    condition=line.args.get("when"),
                )
            )
    return references


def extract_characters(
    source: ScriptSource, parser: LineParser | None = None
) -> set[str]:
    """Distinct non-empty speaker names of all dialogue lines."""
    return {
        line.speaker
        for line in _as_lines(source, parser)
        if line.kind is LineKind.DIALOGUE and line.speaker
    }


def find_label_definitions(
    source: ScriptSource,
    label_name: str,
    file_path: str = "",
    parser: LineParser | None = None,
) -> list[LabelSymbol]:
    """Every definition of ``label_name``; more than one means a duplicate label."""
    return [
        label
        for label in extract_labels(source, file_path, parser)
        if label.name == label_name
    ]


def find_label_references(
    source: ScriptSource, label_name: str, parser: LineParser | None = None
) -> list[ParsedLine]:
    """Lines that jump to ``label_name``.

    A ``jumpLabel`` whose content is the label counts, as does a ``choose``
    with at least one option targeting it. Options without a target are
    ignored.
    """
    references = []
    for line in _as_lines(source, parser):
        if line.kind is not LineKind.COMMAND or line.content is None:
            continue
        if line.command == "jumpLabel" and line.content == label_name:
            references.append(line)
        elif line.command == "choose" and any(
            option.target == label_name for option in parse_choose_options(line.content)
        ):
            references.append(line)
    return references


@dataclass
class DocumentSymbols:
    """All symbols of one document, extracted from a single parse."""

    file_path: str
    lines: list[ParsedLine]
    labels: list[LabelSymbol] = field(default_factory=list)
    variables: list[VariableDefinition] = field(default_factory=list)
    scene_references: list[SceneReference] = field(default_factory=list)
    characters: set[str] = field(default_factory=set)

    @property
    def label_names(self) -> set[str]:
        return {label.name for label in self.labels}


def extract_symbols(
    content: str, file_path: str = "", parser: LineParser | None = None
) -> DocumentSymbols:
    """Parse ``content`` once and extract every symbol kind from it."""
    lines = (parser or get_default_parser()).parse_lines(content)
    return DocumentSymbols(
        file_path=file_path,
        lines=lines,
        labels=extract_labels(lines, file_path),
        variables=extract_variable_definitions(lines, file_path),
        scene_references=extract_scene_references(lines),
        characters=extract_characters(lines),
    )
