"""Script line parsing and symbol extraction."""

from galscript.parser.expressions import KEYWORDS, extract_identifiers
from galscript.parser.line_parser import LineParser, parse_line, parse_lines
from galscript.parser.models import (
    ChooseOption,
    LabelSymbol,
    LineKind,
    ParsedLine,
    SceneReference,
    SceneRefKind,
    VariableDefinition,
)
from galscript.parser.symbols import (
    DocumentSymbols,
    extract_characters,
    extract_labels,
    extract_scene_references,
    extract_symbols,
    extract_variable_definitions,
    find_label_definitions,
    find_label_references,
    parse_choose_options,
)

__all__ = [
    "KEYWORDS",
    "ChooseOption",
    "DocumentSymbols",
    "LabelSymbol",
    "LineKind",
    "LineParser",
    "ParsedLine",
    "SceneRefKind",
    "SceneReference",
    "VariableDefinition",
    "extract_characters",
    "extract_identifiers",
    "extract_labels",
    "extract_scene_references",
    "extract_symbols",
    "extract_variable_definitions",
    "find_label_definitions",
    "find_label_references",
    "parse_choose_options",
    "parse_line",
    "parse_lines",
]
