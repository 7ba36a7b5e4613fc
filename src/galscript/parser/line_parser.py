"""Line parser for the visual-novel scripting language.

Every line classifies as exactly one of command, dialogue, comment or empty.
Parsing never raises: malformed lines fall through to dialogue.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from galscript.catalog import default_catalog
from galscript.parser.models import LineKind, ParsedLine

# An inline comment starts at the first ';' not preceded by a backslash
INLINE_COMMENT_PATTERN = re.compile(r"(?<!\\);")
# Arguments start at the first whitespace followed by '-'
ARGUMENT_BOUNDARY_PATTERN = re.compile(r"\s-")
ARGUMENT_SPLIT_PATTERN = re.compile(r"(?:^|\s)-")


def split_arguments(text: str) -> tuple[str, dict[str, str]]:
    """Split a line body into its main part and its ``-key[=value]`` arguments.

    Args:
        text: Line body with comments already removed

    Returns:
        Tuple of (main part, ordered argument mapping)
    """
    boundary = ARGUMENT_BOUNDARY_PATTERN.search(text)
    if boundary is None:
        return text, {}

    main_part = text[: boundary.start()].strip()
    tail = text[boundary.start() :].strip()

    args: dict[str, str] = {}
    for token in ARGUMENT_SPLIT_PATTERN.split(tail):
        token = token.strip()
        if not token:
            continue
        key, sep, value = token.partition("=")
        if sep:
            key = key.strip()
            if key:
                args[key] = value.strip()
        else:
            args[token.split()[0]] = "true"
    return main_part, args


class LineParser:
    """Classify script lines against a set of known command names."""

    def __init__(self, known_commands: Iterable[str] | None = None) -> None:
        """Initialize the parser.

        Args:
            known_commands: Command vocabulary; defaults to the built-in catalog
        """
        if known_commands is None:
            self.known_commands = default_catalog().names
        else:
            self.known_commands = frozenset(known_commands)

    def parse_line(self, line: str, line_number: int) -> ParsedLine:
        """Parse one raw line.

        Args:
            line: Raw line text
            line_number: 0-based line number

        Returns:
            The classified line
        """
        trimmed = line.strip()

        if not trimmed:
            return ParsedLine(kind=LineKind.EMPTY, raw_line=line, line_number=line_number)

        if trimmed.startswith(";"):
            return ParsedLine(
                kind=LineKind.COMMENT,
                raw_line=line,
                line_number=line_number,
                content=trimmed[1:].strip(),
            )

        body = trimmed
        comment = INLINE_COMMENT_PATTERN.search(body)
        if comment is not None:
            body = body[: comment.start()].strip()
        body = body.replace("\\;", ";")

        main_part, args = split_arguments(body)

        colon_index = main_part.find(":")
        if colon_index >= 0:
            before_colon = main_part[:colon_index].strip()
            after_colon = main_part[colon_index + 1 :].strip()
            if before_colon in self.known_commands:
                return ParsedLine(
                    kind=LineKind.COMMAND,
                    raw_line=line,
                    line_number=line_number,
                    command=before_colon,
                    content=after_colon,
                    args=args,
                )
            return ParsedLine(
                kind=LineKind.DIALOGUE,
                raw_line=line,
                line_number=line_number,
                speaker=before_colon or None,
                content=after_colon,
                args=args,
            )

        if main_part in self.known_commands:
            return ParsedLine(
                kind=LineKind.COMMAND,
                raw_line=line,
                line_number=line_number,
                command=main_part,
                content="",
                args=args,
            )

        # Narration
        return ParsedLine(
            kind=LineKind.DIALOGUE,
            raw_line=line,
            line_number=line_number,
            content=main_part,
            args=args,
        )

    def iter_lines(self, content: str) -> Iterator[ParsedLine]:
        """Parse every line of a document in order."""
        for line_number, line in enumerate(content.split("\n")):
            yield self.parse_line(line, line_number)

    def parse_lines(self, content: str) -> list[ParsedLine]:
        """Parse a whole document into one record per line."""
        return list(self.iter_lines(content))


_default_parser: LineParser | None = None


def get_default_parser() -> LineParser:
    """Shared parser for the built-in command vocabulary."""
    global _default_parser
    if _default_parser is None:
        _default_parser = LineParser()
    return _default_parser


def parse_line(
    line: str, line_number: int, known_commands: Iterable[str] | None = None
) -> ParsedLine:
    """Parse one raw line with the built-in or a custom command vocabulary."""
    if known_commands is None:
        return get_default_parser().parse_line(line, line_number)
    return LineParser(known_commands).parse_line(line, line_number)


def parse_lines(content: str) -> list[ParsedLine]:
    """Parse a document with the built-in command vocabulary."""
    return get_default_parser().parse_lines(content)
