"""Tests for the script line parser."""

import string

import pytest
from hypothesis import example, given
from hypothesis import strategies as st

from galscript.parser.line_parser import LineParser, parse_line, parse_lines, split_arguments
from galscript.parser.models import LineKind


class TestParseLine:
    """Classification of single lines."""

    def test_label_command_with_terminator(self):
        parsed = parse_line("label:start;", 4)
        assert parsed.kind is LineKind.COMMAND
        assert parsed.command == "label"
        assert parsed.content == "start"
        assert parsed.line_number == 4
        assert parsed.raw_line == "label:start;"

    def test_dialogue_with_argument(self):
        parsed = parse_line("Alice:Hello -v=voice1.ogg", 0)
        assert parsed.kind is LineKind.DIALOGUE
        assert parsed.speaker == "Alice"
        assert parsed.content == "Hello"
        assert parsed.args == {"v": "voice1.ogg"}

    def test_comment_line(self):
        parsed = parse_line("; a note", 2)
        assert parsed.kind is LineKind.COMMENT
        assert parsed.content == "a note"

    def test_indented_comment_line(self):
        parsed = parse_line("   ;indented", 0)
        assert parsed.kind is LineKind.COMMENT
        assert parsed.content == "indented"

    @pytest.mark.parametrize("line", ["", "   ", "\t", "\r"])
    def test_blank_lines_are_empty(self, line):
        parsed = parse_line(line, 0)
        assert parsed.kind is LineKind.EMPTY
        assert parsed.content is None

    def test_inline_comment_is_removed(self):
        parsed = parse_line("changeBg:bg1.jpg ; the park", 0)
        assert parsed.kind is LineKind.COMMAND
        assert parsed.content == "bg1.jpg"

    def test_escaped_semicolon_becomes_literal(self):
        parsed = parse_line(r"Bob:Wait\; what?;", 0)
        assert parsed.kind is LineKind.DIALOGUE
        assert parsed.content == "Wait; what?"
        assert "\\" not in parsed.content

    def test_only_first_colon_splits(self):
        parsed = parse_line("Alice:Time is 10:30", 0)
        assert parsed.speaker == "Alice"
        assert parsed.content == "Time is 10:30"

    def test_command_content_may_contain_colons(self):
        parsed = parse_line("choose:Left:l1|Right:l2;", 0)
        assert parsed.command == "choose"
        assert parsed.content == "Left:l1|Right:l2"

    def test_bare_command(self):
        parsed = parse_line("end;", 7)
        assert parsed.kind is LineKind.COMMAND
        assert parsed.command == "end"
        assert parsed.content == ""

    def test_narration_without_colon(self):
        parsed = parse_line("The wind howls.", 0)
        assert parsed.kind is LineKind.DIALOGUE
        assert parsed.speaker is None
        assert parsed.content == "The wind howls."

    def test_leading_colon_is_narration(self):
        parsed = parse_line(":Welcome home;", 0)
        assert parsed.kind is LineKind.DIALOGUE
        assert parsed.speaker is None
        assert parsed.content == "Welcome home"

    def test_unknown_name_before_colon_is_speaker(self):
        parsed = parse_line("changeBG:bg.jpg", 0)
        assert parsed.kind is LineKind.DIALOGUE
        assert parsed.speaker == "changeBG"

    def test_bare_flag_argument(self):
        parsed = parse_line("changeFigure:alice.png -left -next;", 0)
        assert parsed.content == "alice.png"
        assert parsed.args == {"left": "true", "next": "true"}

    def test_argument_order_and_last_value_wins(self):
        parsed = parse_line("changeBg:a.jpg -next -when=x>1 -next=false", 0)
        assert list(parsed.args) == ["next", "when"]
        assert parsed.args["next"] == "false"

    def test_argument_value_may_contain_hyphen(self):
        parsed = parse_line("setAnimation:enter-from-left -target=fig-left", 0)
        assert parsed.content == "enter-from-left"
        assert parsed.args == {"target": "fig-left"}

    def test_narration_with_spaced_hyphen_is_split(self):
        # Documented limitation of the " -" argument boundary
        parsed = parse_line("Well -maybe not", 0)
        assert parsed.content == "Well"
        assert parsed.args == {"maybe": "true"}

    def test_custom_vocabulary(self):
        parsed = parse_line("shake:screen", 0, known_commands={"shake"})
        assert parsed.kind is LineKind.COMMAND
        assert parsed.command == "shake"

    def test_helpers_on_parsed_line(self):
        parsed = parse_line("jumpLabel:end", 0)
        assert parsed.is_command
        assert parsed.is_command_named("jumpLabel")
        assert not parsed.is_command_named("label")

    @given(line=st.text(), line_number=st.integers(min_value=0))
    @example(line=r"\;", line_number=0)
    @example(line="a:b:c:d", line_number=0)
    @example(line="-x=1 -y", line_number=0)
    @example(line="あい:う", line_number=0)
    def test_parser_is_total(self, line, line_number):
        parsed = parse_line(line, line_number)
        assert parsed.kind in set(LineKind)
        assert parsed.line_number == line_number
        assert parsed.raw_line == line

    @given(
        before=st.text(alphabet=string.ascii_letters, min_size=1, max_size=20),
        after=st.text(alphabet=string.ascii_letters + " ", max_size=20),
    )
    def test_escaped_semicolon_never_survives(self, before, after):
        parsed = parse_line(f"{before}\\;{after}", 0)
        assert parsed.kind is LineKind.DIALOGUE
        assert parsed.content == f"{before};{after}".strip()
        assert "\\" not in parsed.content

    @given(text=st.text())
    def test_every_line_gets_a_record(self, text):
        parsed = parse_lines(text)
        assert len(parsed) == text.count("\n") + 1
        assert [p.line_number for p in parsed] == list(range(len(parsed)))


class TestSplitArguments:
    """Argument tail parsing."""

    def test_no_arguments(self):
        assert split_arguments("changeBg:bg.jpg") == ("changeBg:bg.jpg", {})

    def test_empty_key_is_skipped(self):
        main, args = split_arguments("text -=value -ok")
        assert main == "text"
        assert args == {"ok": "true"}

    def test_value_with_spaces(self):
        _, args = split_arguments("unlockCg:cg.jpg -name=First meeting")
        assert args == {"name": "First meeting"}


class TestParseLines:
    """Whole-document parsing."""

    def test_one_record_per_line(self):
        lines = parse_lines("label:a;\n\nAlice:Hi;\nend;")
        assert [line.kind for line in lines] == [
            LineKind.COMMAND,
            LineKind.EMPTY,
            LineKind.DIALOGUE,
            LineKind.COMMAND,
        ]
        assert [line.line_number for line in lines] == [0, 1, 2, 3]

    def test_crlf_lines(self):
        lines = parse_lines("label:a;\r\nend;\r\n")
        assert lines[0].content == "a"
        assert lines[1].command == "end"
        assert lines[2].kind is LineKind.EMPTY

    def test_parser_instance_reuses_vocabulary(self):
        parser = LineParser(["intro"])
        assert parser.parse_line("intro:hello", 0).is_command
        assert not parser.parse_line("label:x", 0).is_command
