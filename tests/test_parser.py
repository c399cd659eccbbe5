"""
Parser tests for the GOTO register machine.

Tests cover:
  - Each instruction form
  - Whitespace tolerance (leading, trailing, repeated spaces)
  - Token-count, unknown-mnemonic and number errors
  - Line-number tagging and fail-fast behaviour over whole programs
"""

import pytest
from goto_machine import (
    Dec, Goto, GotoZ, Inc, ParseError, Program, Stop,
    parse_instruction, parse_number, parse_program, tokenize,
)


def _error(source: str) -> ParseError:
    """Parse source expecting failure; return the raised error."""
    with pytest.raises(ParseError) as exc_info:
        parse_program(source)
    return exc_info.value


# ─── Single instructions ─────────────────────

class TestInstructionForms:
    def test_stop(self):
        assert parse_instruction("STOP") == Stop()

    def test_inc(self):
        assert parse_instruction("INC 42") == Inc(42)

    def test_dec_padded(self):
        assert parse_instruction(" DEC 13 ") == Dec(13)

    def test_goto_repeated_spaces(self):
        assert parse_instruction(" GOTO  0") == Goto(0)

    def test_gotoz(self):
        assert parse_instruction("GOTOZ 42 0") == GotoZ(condition_cell=42, goto_cell=0)

    def test_stop_ignores_trailing_tokens(self):
        assert parse_instruction("STOP now please") == Stop()

    def test_instruction_kinds_are_distinct(self):
        assert Inc(1) != Dec(1)
        assert Goto(1) != Inc(1)

    def test_str_is_canonical_source(self):
        assert str(GotoZ(3, 7)) == "GOTOZ 3 7"
        assert str(Stop()) == "STOP"
        assert str(Goto(12)) == "GOTO 12"


class TestTokenize:
    def test_drops_empty_tokens(self):
        assert tokenize("  INC   4  ") == ["INC", "4"]

    def test_empty_line(self):
        assert tokenize("") == []
        assert tokenize("    ") == []

    def test_tab_is_not_a_separator(self):
        assert tokenize("INC\t4") == ["INC\t4"]


class TestNumbers:
    def test_decimal(self):
        assert parse_number("0") == 0
        assert parse_number("007") == 7

    def test_plus_sign_accepted(self):
        assert parse_number("+5") == 5

    def test_largest_index(self):
        assert parse_number(str(2**64 - 1)) == 2**64 - 1

    def test_too_large(self):
        with pytest.raises(ParseError, match="too large"):
            parse_number(str(2**64))

    @pytest.mark.parametrize("text", ["-1", "x", "1.5", "0x10", "1_000", "+"])
    def test_not_a_number(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse_number(text)
        assert str(exc_info.value).startswith(f"{text} is not a number (reason: ")


# ─── Errors ─────────────────────

class TestLineErrors:
    def test_inc_too_many_tokens(self):
        e = _error("INC 1 2")
        assert "Not 2 tokens in: INC 1 2" in str(e)

    def test_goto_missing_operand(self):
        assert "Not 2 tokens in: GOTO" in str(_error("GOTO"))

    def test_gotoz_wrong_count(self):
        assert "Not 3 tokens in: GOTOZ 1" in str(_error("GOTOZ 1"))

    def test_unknown_token(self):
        assert "Unknown token: FOO" in str(_error("FOO 1"))

    def test_lowercase_is_unknown(self):
        assert "Unknown token: inc" in str(_error("inc 1"))

    def test_empty_line(self):
        e = _error("INC 0\n\nSTOP")
        assert str(e) == "error in line 2: No tokens in: "

    def test_bad_operand(self):
        e = _error("DEC abc")
        assert str(e).startswith("error in line 1: abc is not a number")

    def test_error_attributes(self):
        e = _error("STOP\nSTOP\nJUMP 3")
        assert e.line == 3
        assert e.text == "JUMP 3"
        assert e.message == "Unknown token: JUMP"

    def test_fail_fast_reports_first_error(self):
        e = _error("INC 1\nFOO\nBAR")
        assert e.line == 2
        assert "FOO" in str(e)

    def test_single_line_error_has_no_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse_instruction("INC")
        assert exc_info.value.line is None
        assert str(exc_info.value) == "Not 2 tokens in: INC"


# ─── Whole programs ─────────────────────

class TestParseProgram:
    def test_mixed_program(self):
        src = "INC 1\nDEC 2\nGOTO 3\nSTOP"
        assert parse_program(src) == [Inc(1), Dec(2), Goto(3), Stop()]

    def test_indented_lines(self):
        src = """INC 1
        DEC 2
        GOTO 3
        STOP"""
        assert parse_program(src) == [Inc(1), Dec(2), Goto(3), Stop()]

    def test_trailing_newline(self):
        assert len(parse_program("INC 0\nSTOP\n")) == 2

    def test_crlf_line_endings(self):
        assert parse_program("INC 0\r\nSTOP\r\n") == [Inc(0), Stop()]

    def test_only_newline_separates_lines(self):
        e = _error("INC 0\x0cSTOP")
        assert e.line == 1
        assert "is not a number" in e.message

    def test_unicode_line_breaks_stay_on_one_line(self):
        e = _error("INC 0\x1cFOO")
        assert e.line == 1

    def test_lone_carriage_return_is_not_a_break(self):
        e = _error("INC 0\rSTOP")
        assert e.line == 1

    def test_empty_source(self):
        assert len(parse_program("")) == 0

    def test_returns_program(self):
        program = parse_program("STOP")
        assert isinstance(program, Program)
        assert program[0] == Stop()

    def test_no_bounds_validation_at_parse_time(self):
        # Out-of-range targets are a runtime concern.
        assert parse_program("GOTO 99") == [Goto(99)]


class TestProgramViews:
    def test_listing(self):
        program = parse_program("INC 0\nGOTOZ 0 3\nSTOP")
        assert program.listing() == "  0: INC 0\n  1: GOTOZ 0 3\n  2: STOP"

    def test_source_reparses(self):
        program = parse_program("  INC   0\nGOTOZ 0    3 \n STOP")
        assert program.source() == "INC 0\nGOTOZ 0 3\nSTOP"
        assert parse_program(program.source()) == program

    def test_program_is_immutable(self):
        program = parse_program("STOP")
        with pytest.raises(TypeError):
            program[0] = Inc(1)
