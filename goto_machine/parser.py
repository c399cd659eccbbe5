"""
Line-oriented parser for GOTO programs.

Each source line holds exactly one instruction. Lines are split on the
space character with empty tokens dropped, so leading, trailing and
repeated spaces are all fine. The first malformed line aborts the parse
with a ParseError tagged with its 1-based line number.
"""

from __future__ import annotations
import logging
import re
from typing import List

from .errors import ParseError
from .instructions import Dec, Goto, GotoZ, Inc, Instruction, Program, Stop

log = logging.getLogger(__name__)

# Register indices and addresses share one unsigned 64-bit range.
INDEX_MAX = 2**64 - 1

_NUMBER_RE = re.compile(r"\+?[0-9]+")

# Single-operand instructions: mnemonic -> constructor
_UNARY = {
    "INC": Inc,
    "DEC": Dec,
    "GOTO": Goto,
}


def tokenize(line: str) -> List[str]:
    return [tok for tok in line.split(" ") if tok]


def parse_number(text: str) -> int:
    """Parse a non-negative decimal operand."""
    if not _NUMBER_RE.fullmatch(text):
        reason = "invalid digit found in string"
    else:
        value = int(text)
        if value <= INDEX_MAX:
            return value
        reason = "number too large to fit in target type"
    raise ParseError(f"{text} is not a number (reason: {reason})")


def parse_instruction(line: str) -> Instruction:
    """Parse one source line. Raised errors carry no line number."""
    tokens = tokenize(line)
    if not tokens:
        raise ParseError(f"No tokens in: {line}")

    mnemonic = tokens[0]
    if mnemonic == "STOP":
        # Trailing tokens after STOP are ignored.
        return Stop()

    if mnemonic in _UNARY:
        if len(tokens) != 2:
            raise ParseError(f"Not 2 tokens in: {line}")
        return _UNARY[mnemonic](parse_number(tokens[1]))

    if mnemonic == "GOTOZ":
        if len(tokens) != 3:
            raise ParseError(f"Not 3 tokens in: {line}")
        return GotoZ(
            condition_cell=parse_number(tokens[1]),
            goto_cell=parse_number(tokens[2]),
        )

    raise ParseError(f"Unknown token: {mnemonic}")


def split_lines(source: str) -> List[str]:
    """Split on newlines only, dropping one trailing carriage return per line.

    A final empty segment (source ending in a newline) is not a line.
    """
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_program(source: str) -> Program:
    """Parse a whole program, one instruction per line."""
    instructions = []
    for line_nr, line in enumerate(split_lines(source), start=1):
        try:
            instructions.append(parse_instruction(line))
        except ParseError as e:
            raise e.at_line(line_nr, line) from None
    log.debug("Parsed %d instructions", len(instructions))
    return Program(instructions)
