"""File loading for GOTO source programs and input register files."""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

from .instructions import Program
from .memory import RegisterFile, load_memory
from .parser import parse_program

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_source(path: PathLike) -> str:
    """Read program text. OSError propagates to the caller."""
    text = Path(path).read_text(encoding="utf-8")
    log.info("Loaded source %s (%d bytes)", path, len(text))
    return text


def load_program(path: PathLike) -> Program:
    return parse_program(load_source(path))


def load_input(path: PathLike) -> RegisterFile:
    """Read and parse an input register file."""
    text = Path(path).read_text(encoding="utf-8")
    registers = load_memory(text)
    log.info("Loaded input %s (%d registers)", path, len(registers))
    return registers
