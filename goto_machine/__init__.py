"""
GOTO Register Machine
=====================
An interpreter for the GOTO language: five instructions (STOP, INC, DEC,
GOTO, GOTOZ) over a flat file of unsigned 64-bit registers.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌─────────────┐
    │  Source  │───>│  Parser  │───>│ Program  │───>│ GotoMachine │───> registers
    │ (.goto)  │    │ (lines)  │    │ (instrs) │    │ (fetch/exec)│
    └──────────┘    └──────────┘    └──────────┘    └─────────────┘
                                                          ^
    ┌──────────┐    ┌────────────────┐                    │
    │  Input   │───>│  load_memory   │────────────────────┘
    │ (.txt)   │    │ (RegisterFile) │
    └──────────┘    └────────────────┘

    - instructions.py: Frozen dataclasses, one per instruction + Program
    - parser.py:       Space-split tokenizer, fail-fast per line
    - memory.py:       Bounds-checked u64 register file + input loader
    - machine.py:      Dispatch-table executor with optional trace
    - loader.py:       Source/input files from disk
"""

__version__ = "0.1.0"

from typing import Iterable, List, Optional

from .errors import GotoError, MemoryLoadError, ParseError, RuntimeFault
from .instructions import (
    Dec, Goto, GotoZ, Inc, Instruction, InstructionAddress, Program,
    RegisterIndex, Stop,
)
from .parser import parse_instruction, parse_number, parse_program, tokenize
from .memory import DEFAULT_REGISTER_COUNT, REGISTER_MAX, RegisterFile, load_memory
from .machine import GotoMachine, StopReason, execute
from .loader import load_input, load_program, load_source


def run_source(source: str, memory: Optional[Iterable[int]] = None,
               *, max_steps: Optional[int] = None) -> List[int]:
    """Parse and run a GOTO program, returning the final registers.

    Full pipeline: parse_program -> GotoMachine.run.

    Args:
        source: Program text, one instruction per line.
        memory: Initial register values. Defaults to DEFAULT_REGISTER_COUNT
            zeroed registers.
        max_steps: Optional limit on executed instructions; reaching it
            raises RuntimeFault.

    Returns:
        Final register contents as a list of ints.
    """
    program = parse_program(source)
    if memory is None:
        memory = RegisterFile.zeroed()
    return execute(program, memory, max_steps=max_steps)


__all__ = [
    "DEFAULT_REGISTER_COUNT",
    "REGISTER_MAX",
    "Dec",
    "Goto",
    "GotoError",
    "GotoMachine",
    "GotoZ",
    "Inc",
    "Instruction",
    "InstructionAddress",
    "MemoryLoadError",
    "ParseError",
    "Program",
    "RegisterFile",
    "RegisterIndex",
    "RuntimeFault",
    "Stop",
    "StopReason",
    "execute",
    "load_input",
    "load_memory",
    "load_program",
    "load_source",
    "parse_instruction",
    "parse_number",
    "parse_program",
    "run_source",
    "tokenize",
]
