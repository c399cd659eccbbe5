"""
Instruction definitions for the GOTO register machine.

Defines the closed set of instructions produced by the parser and
consumed by the machine. Register operands and jump targets are both
plain non-negative ints, but they are kept under distinct names so a
jump target never gets mistaken for a register:

    STOP                      Stop()
    INC   <cell>              Inc(cell)
    DEC   <cell>              Dec(cell)
    GOTO  <target>            Goto(target)
    GOTOZ <cell> <target>     GotoZ(condition_cell, goto_cell)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Iterable, Iterator, Tuple, Union

from .errors import RuntimeFault

RegisterIndex = int
InstructionAddress = int


# ──────────────────────────────────────────────
# Instructions
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Instruction:
    """Base class for all instructions."""
    mnemonic: ClassVar[str] = ""

    def operands(self) -> Tuple[int, ...]:
        return ()

    def __str__(self) -> str:
        return " ".join([self.mnemonic, *(str(op) for op in self.operands())])


@dataclass(frozen=True)
class Stop(Instruction):
    """Halt the machine."""
    mnemonic: ClassVar[str] = "STOP"


@dataclass(frozen=True)
class Inc(Instruction):
    """registers[cell] += 1"""
    cell: RegisterIndex
    mnemonic: ClassVar[str] = "INC"

    def operands(self) -> Tuple[int, ...]:
        return (self.cell,)


@dataclass(frozen=True)
class Dec(Instruction):
    """registers[cell] -= 1"""
    cell: RegisterIndex
    mnemonic: ClassVar[str] = "DEC"

    def operands(self) -> Tuple[int, ...]:
        return (self.cell,)


@dataclass(frozen=True)
class Goto(Instruction):
    """Unconditional jump to an absolute instruction address."""
    target: InstructionAddress
    mnemonic: ClassVar[str] = "GOTO"

    def operands(self) -> Tuple[int, ...]:
        return (self.target,)


@dataclass(frozen=True)
class GotoZ(Instruction):
    """Jump to goto_cell if registers[condition_cell] == 0."""
    condition_cell: RegisterIndex
    goto_cell: InstructionAddress
    mnemonic: ClassVar[str] = "GOTOZ"

    def operands(self) -> Tuple[int, ...]:
        return (self.condition_cell, self.goto_cell)


AnyInstruction = Union[Stop, Inc, Dec, Goto, GotoZ]


# ──────────────────────────────────────────────
# Program
# ──────────────────────────────────────────────

class Program:
    """Immutable, 0-indexed sequence of instructions."""

    __slots__ = ('_instructions',)

    def __init__(self, instructions: Iterable[Instruction] = ()):
        self._instructions: Tuple[Instruction, ...] = tuple(instructions)

    @property
    def instructions(self) -> Tuple[Instruction, ...]:
        return self._instructions

    def fetch(self, address: InstructionAddress) -> Instruction:
        """Return the instruction at address, faulting outside the program."""
        if not 0 <= address < len(self._instructions):
            raise RuntimeFault(
                f"program counter {address} outside program "
                f"of {len(self._instructions)} instructions"
            )
        return self._instructions[address]

    def listing(self) -> str:
        """Address-annotated listing, one instruction per line."""
        width = len(str(max(len(self._instructions) - 1, 0)))
        return "\n".join(
            f"  {addr:>{width}}: {instr}"
            for addr, instr in enumerate(self._instructions)
        )

    def source(self) -> str:
        """Canonical source text; parses back to an equal Program."""
        return "\n".join(str(instr) for instr in self._instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def __getitem__(self, index):
        return self._instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __eq__(self, other) -> bool:
        if isinstance(other, Program):
            return self._instructions == other._instructions
        if isinstance(other, (list, tuple)):
            return self._instructions == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._instructions)

    def __repr__(self) -> str:
        return f"Program({list(self._instructions)!r})"
