"""
Register file for the GOTO machine.

A flat array of unsigned 64-bit registers. Every access is
bounds-checked; stepping a register below 0 or above REGISTER_MAX is a
RuntimeFault rather than a silent wraparound.

Input format accepted by load_memory():
    decimal integers separated by spaces or newlines, e.g. "3 0 0\\n7"
"""

from __future__ import annotations
import re
from typing import Iterable, List

from .errors import MemoryLoadError, RuntimeFault

DEFAULT_REGISTER_COUNT = 10
REGISTER_MAX = 2**64 - 1

_NUMBER_RE = re.compile(r"\+?[0-9]+")
_SEPARATOR_RE = re.compile(r"[ \n]")


class RegisterFile:
    """Fixed-size array of u64 registers."""

    __slots__ = ('_cells',)

    def __init__(self, values: Iterable[int] = ()):
        cells = []
        for value in values:
            if not isinstance(value, int) or not 0 <= value <= REGISTER_MAX:
                raise MemoryLoadError(f"register value out of range: {value!r}")
            cells.append(value)
        self._cells: List[int] = cells

    @classmethod
    def zeroed(cls, size: int = DEFAULT_REGISTER_COUNT) -> RegisterFile:
        return cls([0] * size)

    # --- Bounds-checked access ---

    def _check(self, index: int):
        if not 0 <= index < len(self._cells):
            raise RuntimeFault(
                f"register {index} out of range "
                f"(register file has {len(self._cells)} registers)"
            )

    def read(self, index: int) -> int:
        self._check(index)
        return self._cells[index]

    def write(self, index: int, value: int):
        self._check(index)
        if not 0 <= value <= REGISTER_MAX:
            raise RuntimeFault(f"value {value} does not fit register {index}")
        self._cells[index] = value

    def increment(self, index: int):
        value = self.read(index)
        if value == REGISTER_MAX:
            raise RuntimeFault(f"overflow incrementing register {index}")
        self._cells[index] = value + 1

    def decrement(self, index: int):
        value = self.read(index)
        if value == 0:
            raise RuntimeFault(f"underflow decrementing register {index}")
        self._cells[index] = value - 1

    # --- Views ---

    def snapshot(self) -> List[int]:
        """Copy of the current register contents."""
        return list(self._cells)

    def as_text(self) -> str:
        """Register contents in the load_memory() input format."""
        return " ".join(str(v) for v in self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> int:
        return self.read(index)

    def __eq__(self, other) -> bool:
        if isinstance(other, RegisterFile):
            return self._cells == other._cells
        if isinstance(other, list):
            return self._cells == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"RegisterFile({self._cells!r})"


def load_memory(text: str) -> RegisterFile:
    """Build a register file from integers separated by spaces or newlines."""
    values = []
    for token in _SEPARATOR_RE.split(text):
        if not token:
            continue
        if not _NUMBER_RE.fullmatch(token):
            raise MemoryLoadError(
                f"Number parsing error: invalid digit found in {token!r}"
            )
        value = int(token)
        if value > REGISTER_MAX:
            raise MemoryLoadError(
                f"Number parsing error: {token} too large for a 64-bit register"
            )
        values.append(value)
    return RegisterFile(values)
