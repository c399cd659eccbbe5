"""
Exception hierarchy for the GOTO register machine.

    GotoError
    ├── ParseError        malformed source line
    ├── MemoryLoadError   malformed input register file
    └── RuntimeFault      bad register / address, under- or overflow
"""

from __future__ import annotations
from typing import Optional


class GotoError(Exception):
    """Base class for every error raised by goto_machine."""


class ParseError(GotoError):
    def __init__(self, message: str, line: Optional[int] = None, text: str = ""):
        self.message = message
        self.line = line
        self.text = text
        if line is not None:
            super().__init__(f"error in line {line}: {message}")
        else:
            super().__init__(message)

    def at_line(self, line: int, text: str) -> ParseError:
        """Return a copy of this error tagged with a 1-based line number."""
        return ParseError(self.message, line=line, text=text)


class MemoryLoadError(GotoError):
    pass


class RuntimeFault(GotoError):
    def __init__(self, message: str, pc: Optional[int] = None, instruction=None):
        self.message = message
        self.pc = pc
        self.instruction = instruction
        if pc is not None and instruction is not None:
            super().__init__(f"at {pc} ({instruction}): {message}")
        elif pc is not None:
            super().__init__(f"at {pc}: {message}")
        else:
            super().__init__(message)
