"""
GOTO Machine — fetch/decode/execute loop

Execution model:
  1. Fetch the instruction at PC (faults if PC is outside the program)
  2. Record a trace line if tracing is enabled
  3. Dispatch to the handler for the instruction class
  4. Handler updates registers and PC
  5. Count the step, check the optional step limit

Termination:
  - STOP:     STOP instruction reached
  - TIMEOUT:  max_steps exceeded (only when a limit was given)
  - RuntimeFault raised for bad register/address access, DEC of a zero
    register, or INC of a register already at REGISTER_MAX. The
    faulting instruction leaves registers and PC untouched.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Type, Union

from .errors import RuntimeFault
from .instructions import Dec, Goto, GotoZ, Inc, Instruction, Program, Stop
from .memory import RegisterFile

log = logging.getLogger(__name__)


class StopReason(Enum):
    STOP = 'STOP'
    TIMEOUT = 'TIMEOUT'


class GotoMachine:
    """GOTO register machine.

    Usage:
        machine = GotoMachine(parse_program(src), load_memory("0 0"))
        reason = machine.run()
        print(machine.registers.snapshot())
    """

    def __init__(self, program: Program, registers: Optional[RegisterFile] = None):
        self.program = program
        self.registers = registers if registers is not None else RegisterFile.zeroed()
        self.pc = 0
        self.steps = 0

        self._trace = False
        self._trace_output: List[str] = []

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction. Returns StopReason.STOP on halt, else None."""
        pc = self.pc
        instr = self.program.fetch(pc)

        if self._trace:
            self._trace_output.append(f"{pc}: {instr} mem: {self.registers.snapshot()}")
        if log.isEnabledFor(logging.DEBUG):
            log.debug("%d: %s", pc, instr)

        if isinstance(instr, Stop):
            return StopReason.STOP

        handler = self._dispatch[type(instr)]
        try:
            handler(instr)
        except RuntimeFault as e:
            raise RuntimeFault(e.message, pc=pc, instruction=instr) from None
        self.steps += 1
        return None

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """Run until STOP, a fault, or max_steps executed instructions."""
        log.info("Running %d instructions on %d registers",
                 len(self.program), len(self.registers))
        try:
            while max_steps is None or self.steps < max_steps:
                reason = self.step()
                if reason is not None:
                    log.info("Stopped at %d after %d steps", self.pc, self.steps)
                    return reason
        except RuntimeFault as e:
            log.warning("Runtime fault after %d steps: %s", self.steps, e)
            raise

        log.warning("Step limit %d reached at %d", max_steps, self.pc)
        return StopReason.TIMEOUT

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> Dict[Type[Instruction], Callable]:
        return {
            Inc: self._op_inc,
            Dec: self._op_dec,
            Goto: self._op_goto,
            GotoZ: self._op_gotoz,
        }

    def _op_inc(self, instr: Inc):
        self.registers.increment(instr.cell)
        self.pc += 1

    def _op_dec(self, instr: Dec):
        self.registers.decrement(instr.cell)
        self.pc += 1

    def _op_goto(self, instr: Goto):
        self.pc = instr.target

    def _op_gotoz(self, instr: GotoZ):
        if self.registers.read(instr.condition_cell) == 0:
            self.pc = instr.goto_cell
        else:
            self.pc += 1

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Record one line per executed instruction."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def reset(self, registers: Optional[RegisterFile] = None):
        """Rewind to address 0, optionally with a fresh register file."""
        if registers is not None:
            self.registers = registers
        self.pc = 0
        self.steps = 0
        self._trace_output.clear()


def execute(program: Program,
            memory: Union[RegisterFile, Iterable[int]],
            max_steps: Optional[int] = None) -> List[int]:
    """Run program on a copy of memory and return the final registers.

    Raises RuntimeFault on faults, including hitting max_steps.
    """
    registers = RegisterFile(memory.snapshot() if isinstance(memory, RegisterFile) else memory)
    machine = GotoMachine(program, registers)
    if machine.run(max_steps) is StopReason.TIMEOUT:
        raise RuntimeFault(f"step limit of {max_steps} reached", pc=machine.pc)
    return machine.registers.snapshot()
