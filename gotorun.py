#!/usr/bin/env python3
"""
gotorun — GOTO register machine runner

Usage:
    python gotorun.py -s <program.goto> -i <input.txt> [--trace] [--listing]
                      [--max-steps N] [-v|-vv] [-q] [--log-file PATH]

The input file holds the initial registers as whitespace-separated
decimal integers. The final registers are printed to stdout in the same
format, so a result can be fed back in as the next input.

Exit codes:
    0  program reached STOP
    1  source/input could not be read or parsed
    2  internal error
    3  runtime fault (bad register/address, DEC of zero, INC overflow)
    4  --max-steps reached

Examples:
    python gotorun.py -s examples/add.goto -i examples/add_input.txt
    python gotorun.py --source examples/copy.goto --input examples/copy_input.txt --trace
    python gotorun.py -s examples/loop.goto -i examples/loop_input.txt --max-steps 1000 -vv
"""

import argparse
import logging
import sys
import os

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from goto_machine import __version__
from goto_machine.errors import MemoryLoadError, ParseError, RuntimeFault
from goto_machine.loader import load_input, load_source
from goto_machine.log import setup_logging
from goto_machine.machine import GotoMachine, StopReason
from goto_machine.parser import parse_program


def _console_level(args) -> int:
    if args.quiet:
        return logging.ERROR
    if args.verbose == 0:
        return logging.WARNING
    if args.verbose == 1:
        return logging.INFO
    return logging.DEBUG


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gotorun",
        description="Run a GOTO program",
    )
    parser.add_argument("-s", "--source", required=True,
                        help="The GOTO program source file")
    parser.add_argument("-i", "--input", required=True,
                        help="The initial register file the program works on")
    parser.add_argument("--trace", action="store_true",
                        help="Print every executed instruction with the registers before it")
    parser.add_argument("--listing", action="store_true",
                        help="Print the parsed program with addresses before running")
    parser.add_argument("--max-steps", type=int, default=None, metavar="N",
                        help="Stop after N executed instructions (default: no limit)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity on stderr (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", default=None,
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"gotorun {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    log = setup_logging(console_level=_console_level(args),
                        log_file=args.log_file, force=True)

    # Read input
    try:
        source = load_source(args.source)
    except OSError as e:
        print(f"Error reading {args.source}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        program = parse_program(source)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        registers = load_input(args.input)
    except OSError as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        sys.exit(1)
    except MemoryLoadError as e:
        print(f"Input error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.listing:
        print(program.listing())

    log.info("Input: %s", registers.as_text())

    machine = GotoMachine(program, registers)
    machine.enable_trace(args.trace)
    try:
        reason = machine.run(max_steps=args.max_steps)
    except RuntimeFault as e:
        if args.trace:
            print(machine.get_trace())
        print(f"Runtime fault: {e}", file=sys.stderr)
        sys.exit(3)
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(2)

    if args.trace:
        print(machine.get_trace())

    if reason is StopReason.TIMEOUT:
        print(f"Step limit reached: {args.max_steps} steps, stopped at {machine.pc}",
              file=sys.stderr)
        sys.exit(4)

    log.info("Finished in %d steps", machine.steps)
    print(machine.registers.as_text())


if __name__ == "__main__":
    main()
