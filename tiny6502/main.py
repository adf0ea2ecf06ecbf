"""
tiny6502 -- command-line front end.

Loads a raw binary image into a fresh 6502 and runs, disassembles or
describes it.

Usage examples::

    # Run a test image loaded at $0600 until it traps on itself
    tiny6502 run prog.bin --load-address 0x0600

    # Stop at a known address and show every instruction on the way
    tiny6502 run prog.bin --load-address 0x0400 --stop-at 0x3469 --trace

    # List the first 20 instructions
    tiny6502 disasm prog.bin --load-address 0x0600 --count 20

    # Show the image size and where it lands
    tiny6502 info prog.bin --load-address 0x8000
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from tiny6502.core.disasm import disassemble_range
from tiny6502.core.errors import CPUError, UnknownOpcode
from tiny6502.core.logger import ConsoleLogger, NullLogger
from tiny6502.core.m6502 import M6502
from tiny6502.shell.image_loader import describe, load_image

DEFAULT_MAX_STEPS = 1_000_000


# ---------------------------------------------------------------------------
# CLI definition
# ---------------------------------------------------------------------------

def parse_address(text: str) -> int:
    """Parse ``$FFFC``, ``0xFFFC`` or ``65532`` into a 16-bit address."""
    raw = text.strip()
    try:
        if raw.startswith("$"):
            value = int(raw[1:], 16)
        elif raw.lower().startswith("0x"):
            value = int(raw, 16)
        else:
            value = int(raw, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid address: {text!r}") from None
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"address out of range: {text!r}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tiny6502",
        description="tiny6502 -- run, disassemble or inspect raw 6502 images.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("image", help="Path to a raw binary image.")
    common.add_argument(
        "--load-address", "-l",
        type=parse_address,
        default=0x0000,
        metavar="ADDR",
        help="Address the first image byte is loaded at.  Default: $0000.",
    )
    common.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
    )

    run = sub.add_parser("run", parents=[common], help="Execute an image.")
    run.add_argument(
        "--start",
        type=parse_address,
        default=None,
        metavar="ADDR",
        help="Initial program counter.  Default: the load address.",
    )
    run.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_MAX_STEPS,
        metavar="N",
        help=f"Stop after N instructions.  Default: {DEFAULT_MAX_STEPS}.",
    )
    run.add_argument(
        "--stop-at",
        type=parse_address,
        default=None,
        metavar="ADDR",
        help="Stop when the program counter reaches ADDR.",
    )
    run.add_argument(
        "--trace",
        action="store_true",
        default=False,
        help="Print a trace line before every instruction.",
    )

    dis = sub.add_parser("disasm", parents=[common], help="Disassemble an image.")
    dis.add_argument(
        "--start",
        type=parse_address,
        default=None,
        metavar="ADDR",
        help="First address to disassemble.  Default: the load address.",
    )
    dis.add_argument(
        "--count", "-n",
        type=int,
        default=16,
        metavar="N",
        help="Number of instructions to list.  Default: 16.",
    )

    sub.add_parser("info", parents=[common], help="Print image metadata.")

    return parser


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _configure_logging(verbosity: int) -> None:
    """Set up the root logger based on requested verbosity."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _print_registers(cpu: M6502) -> None:
    print(
        f"PC=${cpu.pc:04X} A=${cpu.a:02X} X=${cpu.x:02X} Y=${cpu.y:02X} "
        f"SP=${cpu.sp:02X} P=${cpu.p:02X} [{cpu.state.flags_string()}]"
    )


def run_program(
    cpu: M6502,
    max_steps: int,
    stop_at: Optional[int] = None,
    trace: bool = False,
) -> tuple[int, str]:
    """Step *cpu* until a stop condition; return ``(steps, reason)``.

    Stops when ``max_steps`` instructions have run, when the program counter
    reaches *stop_at*, or when an instruction leaves the program counter
    where it was (``JMP *`` or a branch to itself).

    Raises:
        UnknownOpcode: Propagated from the step engine.
    """
    log = logging.getLogger(__name__)
    steps = 0
    while steps < max_steps:
        if stop_at is not None and cpu.pc == stop_at:
            return steps, f"reached ${stop_at:04X}"
        before = cpu.pc
        cpu.step(trace)
        steps += 1
        if cpu.pc == before:
            log.debug("Trap detected at $%04X", before)
            return steps, f"trapped at ${before:04X}"
    return steps, "step limit reached"


def _cmd_run(args: argparse.Namespace) -> int:
    log = logging.getLogger(__name__)
    cpu = M6502(logger=ConsoleLogger() if args.trace else NullLogger())
    info = load_image(cpu, args.image, args.load_address)
    cpu.pc = args.start if args.start is not None else info.load_address
    log.info("Starting at $%04X", cpu.pc)

    try:
        steps, reason = run_program(cpu, args.max_steps, args.stop_at, args.trace)
    except UnknownOpcode as exc:
        print(f"Error: {exc}", file=sys.stderr)
        _print_registers(cpu)
        return 1

    print(f"Stopped: {reason}")
    _print_registers(cpu)
    print(f"Steps: {steps}  Cycles: {cpu.cycles}")
    return 0


def _cmd_disasm(args: argparse.Namespace) -> int:
    cpu = M6502(logger=NullLogger())
    info = load_image(cpu, args.image, args.load_address)
    start = args.start if args.start is not None else info.load_address

    for address, text, length in disassemble_range(cpu.mem, start, args.count):
        raw = " ".join(f"{cpu.read_byte(address + i):02X}" for i in range(length))
        print(f"{address:04X}: {raw:<8}  {text}")
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    info = describe(args.image, args.load_address)

    print("tiny6502 Image Information")
    print("=" * 40)
    for key, value in info.items():
        label = key.replace("_", " ").title()
        print(f"  {label:20s}: {value}")
    print("=" * 40)
    return 0


_COMMANDS = {
    "run": _cmd_run,
    "disasm": _cmd_disasm,
    "info": _cmd_info,
}


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` to use ``sys.argv``.

    Returns
    -------
    int
        Exit code (0 on success).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    logger = logging.getLogger("tiny6502.main")

    image_path: str = os.path.expanduser(args.image)
    if not os.path.isfile(image_path):
        print(f"Error: image file not found: {image_path}", file=sys.stderr)
        return 1
    args.image = image_path

    try:
        return _COMMANDS[args.command](args)
    except (CPUError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 1
    except Exception as exc:
        logger.exception("Fatal error during %s", args.command)
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
