from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mcasm.constants import DEFAULT_MAX_LENGTH
from mcasm.runner import run_program_from_file

PROG_NAME = "mcasm"
DESCRIPTION = "Assembler for a 1-bit, 16-instruction industrial control unit"
EPILOG = """\
Examples:
  mcasm blink.asm
  mcasm blink.asm -o blink.hex
  mcasm --listing ./programs/latch.asm
  cat latch.asm | mcasm -
"""


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "path",
        metavar="PATH",
        help="path to an assembly source file, or '-' to read stdin",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="OUTPUT",
        type=Path,
        help="write the hex stream to OUTPUT instead of stdout",
    )
    parser.add_argument(
        "--max-length",
        metavar="N",
        type=_positive_int,
        default=DEFAULT_MAX_LENGTH,
        help=f"maximum number of tokens in a program (default: {DEFAULT_MAX_LENGTH})",
    )
    parser.add_argument(
        "--listing",
        action="store_true",
        help="emit a token/opcode listing instead of the hex stream",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    return run_program_from_file(
        args.path,
        output_path=args.output,
        max_length=args.max_length,
        listing=args.listing,
    )


if __name__ == "__main__":
    sys.exit(main())
