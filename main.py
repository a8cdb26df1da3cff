import sys

from mcasm.compiler import Program
from mcasm.listing import format_listing

SAMPLE_PROGRAM = """
; latch output 0 from input 7
    OEN 0       ; enable outputs
    STO 0
    LD  7       ; read input 7
    STO F       ; drive output F
    SKZ
    JMP 0
"""


def main() -> None:
    program = Program.from_source(SAMPLE_PROGRAM)
    result = program.encode()

    print("=== Diagnostics ===")
    print(result.format_diagnostics())
    print()

    if not result.ok:
        print("Assembly failed due to errors above.")
        sys.exit(1)

    print("=== Listing ===")
    print(format_listing(program.tokens))
    print()

    print("=== Output ===")
    print(result.unwrap())


if __name__ == "__main__":
    main()
