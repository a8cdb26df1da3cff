from __future__ import annotations

from mcasm.constants import NIBBLE_BITS

NIBBLE_MASK = (1 << NIBBLE_BITS) - 1
HEX_DIGITS = "0123456789abcdefABCDEF"


def nibble(value: int) -> int:
    return value & NIBBLE_MASK


def is_hex_digit(ch: str) -> bool:
    return len(ch) == 1 and ch in HEX_DIGITS


def parse_hex_digit(ch: str) -> int:
    if not is_hex_digit(ch):
        raise ValueError(f"not a hex digit: {ch!r}")
    return int(ch, 16)


def hex_digit(value: int) -> str:
    if value != nibble(value):
        raise ValueError(f"value out of nibble range: {value}")
    return f"{value:X}"
