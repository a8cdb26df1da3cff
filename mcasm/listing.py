from __future__ import annotations

from typing import Sequence

from mcasm.encoding import encode_token
from mcasm.tokenizer import Token


def format_listing_header() -> str:
    return "| IDX | LINE | TOKEN | HEX |"


def format_listing_separator() -> str:
    return "| --- | ---- | ----- | --- |"


def format_listing_row(index: int, token: Token) -> str:
    return f"| {index:<3} | {token.line:<4} | {token.lexeme:<5} | {encode_token(token):<3} |"


def format_listing(tokens: Sequence[Token]) -> str:
    lines = [format_listing_header(), format_listing_separator()]
    lines.extend(format_listing_row(i, tok) for i, tok in enumerate(tokens))
    return "\n".join(lines)
