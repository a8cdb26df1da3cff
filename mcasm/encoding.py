from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Sequence

from mcasm.constants import DEFAULT_MAX_LENGTH
from mcasm.diagnostics import SourceSpan
from mcasm.tokenizer import MNEMONICS, Token, TokenKind
from mcasm.word import hex_digit, is_hex_digit, parse_hex_digit

logger = logging.getLogger(__name__)

OPCODE_TO_INT: dict[TokenKind, int] = {
    TokenKind.NOP: 0x0,
    TokenKind.LD: 0x1,
    TokenKind.LDC: 0x2,
    TokenKind.AND: 0x3,
    TokenKind.ANDC: 0x4,
    TokenKind.OR: 0x5,
    TokenKind.ORC: 0x6,
    TokenKind.XNOR: 0x7,
    TokenKind.STO: 0x8,
    TokenKind.STOC: 0x9,
    TokenKind.IEN: 0xA,
    TokenKind.OEN: 0xB,
    TokenKind.JMP: 0xC,
    TokenKind.RTN: 0xD,
    TokenKind.SKZ: 0xE,
}

INT_TO_OPCODE: dict[int, TokenKind] = {v: k for k, v in OPCODE_TO_INT.items()}

OPERAND_REQUIRED: frozenset[TokenKind] = frozenset({
    TokenKind.LD,
    TokenKind.LDC,
    TokenKind.AND,
    TokenKind.ANDC,
    TokenKind.OR,
    TokenKind.ORC,
    TokenKind.XNOR,
    TokenKind.STO,
    TokenKind.STOC,
    TokenKind.IEN,
    TokenKind.OEN,
    TokenKind.JMP,
})

_KIND_TO_MNEMONIC: dict[TokenKind, str] = {v: k for k, v in MNEMONICS.items()}


class ErrorKind(Enum):
    EXPECTED_OPERAND = "E001"
    EXCEEDED_MAX_LENGTH = "E002"

    @property
    def code(self) -> str:
        return self.value


class AssemblerError(Exception):
    """Base class for failures that reject a whole program."""

    kind: ErrorKind
    default_message = "assembly failed"

    def __init__(self, message: str | None = None, span: SourceSpan | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.span = span


class ExpectedOperandError(AssemblerError):
    kind = ErrorKind.EXPECTED_OPERAND
    default_message = "Expected operand"


class ExceededMaxLengthError(AssemblerError):
    kind = ErrorKind.EXCEEDED_MAX_LENGTH
    default_message = "Exceeded max length"


class EncodingError(Exception):
    pass


class EncoderState(Enum):
    FREE = auto()
    AWAITING_OPERAND = auto()


def next_state(state: EncoderState, token: Token) -> EncoderState:
    if state is EncoderState.AWAITING_OPERAND and token.kind is not TokenKind.OPERAND:
        raise ExpectedOperandError(
            f"Expected operand, found {token.lexeme!r}", token.span
        )
    if token.kind in OPERAND_REQUIRED:
        return EncoderState.AWAITING_OPERAND
    return EncoderState.FREE


def is_accepting(state: EncoderState) -> bool:
    return state is EncoderState.FREE


def encode_token(token: Token) -> str:
    if token.kind is TokenKind.OPERAND:
        assert token.value is not None
        return hex_digit(token.value)
    op_int = OPCODE_TO_INT.get(token.kind)
    if op_int is None:
        raise EncodingError(f"Token has no opcode: {token.kind.name} {token.lexeme!r}")
    return hex_digit(op_int)


def encode_tokens(tokens: Sequence[Token], *, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    if max_length < 0:
        raise ValueError(f"max_length must not be negative: {max_length}")
    if len(tokens) > max_length:
        raise ExceededMaxLengthError(
            f"Exceeded max length: {len(tokens)} tokens, limit is {max_length}",
            tokens[max_length].span,
        )

    state = EncoderState.FREE
    last: Token | None = None
    result: list[str] = []
    for tok in tokens:
        state = next_state(state, tok)
        result.append(encode_token(tok))
        last = tok

    if not is_accepting(state):
        assert last is not None
        raise ExpectedOperandError(
            f"Expected operand after {last.lexeme!r}, found end of input", last.span
        )

    output = "".join(result)
    logger.debug("encoded %d tokens: %s", len(tokens), output)
    return output


def decode_program(hex_string: str) -> list[str]:
    """Reconstruct one line of assembly per instruction from an opcode stream.

    Replays the encoder's operand rule: the character after an
    operand-requiring opcode is read as its operand, every other character
    as an opcode. A stray operand cannot be told apart from an opcode and
    decodes as one.
    """
    lines: list[str] = []
    pending: TokenKind | None = None
    for ch in hex_string:
        if not is_hex_digit(ch):
            raise EncodingError(f"Invalid hex character: {ch!r}")
        value = parse_hex_digit(ch)
        if pending is not None:
            lines.append(f"{_KIND_TO_MNEMONIC[pending]} {hex_digit(value)}")
            pending = None
            continue
        kind = INT_TO_OPCODE.get(value)
        if kind is None:
            raise EncodingError(f"Unknown opcode: {hex_digit(value)}")
        if kind in OPERAND_REQUIRED:
            pending = kind
        else:
            lines.append(_KIND_TO_MNEMONIC[kind])

    if pending is not None:
        raise EncodingError(f"Truncated instruction: {_KIND_TO_MNEMONIC[pending]}")
    return lines
