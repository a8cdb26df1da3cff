from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from mcasm.diagnostics import DiagnosticCollector, SourceSpan
from mcasm.word import is_hex_digit, parse_hex_digit

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    NOP = auto()
    LD = auto()
    LDC = auto()
    AND = auto()
    ANDC = auto()
    OR = auto()
    ORC = auto()
    XNOR = auto()
    STO = auto()
    STOC = auto()
    IEN = auto()
    OEN = auto()
    JMP = auto()
    RTN = auto()
    SKZ = auto()
    OPERAND = auto()
    COMMENT = auto()
    ERROR = auto()

    @property
    def is_mnemonic(self) -> bool:
        return self in MNEMONICS.values()


MNEMONICS: dict[str, TokenKind] = {
    "NOP": TokenKind.NOP,
    "LD": TokenKind.LD,
    "LDC": TokenKind.LDC,
    "AND": TokenKind.AND,
    "ANDC": TokenKind.ANDC,
    "OR": TokenKind.OR,
    "ORC": TokenKind.ORC,
    "XNOR": TokenKind.XNOR,
    "STO": TokenKind.STO,
    "STOC": TokenKind.STOC,
    "IEN": TokenKind.IEN,
    "OEN": TokenKind.OEN,
    "JMP": TokenKind.JMP,
    "RTN": TokenKind.RTN,
    "SKZ": TokenKind.SKZ,
}

# Longest literal first, so STOC wins over STO.
_MNEMONIC_LITERALS: tuple[str, ...] = tuple(
    sorted(MNEMONICS, key=len, reverse=True)
)

WHITESPACE = " \t\n\r\f\v"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    line: int
    column: int
    value: int | None = None

    @property
    def span(self) -> SourceSpan:
        end_col = self.column + len(self.lexeme)
        return SourceSpan(self.line, self.column, self.line, end_col)

    @property
    def is_significant(self) -> bool:
        return self.kind not in (TokenKind.COMMENT, TokenKind.ERROR)


class Tokenizer:
    def __init__(self, source: str, diagnostics: DiagnosticCollector | None = None) -> None:
        self._source = source
        self._diagnostics = diagnostics
        self._pos = 0
        self._line = 1
        self._col = 1

    def tokenize(self) -> list[Token]:
        return [tok for tok in self.scan() if tok.is_significant]

    def scan(self) -> Iterator[Token]:
        while not self._at_end():
            tok = self._scan_token()
            if tok is not None:
                yield tok

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self) -> str:
        if self._at_end():
            return "\0"
        return self._source[self._pos]

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _scan_token(self) -> Token | None:
        ch = self._peek()

        if ch in WHITESPACE:
            self._advance()
            return None

        line, col = self._line, self._col

        if ch == ";":
            lexeme = ""
            while not self._at_end() and self._peek() not in "\r\n":
                lexeme += self._advance()
            return Token(TokenKind.COMMENT, lexeme, line, col)

        for literal in _MNEMONIC_LITERALS:
            if self._source.startswith(literal, self._pos):
                for _ in literal:
                    self._advance()
                return Token(MNEMONICS[literal], literal, line, col)

        if is_hex_digit(ch):
            self._advance()
            return Token(TokenKind.OPERAND, ch, line, col, parse_hex_digit(ch))

        self._advance()
        tok = Token(TokenKind.ERROR, ch, line, col)
        logger.debug("skipping unrecognized character %r at %s", ch, tok.span)
        if self._diagnostics is not None:
            self._diagnostics.add_warning("L001", f"unrecognized character {ch!r} ignored", tok.span)
        return tok


def tokenize(source: str, diagnostics: DiagnosticCollector | None = None) -> list[Token]:
    tokenizer = Tokenizer(source, diagnostics)
    return tokenizer.tokenize()
