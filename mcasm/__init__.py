from mcasm.compiler import AssembleResult, Program, assemble
from mcasm.constants import DEFAULT_MAX_LENGTH
from mcasm.diagnostics import Diagnostic, DiagnosticCollector, Severity, SourceSpan
from mcasm.tokenizer import MNEMONICS, Token, TokenKind, Tokenizer, tokenize
from mcasm.encoding import (
    encode_token,
    encode_tokens,
    decode_program,
    next_state,
    is_accepting,
    EncoderState,
    OPCODE_TO_INT,
    INT_TO_OPCODE,
    OPERAND_REQUIRED,
    ErrorKind,
    AssemblerError,
    ExpectedOperandError,
    ExceededMaxLengthError,
    EncodingError,
)
from mcasm.listing import format_listing

__all__ = [
    "AssembleResult",
    "Program",
    "assemble",
    "DEFAULT_MAX_LENGTH",
    "Diagnostic",
    "DiagnosticCollector",
    "Severity",
    "SourceSpan",
    "MNEMONICS",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    "encode_token",
    "encode_tokens",
    "decode_program",
    "next_state",
    "is_accepting",
    "EncoderState",
    "OPCODE_TO_INT",
    "INT_TO_OPCODE",
    "OPERAND_REQUIRED",
    "ErrorKind",
    "AssemblerError",
    "ExpectedOperandError",
    "ExceededMaxLengthError",
    "EncodingError",
    "format_listing",
]
