"""Tests for the operand automaton and opcode emission."""

import pytest

from mcasm.constants import DEFAULT_MAX_LENGTH
from mcasm.encoding import (
    OPCODE_TO_INT,
    OPERAND_REQUIRED,
    EncoderState,
    EncodingError,
    ErrorKind,
    ExceededMaxLengthError,
    ExpectedOperandError,
    decode_program,
    encode_token,
    encode_tokens,
    is_accepting,
    next_state,
)
from mcasm.tokenizer import MNEMONICS, Token, TokenKind, tokenize

MNEMONIC_OPCODES = [
    ("NOP", "0"),
    ("LD", "1"),
    ("LDC", "2"),
    ("AND", "3"),
    ("ANDC", "4"),
    ("OR", "5"),
    ("ORC", "6"),
    ("XNOR", "7"),
    ("STO", "8"),
    ("STOC", "9"),
    ("IEN", "A"),
    ("OEN", "B"),
    ("JMP", "C"),
    ("RTN", "D"),
    ("SKZ", "E"),
]

NO_OPERAND = {"NOP", "RTN", "SKZ"}


def tok(kind, lexeme="", value=None):
    return Token(kind, lexeme, 1, 1, value)


class TestOpcodeTable:
    @pytest.mark.parametrize("literal, digit", MNEMONIC_OPCODES)
    def test_mnemonic_digit(self, literal, digit):
        assert encode_token(tok(MNEMONICS[literal], literal)) == digit

    def test_table_covers_every_mnemonic(self):
        assert set(OPCODE_TO_INT) == set(MNEMONICS.values())

    def test_operand_required_set(self):
        expected = {MNEMONICS[m] for m, _ in MNEMONIC_OPCODES if m not in NO_OPERAND}
        assert OPERAND_REQUIRED == expected
        assert len(OPERAND_REQUIRED) == 12

    @pytest.mark.parametrize("value", range(16))
    def test_operand_digit_reparses_to_value(self, value):
        digit = encode_token(tok(TokenKind.OPERAND, "x", value))
        assert digit == digit.upper()
        assert int(digit, 16) == value

    @pytest.mark.parametrize("kind", [TokenKind.COMMENT, TokenKind.ERROR])
    def test_trivia_has_no_opcode(self, kind):
        with pytest.raises(EncodingError):
            encode_token(tok(kind, ";"))


class TestAutomaton:
    def test_operand_requiring_mnemonic_awaits_operand(self):
        state = next_state(EncoderState.FREE, tok(TokenKind.LD, "LD"))
        assert state is EncoderState.AWAITING_OPERAND
        assert not is_accepting(state)

    def test_operand_clears_awaiting(self):
        state = next_state(EncoderState.AWAITING_OPERAND, tok(TokenKind.OPERAND, "1", 1))
        assert state is EncoderState.FREE
        assert is_accepting(state)

    @pytest.mark.parametrize("kind", [TokenKind.NOP, TokenKind.RTN, TokenKind.SKZ])
    def test_no_operand_mnemonics_stay_free(self, kind):
        assert next_state(EncoderState.FREE, tok(kind)) is EncoderState.FREE

    def test_stray_operand_while_free_is_accepted(self):
        assert next_state(EncoderState.FREE, tok(TokenKind.OPERAND, "3", 3)) is EncoderState.FREE

    def test_mnemonic_while_awaiting_is_rejected(self):
        with pytest.raises(ExpectedOperandError) as exc_info:
            next_state(EncoderState.AWAITING_OPERAND, tok(TokenKind.RTN, "RTN"))
        assert exc_info.value.kind is ErrorKind.EXPECTED_OPERAND

    def test_initial_state_accepts(self):
        assert is_accepting(EncoderState.FREE)


class TestEncodeTokens:
    def test_empty_program(self):
        assert encode_tokens([]) == ""

    def test_output_length_matches_token_count(self, latch_source):
        tokens = tokenize(latch_source)
        assert len(encode_tokens(tokens)) == len(tokens)

    def test_dangling_mnemonic_points_at_mnemonic(self):
        tokens = tokenize("OEN 0\nSTO")
        with pytest.raises(ExpectedOperandError) as exc_info:
            encode_tokens(tokens)
        assert str(exc_info.value.span) == "2:1-4"

    def test_missing_operand_points_at_next_token(self):
        tokens = tokenize("STO\nLD 7")
        with pytest.raises(ExpectedOperandError) as exc_info:
            encode_tokens(tokens)
        assert str(exc_info.value.span) == "2:1-3"

    def test_ceiling_is_inclusive(self, full_length_source):
        tokens = tokenize(full_length_source)
        assert len(tokens) == DEFAULT_MAX_LENGTH
        assert len(encode_tokens(tokens)) == DEFAULT_MAX_LENGTH

    def test_one_past_ceiling_fails(self, full_length_source):
        tokens = tokenize(full_length_source + "NOP")
        with pytest.raises(ExceededMaxLengthError) as exc_info:
            encode_tokens(tokens)
        assert exc_info.value.kind is ErrorKind.EXCEEDED_MAX_LENGTH

    def test_length_is_checked_before_operands(self):
        tokens = tokenize("LD " * 200)
        with pytest.raises(ExceededMaxLengthError):
            encode_tokens(tokens)

    def test_custom_ceiling(self):
        tokens = tokenize("LD 1 STO 2")
        with pytest.raises(ExceededMaxLengthError):
            encode_tokens(tokens, max_length=3)
        assert encode_tokens(tokens, max_length=4) == "1182"

    def test_zero_ceiling_accepts_only_empty_program(self):
        assert encode_tokens([], max_length=0) == ""
        with pytest.raises(ExceededMaxLengthError):
            encode_tokens(tokenize("RTN"), max_length=0)

    @pytest.mark.parametrize("tokens_source", ["", "RTN"])
    def test_negative_ceiling_is_rejected(self, tokens_source):
        with pytest.raises(ValueError):
            encode_tokens(tokenize(tokens_source), max_length=-5)

    def test_error_messages(self):
        assert ExpectedOperandError().message == "Expected operand"
        assert str(ExceededMaxLengthError()) == "Exceeded max length"


class TestDecodeProgram:
    def test_decodes_latch(self):
        assert decode_program("B080178F") == ["OEN 0", "STO 0", "LD 7", "STO F"]

    def test_no_operand_instructions(self):
        assert decode_program("0DE") == ["NOP", "RTN", "SKZ"]

    def test_lowercase_input(self):
        assert decode_program("1a") == ["LD A"]

    def test_reassembles_to_same_stream(self):
        source = "\n".join(decode_program("B0809A3C5DE"))
        assert encode_tokens(tokenize(source)) == "B0809A3C5DE"

    def test_truncated_instruction(self):
        with pytest.raises(EncodingError):
            decode_program("B")

    def test_unused_opcode(self):
        with pytest.raises(EncodingError):
            decode_program("F")

    def test_non_hex_character(self):
        with pytest.raises(EncodingError):
            decode_program("1G")
