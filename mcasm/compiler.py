from __future__ import annotations

from dataclasses import dataclass

from mcasm.constants import DEFAULT_MAX_LENGTH
from mcasm.diagnostics import Diagnostic, DiagnosticCollector, Severity
from mcasm.encoding import AssemblerError, encode_tokens
from mcasm.tokenizer import Token, tokenize


@dataclass(frozen=True, slots=True)
class AssembleResult:
    output: str | None
    error: AssemblerError | None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        assert self.output is not None
        return self.output

    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    def has_warnings(self) -> bool:
        return any(d.severity == Severity.WARNING for d in self.diagnostics)

    def format_diagnostics(self) -> str:
        if not self.diagnostics:
            return "No issues found."

        lines = []
        errors = [d for d in self.diagnostics if d.severity == Severity.ERROR]
        warnings = [d for d in self.diagnostics if d.severity == Severity.WARNING]

        if errors:
            lines.append(f"=== {len(errors)} Error(s) ===")
            for d in errors:
                lines.append(str(d))

        if warnings:
            lines.append(f"=== {len(warnings)} Warning(s) ===")
            for d in warnings:
                lines.append(str(d))

        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class Program:
    """An immutable token sequence lexed once from source text.

    Encoding never raises for any source string; assembly failures come
    back inside the ``AssembleResult``. A negative ``max_length`` is a
    caller error and raises ``ValueError``.
    """

    tokens: tuple[Token, ...]
    diagnostics: tuple[Diagnostic, ...] = ()

    @classmethod
    def from_source(cls, source: str) -> Program:
        diagnostics = DiagnosticCollector()
        tokens = tokenize(source, diagnostics)
        return cls(tuple(tokens), tuple(diagnostics.diagnostics))

    def __len__(self) -> int:
        return len(self.tokens)

    def encode(self, *, max_length: int = DEFAULT_MAX_LENGTH) -> AssembleResult:
        diagnostics = DiagnosticCollector()
        try:
            output = encode_tokens(self.tokens, max_length=max_length)
        except AssemblerError as e:
            diagnostics.add_error(e.kind.code, e.message, e.span)
            return AssembleResult(
                output=None,
                error=e,
                diagnostics=(*diagnostics.diagnostics, *self.diagnostics),
            )
        return AssembleResult(output=output, error=None, diagnostics=self.diagnostics)


def assemble(source: str, *, max_length: int = DEFAULT_MAX_LENGTH) -> AssembleResult:
    program = Program.from_source(source)
    return program.encode(max_length=max_length)
