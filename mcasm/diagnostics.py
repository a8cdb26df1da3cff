from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class SourceSpan:
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        if self.start_line == self.end_line:
            return f"{self.start_line}:{self.start_col}-{self.end_col}"
        return f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    code: str
    message: str
    severity: Severity
    span: SourceSpan | None = None

    def __str__(self) -> str:
        prefix = f"[{self.code}] {self.severity.value}: {self.message}"
        if self.span is None:
            return prefix
        return f"{prefix} at {self.span}"


class DiagnosticCollector:
    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self._diagnostics)

    def add(
        self,
        code: str,
        message: str,
        severity: Severity,
        span: SourceSpan | None = None,
    ) -> Diagnostic:
        diag = Diagnostic(code=code, message=message, severity=severity, span=span)
        self._diagnostics.append(diag)
        return diag

    def add_error(self, code: str, message: str, span: SourceSpan | None = None) -> Diagnostic:
        return self.add(code, message, Severity.ERROR, span)

    def add_warning(self, code: str, message: str, span: SourceSpan | None = None) -> Diagnostic:
        return self.add(code, message, Severity.WARNING, span)
