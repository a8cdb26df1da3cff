from __future__ import annotations

import logging
import sys
from pathlib import Path

from mcasm.compiler import AssembleResult, Program
from mcasm.constants import DEFAULT_MAX_LENGTH
from mcasm.diagnostics import Severity, SourceSpan
from mcasm.listing import format_listing

logger = logging.getLogger(__name__)


def _format_diagnostics_with_label(result: AssembleResult, label: str | None) -> str:
    lines: list[str] = []
    errors = [d for d in result.diagnostics if d.severity == Severity.ERROR]
    warnings = [d for d in result.diagnostics if d.severity == Severity.WARNING]

    def format_location(span: SourceSpan | None) -> str:
        if span is None:
            return label or "<input>"
        if label is not None:
            return f"{label}:{span}"
        return str(span)

    for d in errors + warnings:
        lines.append(f"[{d.code}] {d.severity.value}: {d.message} at {format_location(d.span)}")

    return "\n".join(lines)


def run_program_from_source(
    source: str,
    *,
    label: str | None = None,
    output_path: Path | None = None,
    max_length: int = DEFAULT_MAX_LENGTH,
    listing: bool = False,
) -> int:
    program = Program.from_source(source)
    result = program.encode(max_length=max_length)

    if result.diagnostics:
        print(_format_diagnostics_with_label(result, label), file=sys.stderr)

    if not result.ok:
        print("Assembly failed due to errors above.", file=sys.stderr)
        return 1

    hex_output = result.unwrap()
    logger.info("assembled %d tokens from %s", len(program), label or "<input>")

    text = format_listing(program.tokens) if listing else hex_output

    if output_path is None:
        print(text)
        return 0

    try:
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        print(f"error: failed to write '{output_path}': {e}", file=sys.stderr)
        return 1
    return 0


def run_program_from_file(
    path: Path | str,
    *,
    output_path: Path | None = None,
    max_length: int = DEFAULT_MAX_LENGTH,
    listing: bool = False,
) -> int:
    if str(path) == "-":
        return run_program_from_source(
            sys.stdin.read(),
            label="<stdin>",
            output_path=output_path,
            max_length=max_length,
            listing=listing,
        )

    path = Path(path).expanduser()

    if not path.exists():
        print(f"error: file '{path}' not found", file=sys.stderr)
        return 1

    if not path.is_file():
        print(f"error: '{path}' is not a file", file=sys.stderr)
        return 1

    try:
        source = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        print(f"error: failed to read '{path}': {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: failed to read '{path}': {e}", file=sys.stderr)
        return 1

    return run_program_from_source(
        source,
        label=str(path),
        output_path=output_path,
        max_length=max_length,
        listing=listing,
    )
