from __future__ import annotations

from typing import Protocol, Sequence

from .types import ParsedLut


class LutError(RuntimeError):
    pass


class FormatError(LutError):
    def __init__(self, message: str, line: str | None = None, line_number: int | None = None) -> None:
        self.line = line
        self.line_number = line_number
        detail = message
        if line_number is not None:
            detail = f"{detail} (line {line_number}: {line!r})"
        elif line is not None:
            detail = f"{detail} ({line!r})"
        super().__init__(detail)


class DegenerateRangeError(LutError):
    pass


class MissingTableError(LutError):
    pass


class UnsupportedFormatError(LutError):
    pass


class LutParser(Protocol):
    def __call__(self, lines: Sequence[str]) -> ParsedLut:
        ...


def decode_text(data: bytes) -> str:
    # utf-8-sig drops a leading BOM written by some grading tools.
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FormatError(f"file is not valid UTF-8 text: {exc}") from exc
