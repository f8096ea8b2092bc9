from __future__ import annotations

from pathlib import Path
from typing import Iterable

import numpy as np

from .base import FormatError, decode_text
from .types import Lut1D, ParsedLut


def _header_float(token: str, raw: str, line_number: int) -> float:
    try:
        return float(token)
    except ValueError as exc:
        raise FormatError(f"invalid number: {exc}", raw, line_number) from exc


def parse_spi1d(lines: Iterable[str]) -> Lut1D:
    """Parse ``.spi1d`` text into a single per-channel 1D curve.

    The header is scanned for ``From`` and ``Length`` until a line that is
    exactly ``{``. The next ``Length`` lines hold one value each; anything
    after them is ignored.
    """

    rows = [line.strip() for line in lines]
    min_value, max_value = 0.0, 1.0
    length: int | None = None

    for index, line in enumerate(rows):
        line_number = index + 1
        tokens = line.split()
        if not tokens:
            continue

        if tokens[0] == "From":
            if len(tokens) != 3:
                raise FormatError("From expects two values", line, line_number)
            min_value = _header_float(tokens[1], line, line_number)
            max_value = _header_float(tokens[2], line, line_number)
        elif tokens[0] == "Length":
            if len(tokens) != 2:
                raise FormatError("Length expects one value", line, line_number)
            try:
                length = int(tokens[1])
            except ValueError as exc:
                raise FormatError(f"invalid length: {exc}", line, line_number) from exc
            if length <= 0:
                raise FormatError("Length must be positive", line, line_number)
        elif line == "{":
            if length is None:
                raise FormatError("data block before Length", line, line_number)
            body = rows[index + 1 : index + 1 + length]
            if len(body) < length:
                raise FormatError(
                    f"expected {length} values after '{{', found {len(body)}",
                    line,
                    line_number,
                )
            values = np.empty(length, dtype=np.float32)
            for offset, raw in enumerate(body):
                try:
                    values[offset] = float(raw)
                except ValueError as exc:
                    raise FormatError(f"invalid number: {exc}", raw, line_number + offset + 1) from exc

            table = Lut1D.allocate(length, per_channel=True)
            table.domain_min = min_value
            table.domain_max = max_value
            table.values[:] = values[:, None]
            return table

    raise FormatError("missing '{' data block")


def parse_spi1d_lut(lines: Iterable[str]) -> ParsedLut:
    return ParsedLut(lut1d=parse_spi1d(lines), source_format="spi1d")


def load_spi1d(path: Path) -> ParsedLut:
    return parse_spi1d_lut(decode_text(path.read_bytes()).splitlines())
