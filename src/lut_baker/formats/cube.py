from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import numpy as np

from .base import FormatError, decode_text
from .types import Lut1D, Lut3D, ParsedLut


logger = logging.getLogger(__name__)


def _floats(tokens: list[str], count: int, raw: str, line_number: int) -> list[float]:
    if len(tokens) != count:
        raise FormatError(f"expected {count} numeric values, got {len(tokens)}", raw, line_number)
    try:
        return [float(tok) for tok in tokens]
    except ValueError as exc:
        raise FormatError(f"invalid number: {exc}", raw, line_number) from exc


def _size(tokens: list[str], raw: str, line_number: int) -> int:
    if len(tokens) != 1:
        raise FormatError("expected a single table size", raw, line_number)
    try:
        size = int(tokens[0])
    except ValueError as exc:
        raise FormatError(f"invalid table size: {exc}", raw, line_number) from exc
    if size <= 0:
        raise FormatError("table size must be positive", raw, line_number)
    return size


def _title(raw: str) -> str:
    rest = raw[len("TITLE"):].strip()
    if len(rest) >= 2 and rest[0] == '"' and rest[-1] == '"':
        rest = rest[1:-1]
    return rest


def parse_cube(lines: Iterable[str]) -> ParsedLut:
    """Parse ``.cube`` text into a 1D and/or 3D table.

    Data rows are routed with running fill counters: the 1D table takes
    rows until it is full, then the 3D table. A file that declares both
    therefore has to list every 1D row before the first 3D row. Rows left
    over once both tables are full are ignored without being parsed, so a
    non-numeric token only fails the parse on a row that fills a table.
    """

    title = ""
    range_1d = (0.0, 1.0)
    range_3d = (0.0, 1.0)
    domain_min = np.zeros(3, dtype=np.float32)
    domain_max = np.ones(3, dtype=np.float32)
    uses_domain_min_max = False

    lut1d: Lut1D | None = None
    lut3d: Lut3D | None = None
    filled_1d = 0
    filled_3d = 0
    decl_1d: tuple[str, int] | None = None
    decl_3d: tuple[str, int] | None = None

    for line_number, source in enumerate(lines, start=1):
        line = source.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split()
        head = parts[0].upper()

        if head == "TITLE":
            title = _title(line)
            continue
        if head == "LUT_3D_SIZE":
            lut3d = Lut3D.allocate(_size(parts[1:], line, line_number))
            filled_3d = 0
            decl_3d = (line, line_number)
            continue
        if head == "LUT_1D_SIZE":
            lut1d = Lut1D.allocate(_size(parts[1:], line, line_number))
            filled_1d = 0
            decl_1d = (line, line_number)
            continue
        if head == "LUT_3D_INPUT_RANGE":
            lo, hi = _floats(parts[1:], 2, line, line_number)
            range_3d = (lo, hi)
            continue
        if head == "LUT_1D_INPUT_RANGE":
            lo, hi = _floats(parts[1:], 2, line, line_number)
            range_1d = (lo, hi)
            continue
        if head == "DOMAIN_MIN":
            domain_min = np.asarray(_floats(parts[1:], 3, line, line_number), dtype=np.float32)
            uses_domain_min_max = True
            continue
        if head == "DOMAIN_MAX":
            domain_max = np.asarray(_floats(parts[1:], 3, line, line_number), dtype=np.float32)
            uses_domain_min_max = True
            continue

        if lut1d is None and lut3d is None:
            raise FormatError("data row before LUT_1D_SIZE or LUT_3D_SIZE", line, line_number)

        if lut1d is not None and filled_1d < lut1d.size:
            lut1d.values[filled_1d] = _floats(parts, 3, line, line_number)
            filled_1d += 1
        elif lut3d is not None and filled_3d < lut3d.values.shape[0]:
            lut3d.values[filled_3d] = _floats(parts, 3, line, line_number)
            filled_3d += 1
        else:
            logger.debug("ignoring surplus data row at line %d", line_number)

    if lut1d is not None and decl_1d is not None:
        if filled_1d < lut1d.size:
            raise FormatError(
                f"1D table declares {lut1d.size} rows but only {filled_1d} were found",
                decl_1d[0],
                decl_1d[1],
            )
        lut1d.domain_min, lut1d.domain_max = range_1d

    if lut3d is not None and decl_3d is not None:
        if filled_3d < lut3d.values.shape[0]:
            raise FormatError(
                f"3D table declares {lut3d.values.shape[0]} rows but only {filled_3d} were found",
                decl_3d[0],
                decl_3d[1],
            )
        lut3d.input_min, lut3d.input_max = range_3d
        lut3d.domain_min = domain_min
        lut3d.domain_max = domain_max
        lut3d.uses_domain_min_max = uses_domain_min_max

    return ParsedLut(lut1d=lut1d, lut3d=lut3d, title=title, source_format="cube")


def load_cube(path: Path) -> ParsedLut:
    return parse_cube(decode_text(path.read_bytes()).splitlines())
