from __future__ import annotations

from pathlib import Path

from .base import LutParser, UnsupportedFormatError, decode_text
from .cube import parse_cube
from .spi1d import parse_spi1d_lut
from .types import ParsedLut


class ParserRegistry:
    def __init__(self) -> None:
        self._parsers: dict[str, LutParser] = {
            "cube": parse_cube,
            "spi1d": parse_spi1d_lut,
        }

    def formats(self) -> tuple[str, ...]:
        return tuple(sorted(self._parsers))

    def format_for_path(self, path: Path) -> str:
        fmt = path.suffix.lower().lstrip(".")
        if fmt not in self._parsers:
            raise UnsupportedFormatError(
                f"unsupported extension .{fmt} for {path} (expected one of: {', '.join(self.formats())})"
            )
        return fmt

    def parse_text(self, text: str, fmt: str) -> ParsedLut:
        key = fmt.lower().lstrip(".")
        parser = self._parsers.get(key)
        if parser is None:
            raise UnsupportedFormatError(f"unsupported LUT format: {fmt}")
        return parser(text.splitlines())

    def parse_bytes(self, data: bytes, fmt: str) -> ParsedLut:
        return self.parse_text(decode_text(data), fmt)

    def parse_path(self, path: Path) -> ParsedLut:
        return self.parse_bytes(path.read_bytes(), self.format_for_path(path))
