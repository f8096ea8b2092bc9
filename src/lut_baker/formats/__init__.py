from .base import DegenerateRangeError, FormatError, LutError, MissingTableError, UnsupportedFormatError
from .cube import load_cube, parse_cube
from .registry import ParserRegistry
from .spi1d import load_spi1d, parse_spi1d, parse_spi1d_lut
from .types import Lut1D, Lut3D, ParsedLut

__all__ = [
    "DegenerateRangeError",
    "FormatError",
    "LutError",
    "MissingTableError",
    "UnsupportedFormatError",
    "load_cube",
    "parse_cube",
    "ParserRegistry",
    "load_spi1d",
    "parse_spi1d",
    "parse_spi1d_lut",
    "Lut1D",
    "Lut3D",
    "ParsedLut",
]
