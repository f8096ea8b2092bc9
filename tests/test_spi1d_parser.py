from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from lut_baker.color.interpolate import map_value
from lut_baker.formats import FormatError, ParserRegistry, load_spi1d, parse_spi1d


SPI1D_3 = """Version 1
From 0 1
Length 3
Components 1
{
0.0
0.5
1.0
}
"""


def test_parse_spi1d() -> None:
    table = parse_spi1d(SPI1D_3.splitlines())
    assert table.size == 3
    assert table.domain_min == 0.0
    assert table.domain_max == 1.0
    assert table.per_channel
    assert np.allclose(table.values[:, 0], [0.0, 0.5, 1.0])
    assert np.allclose(table.values[:, 0], table.values[:, 2])


def test_spi1d_lookup_uses_lower_sample() -> None:
    table = parse_spi1d(SPI1D_3.splitlines())
    assert float(map_value(table, 0.25)) == 0.0
    assert float(map_value(table, 0.75)) == 0.5


def test_parse_spi1d_custom_range() -> None:
    table = parse_spi1d(["From -0.125 1.5", "Length 2", "{", "0.1", "0.9", "}"])
    assert table.domain_min == -0.125
    assert table.domain_max == 1.5


def test_parse_spi1d_defaults_range() -> None:
    table = parse_spi1d(["Length 2", "{", "0.1", "0.9", "}"])
    assert (table.domain_min, table.domain_max) == (0.0, 1.0)


def test_parse_spi1d_ignores_trailing_content() -> None:
    table = parse_spi1d(["From 0 1", "Length 2", "{", "0", "1", "}", "garbage here", "Length 9"])
    assert table.size == 2


def test_parse_spi1d_requires_length_before_block() -> None:
    with pytest.raises(FormatError):
        parse_spi1d(["From 0 1", "{", "0.0", "}"])


def test_parse_spi1d_short_body() -> None:
    with pytest.raises(FormatError):
        parse_spi1d(["From 0 1", "Length 4", "{", "0.0", "0.5"])


def test_parse_spi1d_bad_value() -> None:
    with pytest.raises(FormatError) as excinfo:
        parse_spi1d(["From 0 1", "Length 2", "{", "0.0", "oops"])
    assert excinfo.value.line == "oops"
    assert excinfo.value.line_number == 5


def test_parse_spi1d_missing_block() -> None:
    with pytest.raises(FormatError):
        parse_spi1d(["From 0 1", "Length 2"])


def test_registry_dispatches_spi1d(tmp_path: Path) -> None:
    path = tmp_path / "curve.SPI1D"
    path.write_text(SPI1D_3, encoding="utf-8")
    parsed = ParserRegistry().parse_path(path)
    assert parsed.source_format == "spi1d"
    assert parsed.lut3d is None
    assert parsed.lut1d is not None
    assert parsed.lut1d.size == 3


def test_load_spi1d_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "curve.spi1d"
    path.write_bytes("# \xe9\nLength 1\n{\n0.5\n}\n".encode("latin-1"))
    with pytest.raises(FormatError):
        load_spi1d(path)
