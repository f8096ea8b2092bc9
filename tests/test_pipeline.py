from __future__ import annotations

import numpy as np
import pytest

from lut_baker.bake.grid import identity_grid
from lut_baker.color.arri_logc import linear_to_logc, logc_to_linear
from lut_baker.color.pipeline import ConversionFlags, SamplePipeline
from lut_baker.formats import Lut1D, Lut3D, MissingTableError


def _identity_lut3d(size: int) -> Lut3D:
    return Lut3D(size=size, values=identity_grid(size))


def test_pipeline_without_tables_or_flags_is_identity() -> None:
    rgb = np.array([0.1, 0.5, 0.9], dtype=np.float32)
    out = SamplePipeline(ConversionFlags()).evaluate(rgb)
    assert np.allclose(out, rgb)
    assert out.dtype == np.float32


def test_pipeline_pre_conversion_runs_before_lookup() -> None:
    rgb = np.array([0.3, 0.4, 0.5], dtype=np.float32)
    pipe = SamplePipeline(ConversionFlags(log_to_linear_pre=True), lut3d=_identity_lut3d(9))
    assert np.allclose(pipe.evaluate(rgb), logc_to_linear(rgb), atol=1e-5)


def test_pipeline_post_conversion() -> None:
    rgb = np.array([0.2, 0.18, 1.0], dtype=np.float32)
    pipe = SamplePipeline(ConversionFlags(linear_to_log_post=True), lut3d=_identity_lut3d(5))
    assert np.allclose(pipe.evaluate(rgb), linear_to_logc(rgb), atol=1e-5)


def test_pipeline_pre_flags_compose() -> None:
    rgb = np.array([[0.0, 0.18, 1.5]], dtype=np.float32)
    flags = ConversionFlags(linear_to_log_pre=True, log_to_linear_pre=True)
    out = SamplePipeline(flags).evaluate(rgb)
    assert np.allclose(out, rgb, atol=1e-4)


def test_pipeline_post_flags_compose() -> None:
    rgb = np.array([[0.25, 0.5, 0.75]], dtype=np.float32)
    flags = ConversionFlags(linear_to_log_post=True, log_to_linear_post=True)
    out = SamplePipeline(flags).evaluate(rgb)
    assert np.allclose(out, rgb, atol=1e-4)


def test_cube_1d_table_maps_packed_row_from_red() -> None:
    table = Lut1D(size=2, values=np.array([[0.0, 0.0, 0.0], [1.0, 0.5, 0.25]], dtype=np.float32))
    pipe = SamplePipeline(ConversionFlags(), lut1d=table)

    a = pipe.evaluate(np.array([0.5, 0.9, 0.1], dtype=np.float32))
    b = pipe.evaluate(np.array([0.5, 0.0, 1.0], dtype=np.float32))

    assert np.allclose(a, [0.5, 0.25, 0.125])
    assert np.allclose(a, b)


def test_spi1d_curve_maps_each_channel() -> None:
    table = Lut1D.allocate(3, per_channel=True)
    table.values[:] = np.array([0.0, 0.5, 1.0], dtype=np.float32)[:, None]
    pipe = SamplePipeline(ConversionFlags(), lut1d=table)

    out = pipe.evaluate(np.array([0.25, 0.5, 1.0], dtype=np.float32))
    assert np.allclose(out, [0.0, 0.5, 1.0])


def test_1d_then_3d_lookup_order() -> None:
    curve = Lut1D(size=2, values=np.array([[0.0, 0.0, 0.0], [0.5, 0.5, 0.5]], dtype=np.float32))
    cube = _identity_lut3d(3)
    cube.values[:] = 1.0 - cube.values
    pipe = SamplePipeline(ConversionFlags(), lut1d=curve, lut3d=cube)

    out = pipe.evaluate(np.array([1.0, 0.0, 0.0], dtype=np.float32))
    assert np.allclose(out, [0.5, 0.5, 0.5])


def test_pipeline_rejects_bad_shape() -> None:
    with pytest.raises(ValueError):
        SamplePipeline(ConversionFlags()).evaluate(np.zeros((4, 2), dtype=np.float32))


def test_pipeline_validates_tables_up_front() -> None:
    with pytest.raises(MissingTableError):
        SamplePipeline(ConversionFlags(), lut3d=Lut3D(size=0))


def test_pipeline_hash_is_stable() -> None:
    cube = _identity_lut3d(3)
    a = SamplePipeline(ConversionFlags(), lut3d=cube).version_hash()
    b = SamplePipeline(ConversionFlags(), lut3d=cube).version_hash()
    assert a == b
    assert len(a) == 16


def test_pipeline_hash_tracks_flags_and_tables() -> None:
    cube = _identity_lut3d(3)
    base = SamplePipeline(ConversionFlags(), lut3d=cube).version_hash()
    flagged = SamplePipeline(ConversionFlags(log_to_linear_pre=True), lut3d=cube).version_hash()
    fast = SamplePipeline(ConversionFlags(), lut3d=cube, precise_logc=False).version_hash()

    other = _identity_lut3d(3)
    other.values[0] = [0.1, 0.1, 0.1]
    changed = SamplePipeline(ConversionFlags(), lut3d=other).version_hash()

    assert len({base, flagged, fast, changed}) == 4
