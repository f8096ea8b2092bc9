from __future__ import annotations

import numpy as np

from lut_baker.formats.base import DegenerateRangeError, MissingTableError
from lut_baker.formats.types import Lut1D, Lut3D


def check_lut1d(table: Lut1D) -> None:
    if table.size <= 0 or table.values.shape[0] != table.size:
        raise MissingTableError("1D table has not been populated")
    # Also rejects NaN bounds, which compare false.
    if not (table.domain_min < table.domain_max):
        raise DegenerateRangeError(
            f"1D table domain must satisfy min < max, got {table.domain_min} .. {table.domain_max}"
        )


def check_lut3d(table: Lut3D) -> None:
    if table.size <= 0 or table.values.shape[0] != table.size ** 3:
        raise MissingTableError("3D table has not been populated")
    lo, hi = table.bounds()
    if not np.all(lo < hi):
        raise DegenerateRangeError(f"3D table domain must satisfy min < max on every channel, got {lo} .. {hi}")


def _normalize_1d(table: Lut1D, value: np.ndarray) -> np.ndarray:
    span = np.float32(table.domain_max - table.domain_min)
    t = (np.asarray(value, dtype=np.float32) - np.float32(table.domain_min)) / span
    return np.clip(t, 0.0, 1.0)


def map_linear(table: Lut1D, value: np.ndarray | float) -> np.ndarray:
    """Look up a 1D table with linear interpolation between rows.

    Returns the interpolated RGB row, shape ``value.shape + (3,)``.
    """

    check_lut1d(table)
    if table.size == 1:
        return np.broadcast_to(table.values[0], np.shape(value) + (3,)).astype(np.float32)

    t = _normalize_1d(table, value) * (table.size - 1)
    idx = np.clip(np.floor(t).astype(np.int32), 0, table.size - 2)
    frac = np.asarray(t - idx.astype(np.float32))[..., None]

    lower = table.values[idx]
    upper = table.values[idx + 1]
    out = lower * (1 - frac) + upper * frac
    return out.astype(np.float32)


def map_value(table: Lut1D, value: np.ndarray | float) -> np.ndarray:
    """Nearest-lower lookup into a single-channel curve, no interpolation."""

    check_lut1d(table)
    t = _normalize_1d(table, value) * (table.size - 1)
    # Truncation toward zero; t is already non-negative after clipping.
    idx = np.clip(t.astype(np.int32), 0, table.size - 1)
    return table.values[idx, 0].astype(np.float32)


def map_trilinear(table: Lut3D, rgb: np.ndarray) -> np.ndarray:
    """Trilinear lookup into a 3D table.

    Corners are fetched from clamped floor/ceil coordinates and blended
    along x, then y, then z.
    """

    check_lut3d(table)
    x = np.asarray(rgb, dtype=np.float32)
    n = table.size
    if n == 1:
        return np.broadcast_to(table.values[0], x.shape).astype(np.float32)

    lo, hi = table.bounds()
    t = np.clip((x - lo) / (hi - lo), 0.0, 1.0)
    coords = t * (n - 1)

    lower = np.clip(np.floor(coords).astype(np.int32), 0, n - 2)
    upper = np.clip(np.ceil(coords).astype(np.int32), 1, n - 1)
    f = coords - lower.astype(np.float32)

    lx, ly, lz = lower[..., 0], lower[..., 1], lower[..., 2]
    ux, uy, uz = upper[..., 0], upper[..., 1], upper[..., 2]
    fx, fy, fz = f[..., 0:1], f[..., 1:2], f[..., 2:3]

    def fetch(ix: np.ndarray, iy: np.ndarray, iz: np.ndarray) -> np.ndarray:
        return table.values[ix + iy * n + iz * n * n]

    c000 = fetch(lx, ly, lz)
    c100 = fetch(ux, ly, lz)
    c010 = fetch(lx, uy, lz)
    c110 = fetch(ux, uy, lz)
    c001 = fetch(lx, ly, uz)
    c101 = fetch(ux, ly, uz)
    c011 = fetch(lx, uy, uz)
    c111 = fetch(ux, uy, uz)

    c00 = c000 * (1 - fx) + c100 * fx
    c10 = c010 * (1 - fx) + c110 * fx
    c01 = c001 * (1 - fx) + c101 * fx
    c11 = c011 * (1 - fx) + c111 * fx

    c0 = c00 * (1 - fy) + c10 * fy
    c1 = c01 * (1 - fy) + c11 * fy

    out = c0 * (1 - fz) + c1 * fz
    return out.astype(np.float32)
