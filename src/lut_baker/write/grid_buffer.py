from __future__ import annotations

from pathlib import Path

import numpy as np


def write_grid_buffer(path: Path, grid: np.ndarray, size: int, dtype: str = "float32") -> Path:
    """Write a baked grid as a ``(size, size, size, 3)`` .npy array indexed ``[z, y, x]``."""

    expected = size * size * size
    if grid.ndim != 2 or grid.shape != (expected, 3):
        raise ValueError(f"expected {expected}x3 RGB samples, got {grid.shape}")

    cube = np.ascontiguousarray(grid.reshape(size, size, size, 3), dtype=np.dtype(dtype))
    path.parent.mkdir(parents=True, exist_ok=True)
    np.save(path, cube, allow_pickle=False)
    return path


def read_grid_buffer(path: Path) -> np.ndarray:
    cube = np.load(path, allow_pickle=False)
    if cube.ndim != 4 or cube.shape[3] != 3 or len(set(cube.shape[:3])) != 1:
        raise ValueError(f"not a baked grid buffer: shape {cube.shape}")
    return cube.reshape(-1, 3)
