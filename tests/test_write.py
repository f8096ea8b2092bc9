from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from lut_baker.bake.grid import identity_grid
from lut_baker.write import BakeManifest, read_grid_buffer, write_bake_manifest, write_grid_buffer


def test_grid_buffer_layout(tmp_path: Path) -> None:
    grid = identity_grid(3)
    out = write_grid_buffer(tmp_path / "nested" / "grid.npy", grid, 3)

    cube = np.load(out)
    assert cube.shape == (3, 3, 3, 3)
    assert cube.dtype == np.float32
    # [z, y, x] addressing matches x + y*size + z*size**2.
    assert np.allclose(cube[2, 1, 0], [0.0, 0.5, 1.0])
    assert np.array_equal(read_grid_buffer(out), grid)


def test_grid_buffer_half_precision(tmp_path: Path) -> None:
    out = write_grid_buffer(tmp_path / "grid.npy", identity_grid(2), 2, dtype="float16")
    assert np.load(out).dtype == np.float16


def test_grid_buffer_rejects_wrong_sample_count(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        write_grid_buffer(tmp_path / "grid.npy", identity_grid(2), 3)


def test_write_bake_manifest(tmp_path: Path) -> None:
    manifest = BakeManifest(
        source_filename="look.cube",
        source_format="cube",
        title="Look",
        grid_size=2,
        sample_count=8,
        dtype="float32",
        flags={"log_to_linear_pre": True},
        precise_logc=True,
        tables={"lut3d": {"size": 2}},
        pipeline_hash="0123456789abcdef",
        tool_version="0.0.0",
        created_at_utc="2024-01-01T00:00:00+00:00",
    )
    path = tmp_path / "look.json"
    write_bake_manifest(path, manifest)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["grid_size"] == 2
    assert data["flags"] == {"log_to_linear_pre": True}
    assert data["pipeline_hash"] == "0123456789abcdef"
