from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from pathlib import Path

import numpy as np

from lut_baker.color.pipeline import SamplePipeline
from lut_baker.config import BakeConfig
from lut_baker.formats.registry import ParserRegistry
from lut_baker.formats.types import ParsedLut


logger = logging.getLogger(__name__)

FALLBACK_RESOLUTION = 33


@dataclass
class BakeResult:
    parsed: ParsedLut
    size: int
    grid: np.ndarray
    pipeline_hash: str


def resolve_grid_size(parsed: ParsedLut, override_resolution: int = 0, fallback: int = FALLBACK_RESOLUTION) -> int:
    if override_resolution > 0:
        return int(override_resolution)
    if parsed.lut3d is not None:
        return int(parsed.lut3d.size)
    return int(fallback)


def identity_grid(size: int) -> np.ndarray:
    """Identity samples laid out at ``x + y*size + z*size**2``."""

    if size <= 0:
        raise ValueError(f"grid size must be positive, got {size}")
    if size == 1:
        axis = np.zeros(1, dtype=np.float32)
    else:
        axis = np.arange(size, dtype=np.float32) / np.float32(size - 1)

    zz, yy, xx = np.meshgrid(axis, axis, axis, indexing="ij")
    return np.stack([xx, yy, zz], axis=-1).reshape(-1, 3)


def _evaluate_chunked(pipeline: SamplePipeline, samples: np.ndarray, workers: int, chunk_size: int) -> np.ndarray:
    out = np.empty_like(samples)
    bounds = [(start, min(start + chunk_size, samples.shape[0])) for start in range(0, samples.shape[0], chunk_size)]

    if workers <= 1 or len(bounds) <= 1:
        for start, stop in bounds:
            out[start:stop] = pipeline.evaluate(samples[start:stop])
        return out

    def run(span: tuple[int, int]) -> None:
        start, stop = span
        out[start:stop] = pipeline.evaluate(samples[start:stop])

    with ThreadPoolExecutor(max_workers=workers) as pool:
        # result() re-raises the first failure and abandons the grid.
        for future in [pool.submit(run, span) for span in bounds]:
            future.result()
    return out


def _warn_non_finite(grid: np.ndarray, title: str) -> None:
    if not np.isfinite(grid).all():
        logger.warning("non-finite values in baked grid for %r", title or "<untitled>")


def _run(parsed: ParsedLut, cfg: BakeConfig) -> tuple[int, np.ndarray, SamplePipeline]:
    size = resolve_grid_size(parsed, cfg.override_resolution, cfg.fallback_resolution)
    pipeline = SamplePipeline(
        cfg.conversion_flags(),
        lut1d=parsed.lut1d,
        lut3d=parsed.lut3d,
        precise_logc=cfg.precise_logc,
    )
    if parsed.lut1d is None and parsed.lut3d is None:
        logger.warning("no LUT tables parsed; grid only carries the LogC conversions")

    samples = identity_grid(size)
    grid = _evaluate_chunked(pipeline, samples, max(1, int(cfg.workers)), max(1, int(cfg.chunk_size)))
    _warn_non_finite(grid, parsed.title)
    return size, grid, pipeline


def generate_grid(parsed: ParsedLut, cfg: BakeConfig | None = None) -> np.ndarray:
    return _run(parsed, cfg or BakeConfig())[1]


def bake_parsed(parsed: ParsedLut, cfg: BakeConfig | None = None) -> BakeResult:
    size, grid, pipeline = _run(parsed, cfg or BakeConfig())
    pipeline_hash = pipeline.version_hash()
    logger.info("baked %s grid of size %d (pipeline %s)", parsed.source_format, size, pipeline_hash)
    return BakeResult(parsed=parsed, size=size, grid=grid, pipeline_hash=pipeline_hash)


def bake_lut(data: bytes, fmt: str, cfg: BakeConfig | None = None) -> BakeResult:
    """Parse raw LUT file bytes and bake them into an RGB grid."""

    parsed = ParserRegistry().parse_bytes(data, fmt)
    return bake_parsed(parsed, cfg)


def bake_file(path: Path, cfg: BakeConfig | None = None) -> BakeResult:
    registry = ParserRegistry()
    parsed = registry.parse_bytes(path.read_bytes(), registry.format_for_path(path))
    return bake_parsed(parsed, cfg)
