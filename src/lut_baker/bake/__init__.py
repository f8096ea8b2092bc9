from .grid import (
    FALLBACK_RESOLUTION,
    BakeResult,
    bake_file,
    bake_lut,
    bake_parsed,
    generate_grid,
    identity_grid,
    resolve_grid_size,
)

__all__ = [
    "FALLBACK_RESOLUTION",
    "BakeResult",
    "bake_file",
    "bake_lut",
    "bake_parsed",
    "generate_grid",
    "identity_grid",
    "resolve_grid_size",
]
