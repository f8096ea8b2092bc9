from .grid_buffer import read_grid_buffer, write_grid_buffer
from .manifests import BakeManifest, utc_now_iso, write_bake_manifest

__all__ = [
    "read_grid_buffer",
    "write_grid_buffer",
    "BakeManifest",
    "utc_now_iso",
    "write_bake_manifest",
]
