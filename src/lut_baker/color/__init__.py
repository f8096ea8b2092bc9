from .arri_logc import linear_to_logc, logc_to_linear
from .interpolate import map_linear, map_trilinear, map_value
from .pipeline import ConversionFlags, SamplePipeline

__all__ = [
    "linear_to_logc",
    "logc_to_linear",
    "map_linear",
    "map_trilinear",
    "map_value",
    "ConversionFlags",
    "SamplePipeline",
]
