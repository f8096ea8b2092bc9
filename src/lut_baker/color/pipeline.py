from __future__ import annotations

from dataclasses import asdict, dataclass
import hashlib
import json
from typing import Any

import numpy as np

from lut_baker.formats.types import Lut1D, Lut3D

from .arri_logc import linear_to_logc, logc_to_linear
from .interpolate import check_lut1d, check_lut3d, map_linear, map_trilinear, map_value


@dataclass(frozen=True)
class ConversionFlags:
    linear_to_log_pre: bool = False
    log_to_linear_pre: bool = False
    linear_to_log_post: bool = False
    log_to_linear_post: bool = False


class SamplePipeline:
    """Per-sample color pipeline: LogC pre-conversion, LUT lookups, LogC post-conversion."""

    def __init__(
        self,
        flags: ConversionFlags,
        lut1d: Lut1D | None = None,
        lut3d: Lut3D | None = None,
        precise_logc: bool = True,
    ) -> None:
        self.flags = flags
        self.lut1d = lut1d
        self.lut3d = lut3d
        self.precise_logc = bool(precise_logc)

        if lut1d is not None:
            check_lut1d(lut1d)
        if lut3d is not None:
            check_lut3d(lut3d)

    @staticmethod
    def _apply_1d(table: Lut1D, rgb: np.ndarray) -> np.ndarray:
        if table.per_channel:
            return map_value(table, rgb)
        # The red channel selects one packed RGB row of the curve.
        return map_linear(table, rgb[..., 0])

    def evaluate(self, rgb: np.ndarray) -> np.ndarray:
        x = np.asarray(rgb, dtype=np.float32)
        if x.shape[-1:] != (3,):
            raise ValueError(f"expected RGB samples with a trailing axis of 3, got {x.shape}")

        flags = self.flags
        if flags.linear_to_log_pre:
            x = linear_to_logc(x, precise=self.precise_logc)
        if flags.log_to_linear_pre:
            x = logc_to_linear(x, precise=self.precise_logc)

        if self.lut1d is not None:
            x = self._apply_1d(self.lut1d, x)
        if self.lut3d is not None:
            x = map_trilinear(self.lut3d, x)

        if flags.linear_to_log_post:
            x = linear_to_logc(x, precise=self.precise_logc)
        if flags.log_to_linear_post:
            x = logc_to_linear(x, precise=self.precise_logc)
        return x

    def version_hash(self) -> str:
        payload: dict[str, Any] = {
            "flags": asdict(self.flags),
            "precise_logc": self.precise_logc,
            "lut1d": None,
            "lut3d": None,
        }
        digest = hashlib.sha256()
        if self.lut1d is not None:
            payload["lut1d"] = {
                "size": int(self.lut1d.size),
                "domain": [float(self.lut1d.domain_min), float(self.lut1d.domain_max)],
                "per_channel": bool(self.lut1d.per_channel),
            }
            digest.update(np.ascontiguousarray(self.lut1d.values, dtype=np.float32).tobytes())
        if self.lut3d is not None:
            lo, hi = self.lut3d.bounds()
            payload["lut3d"] = {
                "size": int(self.lut3d.size),
                "domain_min": [float(v) for v in lo],
                "domain_max": [float(v) for v in hi],
            }
            digest.update(np.ascontiguousarray(self.lut3d.values, dtype=np.float32).tobytes())
        digest.update(json.dumps(payload, sort_keys=True).encode("utf-8"))
        return digest.hexdigest()[:16]
