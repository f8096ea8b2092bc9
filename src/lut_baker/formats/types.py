from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _zeros_rgb(count: int) -> np.ndarray:
    return np.zeros((count, 3), dtype=np.float32)


@dataclass
class Lut1D:
    size: int
    domain_min: float = 0.0
    domain_max: float = 1.0
    values: np.ndarray = field(default_factory=lambda: _zeros_rgb(0))
    per_channel: bool = False

    @classmethod
    def allocate(cls, size: int, per_channel: bool = False) -> "Lut1D":
        return cls(size=size, values=_zeros_rgb(size), per_channel=per_channel)


@dataclass
class Lut3D:
    size: int
    input_min: float = 0.0
    input_max: float = 1.0
    domain_min: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float32))
    domain_max: np.ndarray = field(default_factory=lambda: np.ones(3, dtype=np.float32))
    uses_domain_min_max: bool = False
    values: np.ndarray = field(default_factory=lambda: _zeros_rgb(0))

    @classmethod
    def allocate(cls, size: int) -> "Lut3D":
        return cls(size=size, values=_zeros_rgb(size * size * size))

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Per-channel (min, max) used to normalise input colors."""

        if self.uses_domain_min_max:
            return (
                np.asarray(self.domain_min, dtype=np.float32),
                np.asarray(self.domain_max, dtype=np.float32),
            )
        lo = np.full(3, self.input_min, dtype=np.float32)
        hi = np.full(3, self.input_max, dtype=np.float32)
        return lo, hi

    def flat_index(self, x: int, y: int, z: int) -> int:
        return x + y * self.size + z * self.size * self.size


@dataclass(frozen=True)
class ParsedLut:
    lut1d: Lut1D | None = None
    lut3d: Lut3D | None = None
    title: str = ""
    source_format: str = "cube"

    def describe(self) -> dict[str, object]:
        info: dict[str, object] = {"title": self.title, "format": self.source_format}
        if self.lut1d is not None:
            info["lut1d"] = {
                "size": int(self.lut1d.size),
                "domain": [float(self.lut1d.domain_min), float(self.lut1d.domain_max)],
                "per_channel": bool(self.lut1d.per_channel),
            }
        if self.lut3d is not None:
            lo, hi = self.lut3d.bounds()
            info["lut3d"] = {
                "size": int(self.lut3d.size),
                "domain_min": [float(v) for v in lo],
                "domain_max": [float(v) for v in hi],
                "uses_domain_min_max": bool(self.lut3d.uses_domain_min_max),
            }
        return info
