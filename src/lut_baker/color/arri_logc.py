from __future__ import annotations

import math

import numpy as np


# ARRI LogC EI800 constants, normalized signal domain.
_LOGC_EI800 = {
    "cut": 0.011361,
    "a": 5.555556,
    "b": 0.047996,
    "c": 0.244161,
    "d": 0.386036,
    "e": 5.301883,
    "f": 0.092819,
}


def linear_to_logc(linear: np.ndarray, precise: bool = True) -> np.ndarray:
    """Encode linear RGB to LogC, per channel.

    With ``precise=False`` the linear toe segment is skipped and the log
    curve is used everywhere; values below the cut then differ slightly.
    """

    params = _LOGC_EI800
    x = np.asarray(linear, dtype=np.float32)

    # The unused branch may see log10 of a non-positive value.
    with np.errstate(divide="ignore", invalid="ignore"):
        high = params["c"] * np.log10(params["a"] * x + params["b"]) + params["d"]
    if not precise:
        return high.astype(np.float32)

    low = params["e"] * x + params["f"]
    y = np.where(x > params["cut"], high, low)
    return y.astype(np.float32)


def logc_to_linear(logc: np.ndarray, precise: bool = True) -> np.ndarray:
    """Inverse of linear_to_logc."""

    params = _LOGC_EI800
    y = np.asarray(logc, dtype=np.float32)

    with np.errstate(over="ignore"):
        high = (np.power(10.0, (y - params["d"]) / params["c"]) - params["b"]) / params["a"]
    if not precise:
        return high.astype(np.float32)

    cut_y = params["e"] * params["cut"] + params["f"]
    low = (y - params["f"]) / params["e"]
    x = np.where(y > cut_y, high, low)
    return x.astype(np.float32)


def linear_to_logc_scalar(x: float) -> float:
    p = _LOGC_EI800
    if x > p["cut"]:
        return p["c"] * math.log10(p["a"] * x + p["b"]) + p["d"]
    return p["e"] * x + p["f"]


def logc_to_linear_scalar(x: float) -> float:
    p = _LOGC_EI800
    if x > p["e"] * p["cut"] + p["f"]:
        return (10.0 ** ((x - p["d"]) / p["c"]) - p["b"]) / p["a"]
    return (x - p["f"]) / p["e"]
