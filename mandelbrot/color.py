"""Escape measurement to RGB color mapping through HSV."""

from __future__ import annotations

import numpy as np
from matplotlib.colors import hsv_to_rgb

MAX_HSV_HUE = 360
MAX_HSV_SATURATION = 100.0
MAX_HSV_VALUE = 100.0

# Hue is carried as an unsigned 16-bit integer before wrapping.
_HUE_CEILING = np.iinfo(np.uint16).max


def hue_for(measurements: np.ndarray | float, max_depth: int) -> np.ndarray:
    """Integer hue in ``[0, 360)`` for each escape measurement."""

    ratio = np.asarray(measurements, dtype=np.float64) / np.float64(max_depth)
    hue = np.trunc(np.float64(MAX_HSV_HUE) * ratio)
    hue = np.clip(np.nan_to_num(hue, nan=0.0), 0, _HUE_CEILING).astype(np.int64)
    return hue % MAX_HSV_HUE


def colorize(measurements: np.ndarray | float, max_depth: int) -> np.ndarray:
    """Map escape measurements to 8-bit RGB triples.

    Escaping points get full saturation and value with a hue proportional to
    ``measurement / max_depth``. Points at or above ``max_depth`` are black.
    """

    values = np.asarray(measurements, dtype=np.float64)
    hsv = np.empty(values.shape + (3,), dtype=np.float64)
    hsv[..., 0] = hue_for(values, max_depth) / np.float64(MAX_HSV_HUE)
    hsv[..., 1] = MAX_HSV_SATURATION / 100.0
    hsv[..., 2] = np.where(values < np.float64(max_depth), MAX_HSV_VALUE, 0.0) / 100.0
    rgb = hsv_to_rgb(hsv)
    return np.uint8(np.clip(np.round(rgb * 255), 0, 255))


def to_color(measurement: float, max_depth: int) -> tuple[int, int, int]:
    r, g, b = colorize(measurement, max_depth)
    return int(r), int(g), int(b)
