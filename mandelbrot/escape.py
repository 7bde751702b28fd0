"""Smoothed escape-time estimation for single points of the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .viewport import RenderConfig, pixel_to_complex

ESCAPE_RADIUS = 2.0

_LOG2 = np.log(np.float64(2.0))


@dataclass(frozen=True)
class RenderResult:
    """Container for the numerical results of a Mandelbrot render."""

    smooth: np.ndarray
    escaped: np.ndarray


def escape_time(re: float, im: float, max_depth: int) -> float:
    """Return the continuous escape count of ``c = re + im*i``.

    Iterates ``z <- z**2 + c`` from ``z = 0`` while ``|z| <= 2`` and fewer
    than ``max_depth`` steps were taken. An escaped point yields
    ``n - log2(ln|z|)``. A point still inside the radius yields exactly
    ``max_depth``.
    """

    c = complex(float(re), float(im))
    z = 0j
    n = 0
    while n < max_depth and abs(z) <= ESCAPE_RADIUS:
        z = z * z + c
        n += 1

    modulus = np.float64(abs(z))
    if modulus <= ESCAPE_RADIUS:
        return float(max_depth)
    return float(np.float64(n) - np.log(np.log(modulus)) / _LOG2)


def measure_grid(config: RenderConfig) -> RenderResult:
    """Evaluate :func:`escape_time` for every pixel of ``config``."""

    smooth = np.empty((config.height, config.width), dtype=np.float64)
    for x in range(config.width):
        for y in range(config.height):
            re, im = pixel_to_complex(config, x, y)
            smooth[y, x] = escape_time(re, im, config.max_depth)
    return RenderResult(smooth=smooth, escaped=smooth < np.float64(config.max_depth))
