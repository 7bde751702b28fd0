"""Mapping between the pixel grid and the complex plane."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

DEFAULT_OUTPUT = "mandelbrot.png"


@dataclass(frozen=True)
class RenderConfig:
    """Parameters that describe a single render of the Mandelbrot set."""

    width: int = 800
    height: int = 600
    max_depth: int = 100
    re_start: float = -2.0
    re_end: float = 1.0
    im_start: float = -1.0
    im_end: float = 1.0
    output: Path = Path(DEFAULT_OUTPUT)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}.")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}.")
        if not self.re_start < self.re_end:
            raise ValueError(f"re_start ({self.re_start}) must be smaller than re_end ({self.re_end}).")
        if not self.im_start < self.im_end:
            raise ValueError(f"im_start ({self.im_start}) must be smaller than im_end ({self.im_end}).")

    @property
    def re_step(self) -> float:
        return float(np.float64(self.re_end - self.re_start) / np.float64(self.width))

    @property
    def im_step(self) -> float:
        return float(np.float64(self.im_end - self.im_start) / np.float64(self.height))


def pixel_to_complex(config: RenderConfig, x: int, y: int) -> tuple[np.float64, np.float64]:
    """Return the complex coordinate sampled by pixel ``(x, y)``.

    Pixels outside ``[0, width) x [0, height)`` are not rejected; they map to
    points beyond the viewport along the same affine grid.
    """

    re = np.float64(config.re_start) + np.float64(x) * np.float64(config.re_step)
    im = np.float64(config.im_start) + np.float64(y) * np.float64(config.im_step)
    return np.float64(re), np.float64(im)


def sample_axes(config: RenderConfig) -> tuple[np.ndarray, np.ndarray]:
    """Real parts of every column and imaginary parts of every row."""

    columns = np.arange(config.width, dtype=np.float64)
    rows = np.arange(config.height, dtype=np.float64)
    re_axis = np.float64(config.re_start) + columns * np.float64(config.re_step)
    im_axis = np.float64(config.im_start) + rows * np.float64(config.im_step)
    return re_axis, im_axis
