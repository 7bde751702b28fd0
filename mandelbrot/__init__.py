"""Public API for Mandelbrot rendering utilities."""

from .canvas import Canvas, PixelWriteError
from .color import MAX_HSV_HUE, MAX_HSV_SATURATION, MAX_HSV_VALUE, colorize, hue_for, to_color
from .escape import ESCAPE_RADIUS, RenderResult, escape_time, measure_grid
from .pipeline import BACKENDS, compute_measurements, render
from .viewport import RenderConfig, pixel_to_complex, sample_axes


def __getattr__(name):
    """Load the TensorFlow backend only when it is asked for."""
    if name == "estimate_grid":
        from .renderer import estimate_grid

        return estimate_grid
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "BACKENDS",
    "Canvas",
    "ESCAPE_RADIUS",
    "MAX_HSV_HUE",
    "MAX_HSV_SATURATION",
    "MAX_HSV_VALUE",
    "PixelWriteError",
    "RenderConfig",
    "RenderResult",
    "colorize",
    "compute_measurements",
    "escape_time",
    "estimate_grid",
    "hue_for",
    "measure_grid",
    "pixel_to_complex",
    "render",
    "sample_axes",
    "to_color",
]
