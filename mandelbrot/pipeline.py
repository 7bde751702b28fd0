"""Drive a full render: measure every pixel, color it and write it out."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from .color import colorize
from .escape import RenderResult, measure_grid
from .viewport import RenderConfig

BACKENDS = ("python", "tensorflow")


class PixelSink(Protocol):
    def set_pixel(self, x: int, y: int, color: tuple[int, int, int]) -> None: ...


def compute_measurements(config: RenderConfig, *, backend: str = "python", device: Optional[str] = None) -> RenderResult:
    if backend == "python":
        return measure_grid(config)
    if backend == "tensorflow":
        from .renderer import estimate_grid

        return estimate_grid(config, device=device)
    raise ValueError(f"Unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")


def render(
    config: RenderConfig,
    canvas: PixelSink,
    *,
    backend: str = "python",
    device: Optional[str] = None,
    progress: Optional[Callable[[int, int], None]] = None,
) -> RenderResult:
    """Render ``config`` into ``canvas``, writing every pixel exactly once."""

    result = compute_measurements(config, backend=backend, device=device)
    colors = colorize(result.smooth, config.max_depth)

    for x in range(config.width):
        for y in range(config.height):
            r, g, b = colors[y, x]
            canvas.set_pixel(x, y, (int(r), int(g), int(b)))
        if progress is not None:
            progress(x + 1, config.width)

    return result
