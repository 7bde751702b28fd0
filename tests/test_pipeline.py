"""Full render into a pixel sink."""

from collections import Counter

import numpy as np
import pytest

from mandelbrot import (
    Canvas,
    PixelWriteError,
    RenderConfig,
    escape_time,
    pixel_to_complex,
    render,
    to_color,
)


class RecordingCanvas:
    def __init__(self):
        self.writes = Counter()
        self.colors = {}

    def set_pixel(self, x, y, color):
        self.writes[(x, y)] += 1
        self.colors[(x, y)] = color


def test_every_pixel_written_exactly_once():
    config = RenderConfig(width=7, height=5, max_depth=30)
    sink = RecordingCanvas()

    render(config, sink)

    assert set(sink.writes) == {(x, y) for x in range(7) for y in range(5)}
    assert set(sink.writes.values()) == {1}


def test_two_by_two_image_is_reproducible_pixel_by_pixel():
    config = RenderConfig(width=2, height=2, max_depth=10, re_start=-1.0, re_end=1.0, im_start=-1.0, im_end=1.0)
    canvas = Canvas(2, 2)

    render(config, canvas)

    for x in range(2):
        for y in range(2):
            re, im = pixel_to_complex(config, x, y)
            expected = to_color(escape_time(re, im, config.max_depth), config.max_depth)
            assert canvas.get_pixel(x, y) == expected


def test_render_returns_measurements():
    config = RenderConfig(width=3, height=2, max_depth=12)
    result = render(config, RecordingCanvas())

    assert result.smooth.shape == (2, 3)
    np.testing.assert_array_equal(result.escaped, result.smooth < 12)


def test_progress_reports_each_column():
    config = RenderConfig(width=4, height=3, max_depth=5)
    calls = []

    render(config, RecordingCanvas(), progress=lambda done, total: calls.append((done, total)))

    assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]


def test_too_small_canvas_fails_loudly():
    config = RenderConfig(width=4, height=4, max_depth=5)
    with pytest.raises(PixelWriteError):
        render(config, Canvas(3, 4))


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError, match="Unknown backend"):
        render(RenderConfig(width=2, height=2), RecordingCanvas(), backend="cuda")


def test_tensorflow_backend_writes_every_pixel():
    pytest.importorskip("tensorflow")
    config = RenderConfig(width=6, height=4, max_depth=25)
    sink = RecordingCanvas()

    result = render(config, sink, backend="tensorflow", device="/CPU:0")

    assert len(sink.writes) == 24
    assert set(sink.writes.values()) == {1}
    assert sink.colors[(0, 0)] == to_color(result.smooth[0, 0], 25)
