import PIL.Image
import pytest

from mandelbrot import Canvas, PixelWriteError
from mandelbrot.canvas import pil_format_name


def test_new_canvas_is_black():
    canvas = Canvas(3, 2)
    assert (canvas.width, canvas.height) == (3, 2)
    assert all(canvas.get_pixel(x, y) == (0, 0, 0) for x in range(3) for y in range(2))


def test_set_pixel_writes_color():
    canvas = Canvas(4, 4)
    canvas.set_pixel(3, 1, (12, 200, 7))
    assert canvas.get_pixel(3, 1) == (12, 200, 7)


@pytest.mark.parametrize("pixel", [(-1, 0), (0, -1), (4, 0), (0, 3), (10, 10)])
def test_out_of_range_write_fails_loudly(pixel):
    canvas = Canvas(4, 3)
    with pytest.raises(PixelWriteError):
        canvas.set_pixel(*pixel, (255, 255, 255))


def test_write_error_is_an_index_error():
    assert issubclass(PixelWriteError, IndexError)


def test_save_creates_missing_directories(tmp_path):
    canvas = Canvas(5, 4)
    canvas.set_pixel(2, 3, (255, 0, 0))
    target = tmp_path / "nested" / "deeper" / "out.png"

    saved = canvas.save(target)

    assert saved == target
    with PIL.Image.open(target) as image:
        assert image.size == (5, 4)
        assert image.convert("RGB").getpixel((2, 3)) == (255, 0, 0)


def test_save_with_explicit_format(tmp_path):
    target = tmp_path / "out.image"
    Canvas(2, 2).save(target, "bmp")
    with PIL.Image.open(target) as image:
        assert image.format == "BMP"


def test_save_into_a_file_path_raises_os_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        Canvas(2, 2).save(blocker / "out.png")


@pytest.mark.parametrize(("ext", "expected"), [("png", "PNG"), ("jpg", "JPEG"), ("tif", "TIFF"), ("Bmp", "BMP")])
def test_pil_format_name(ext, expected):
    assert pil_format_name(ext) == expected
