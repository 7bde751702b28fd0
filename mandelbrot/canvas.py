"""Pillow-backed pixel buffer that rendered colors are written into."""

from __future__ import annotations

from pathlib import Path

import PIL.Image


class PixelWriteError(IndexError):
    """Raised when a pixel outside the allocated image is written."""


def pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


class Canvas:
    """A ``width x height`` RGB image, black until pixels are set."""

    def __init__(self, width: int, height: int) -> None:
        self.image = PIL.Image.new("RGB", (width, height))
        self._pixels = self.image.load()

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def set_pixel(self, x: int, y: int, color: tuple[int, int, int]) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PixelWriteError(f"pixel ({x}, {y}) is outside the {self.width}x{self.height} image.")
        self._pixels[x, y] = tuple(color)

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PixelWriteError(f"pixel ({x}, {y}) is outside the {self.width}x{self.height} image.")
        return self._pixels[x, y]

    def save(self, path: str | Path, image_format: str | None = None) -> Path:
        """Write the image to ``path``, creating parent directories as needed."""

        output_path = Path(path).expanduser()
        if image_format is None:
            image_format = output_path.suffix.lstrip(".") or "png"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(str(output_path), format=pil_format_name(image_format))
        return output_path
