"""Loading of paletted PNG images."""

from __future__ import annotations

import os
from dataclasses import dataclass

from PIL import Image

__all__ = ["ImageLoadError", "PalettedImage", "load_image"]


class ImageLoadError(Exception):
    """Raised when an image cannot be loaded or is not usable."""


@dataclass
class PalettedImage:
    """Rows of palette indices together with the palette itself."""

    pixels: list[list[int]]
    palette: list[tuple[int, int, int]]

    @property
    def width(self) -> int:
        return len(self.pixels[0]) if self.pixels else 0

    @property
    def height(self) -> int:
        return len(self.pixels)


def load_image(filename: str | os.PathLike) -> PalettedImage:
    """Load a paletted PNG whose palette holds a power-of-two number of colours."""
    try:
        with Image.open(filename, formats=["PNG"]) as im:
            im.load()
            if im.mode != "P":
                raise ImageLoadError(f"input image '{filename}' is not paletted")
            width, height = im.size
            raw = im.tobytes()
            flat = im.getpalette() or []
    except OSError as error:
        raise ImageLoadError(str(error)) from error

    pixels = [list(raw[y * width:(y + 1) * width]) for y in range(height)]
    palette = [tuple(flat[i:i + 3]) for i in range(0, len(flat) - 2, 3)]
    highest = max(raw, default=0)
    if highest >= len(palette):
        palette.extend([(0, 0, 0)] * (highest + 1 - len(palette)))

    num_colors = len(palette)
    if num_colors < 2:
        raise ImageLoadError(
            f"input image '{filename}' only has {num_colors} color in palette "
            "(needs to have at least 2)"
        )
    if num_colors & (num_colors - 1):
        raise ImageLoadError(
            f"input image '{filename}' has {num_colors} colors in palette "
            "(number of colors needs to be a power of 2)"
        )
    return PalettedImage(pixels=pixels, palette=palette)