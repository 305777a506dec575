"""Bitplanes split from paletted pixels, and their grouping into 2x2 crumbs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import zip_longest

__all__ = ["Bitplane", "CrumbImage", "CrumbPlane", "PlanarImage", "planar_to_crumb"]

MAX_BITPLANES = 16


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


@dataclass
class Bitplane:
    """One bit of every pixel's colour index, packed eight pixels per byte, MSB first."""

    data: list[bytearray]
    width: int
    height: int

    def width_bp_bytes(self) -> int:
        """Return the number of bytes in one packed row."""
        return _ceil_div(self.width, 8)

    def height_px(self) -> int:
        """Return the height in pixels."""
        return self.height

    def total_size(self) -> int:
        """Return the packed size of the plane in bytes."""
        return self.height_px() * self.width_bp_bytes()

    def delta_encode(self) -> None:
        """XOR rows with their lower neighbours in place.

        The first row is kept; each middle row becomes itself XOR the row
        below it, and the last row takes the delta of the last pair. A
        single-row plane becomes all zeros.
        """
        if not self.data:
            raise ValueError("cannot delta-encode an empty bitplane")
        original = [bytes(row) for row in self.data]
        delta = bytearray(self.width_bp_bytes())
        for i, (upper, lower) in enumerate(zip(original, original[1:])):
            delta = bytearray(a ^ b for a, b in zip(upper, lower))
            if i > 0:
                self.data[i] = bytearray(delta)
        self.data[-1] = delta


def _pack_row(row: Sequence[int], width: int, row_bytes: int, mask: int) -> bytearray:
    packed = bytearray(row_bytes)
    for x, index in enumerate(row[:width]):
        if index & mask:
            packed[x >> 3] |= 0x80 >> (x & 7)
    return packed


@dataclass
class PlanarImage:
    """A paletted image split into one bitplane per bit of the colour index."""

    planes: list[Bitplane]
    palette: list
    width: int
    height: int

    @classmethod
    def from_pixels(cls, pixels: Sequence[Sequence[int]], palette: Sequence) -> PlanarImage:
        """Split rows of palette indices into ceil(log2(len(palette))) bitplanes."""
        num_colors = len(palette)
        if num_colors == 0:
            raise ValueError("input image has an empty palette")
        num_planes = (num_colors - 1).bit_length()
        if num_planes > MAX_BITPLANES:
            raise ValueError(
                f"input image has too many colors! ({num_colors} colors, "
                "which is more than 65536)"
            )
        height = len(pixels)
        width = len(pixels[0]) if height else 0
        row_bytes = _ceil_div(width, 8)
        planes = [
            Bitplane(
                data=[_pack_row(row, width, row_bytes, 1 << bit) for row in pixels],
                width=width,
                height=height,
            )
            for bit in range(num_planes)
        ]
        return cls(planes=planes, palette=list(palette), width=width, height=height)


def _crumb_row(top: bytes, bottom: bytes, crumbs_w: int) -> list[int]:
    result = [0] * crumbs_w
    for shift_down, row in ((4, top), (6, bottom)):
        for i, byte in enumerate(row):
            # Only three crumbs of each byte are taken, as the format does.
            for k in range(3):
                offset = i * 4 + k
                if offset >= crumbs_w:
                    break
                result[offset] |= ((byte << (2 * k)) & 0xC0) >> shift_down
    return result


@dataclass
class CrumbPlane:
    """A bitplane regrouped into crumbs.

    A crumb holds a 2x2 pixel block: bit 3 top-left, bit 2 top-right,
    bit 1 bottom-left, bit 0 bottom-right.
    """

    crumbs: list[list[int]]
    height: int
    width: int

    @classmethod
    def from_matrix(cls, matrix: list[list[int]]) -> CrumbPlane:
        """Wrap a crumb matrix; the pixel size is twice the matrix size."""
        if not matrix:
            raise ValueError("crumb matrix is empty")
        return cls(crumbs=matrix, height=len(matrix) * 2, width=len(matrix[0]) * 2)

    @classmethod
    def from_bitplane(cls, bitplane: Bitplane) -> CrumbPlane:
        """Group the rows of ``bitplane`` in pairs into crumb rows."""
        crumbs_h = _ceil_div(bitplane.height, 2)
        crumbs_w = _ceil_div(bitplane.width, 2)
        tops = bitplane.data[0::2][:crumbs_h]
        bottoms = bitplane.data[1:bitplane.height:2]
        rows = []
        for top, bottom in zip_longest(tops, bottoms):
            if bottom is None:
                bottom = bytes(len(top))
            rows.append(_crumb_row(top, bottom, crumbs_w))
        return cls(crumbs=rows, height=bitplane.height, width=bitplane.width)

    def width_crumbs(self) -> int:
        """Return the number of crumbs in one row."""
        return _ceil_div(self.width, 2)

    def width_bp_bytes(self) -> int:
        """Return the number of bytes a packed bitplane row of this width takes."""
        return _ceil_div(self.width, 8)

    def height_crumbs(self) -> int:
        """Return the number of crumb rows."""
        return _ceil_div(self.height, 2)


@dataclass
class CrumbImage:
    """A paletted image as one crumb plane per bitplane."""

    planes: list[CrumbPlane] = field(default_factory=list)
    palette: list = field(default_factory=list)
    width: int = 0
    height: int = 0


def planar_to_crumb(image: PlanarImage) -> CrumbImage:
    """Convert every bitplane of ``image`` to a crumb plane."""
    return CrumbImage(
        planes=[CrumbPlane.from_bitplane(plane) for plane in image.planes],
        palette=image.palette,
        width=image.width,
        height=image.height,
    )