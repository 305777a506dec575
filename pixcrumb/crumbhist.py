"""Crumb frequency and successor statistics over delta-encoded images."""

from __future__ import annotations

import sys
from collections.abc import Iterable

from .crumbiterator import CrumbIterator
from .imageload import ImageLoadError, load_image
from .planes import CrumbPlane, PlanarImage, planar_to_crumb

__all__ = ["crumb_statistics", "format_statistics", "main"]

_NUM_CRUMBS = 16


def crumb_statistics(crumb_planes: Iterable[CrumbPlane]) -> tuple[list[int], list[list[int]]]:
    """Count crumb frequencies and crumb-to-next-crumb transitions.

    Frequencies follow row order; transitions follow the serpentine order
    used by the codec. Pairs of two zero crumbs are not counted. The last
    crumb seen carries over from one plane to the next.
    """
    bins = [0] * _NUM_CRUMBS
    predict_bins = [[0] * _NUM_CRUMBS for _ in range(_NUM_CRUMBS)]
    last = 0
    for plane in crumb_planes:
        for row in plane.crumbs:
            for crumb in row:
                if crumb or last:
                    bins[crumb] += 1
                last = crumb

        reader = CrumbIterator.reader(plane.crumbs)
        last = reader.read_crumb()
        while not reader.is_at_end():
            crumb = reader.read_crumb()
            if crumb or last:
                predict_bins[last][crumb] += 1
            last = crumb
    return bins, predict_bins


def format_statistics(bins: list[int], predict_bins: list[list[int]]) -> str:
    """Render the statistics as comma-separated lines."""
    lines = ["\n\nFrequency data:" + ",".join(map(str, bins)) + "\n", "\nPrediction data:\n"]
    for count, row in zip(bins, predict_bins):
        lines.append(f"{count}," + ",".join(map(str, row)) + "\n")
    return "".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Print crumb statistics gathered from every image named on the command line."""
    filenames = sys.argv[1:] if argv is None else list(argv)
    if not filenames:
        print("error: an input file must be specified", file=sys.stderr)
        return 1

    planes: list[CrumbPlane] = []
    for filename in filenames:
        try:
            image = load_image(filename)
        except ImageLoadError as error:
            print(f"\nERROR: Could not load image file '{filename}': {error}\n", file=sys.stderr)
            return 1
        try:
            planar = PlanarImage.from_pixels(image.pixels, image.palette)
        except ValueError as error:
            print(f"ERROR: {error}", file=sys.stderr)
            return 1
        for bitplane in planar.planes:
            bitplane.delta_encode()
        planes.extend(planar_to_crumb(planar).planes)

    print(format_statistics(*crumb_statistics(planes)), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())