"""Command line: compress paletted PNG images and report the sizes per bitplane."""

from __future__ import annotations

import sys

from .codec import PixCrumbError, PixCrumbRLE, RLEBlob
from .imageload import ImageLoadError, PalettedImage, load_image
from .planes import PlanarImage, planar_to_crumb

__all__ = ["compress_image", "main"]

_RULE = "#" + "=" * 70 + "#"


def _ratio(compressed: int, raw: int) -> float:
    return compressed / raw if raw else float("nan")


def compress_image(image: PalettedImage, codec: PixCrumbRLE) -> list[RLEBlob]:
    """Delta-encode and compress every bitplane of ``image``, printing the sizes."""
    planar = PlanarImage.from_pixels(image.pixels, image.palette)
    for bitplane in planar.planes:
        bitplane.delta_encode()
    crumb_image = planar_to_crumb(planar)

    blobs: list[RLEBlob] = []
    total_raw = total_comp = 0
    print(f"\nUsing method {codec.name}:")
    for i, (bitplane, crumb_plane) in enumerate(zip(planar.planes, crumb_image.planes)):
        raw_size = bitplane.total_size()
        try:
            blob = codec.compress(crumb_plane)
        except PixCrumbError as error:
            raise PixCrumbError(f"error while encoding BP{i}: {error}") from error
        comp_size = blob.total_size()
        print(
            f"BP{i} raw size: {raw_size} bytes, compressed to {comp_size} bytes "
            f"(ratio: {_ratio(comp_size, raw_size):.3f})"
        )
        total_raw += raw_size
        total_comp += comp_size
        blobs.append(blob)
    print(
        f"Total: raw size {total_raw} bytes, compressed to {total_comp} bytes "
        f"(ratio: {_ratio(total_comp, total_raw):.3f})\n"
    )
    return blobs


def main(argv: list[str] | None = None) -> int:
    """Compress each image named on the command line and report the results."""
    filenames = sys.argv[1:] if argv is None else list(argv)
    if not filenames:
        print("error: an input file must be specified", file=sys.stderr)
        return 1

    for filename in filenames:
        print(_RULE)
        print(f"| Test: {filename:<63}|")
        print(_RULE)
        try:
            image = load_image(filename)
        except ImageLoadError as error:
            print(
                f"\nERROR: Could not load image file '{filename}': {error}\n",
                file=sys.stderr,
            )
            continue
        try:
            compress_image(image, PixCrumbRLE())
        except (PixCrumbError, ValueError) as error:
            print(error, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())