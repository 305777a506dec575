# pixcrumb

pixcrumb is an experimental compressor for paletted images. It splits an image
into bitplanes, delta-encodes each plane row by row and regroups the bits into
*crumbs*: 4-bit values that each cover a 2x2 pixel block. The crumbs are walked
in serpentine order (even rows left to right, odd rows right to left) and coded
by alternating between two methods:

- zero-terminated runs of 4-bit literal crumbs (`ZeroTerminatedLiteralCoder`), and
- runs of zero crumbs whose lengths are written as order-2 exp-Golomb numbers
  (`ExpGolombZeroRLECoder`).

Each bitplane becomes an `RLEBlob`. Marshalled, it is a 4-byte header (height in
crumbs, width in 8-pixel tiles, and the little-endian offset of the literal
stream), then the run stream, then the literal stream. A plane may be at most
2040x510 pixels.

## Installation

```
pip install .
```

Images are read with Pillow. Only PNG files in paletted (`P`) mode are accepted,
and the palette must hold a power-of-two number of colours, at least 2.

## Command line

Compress one or more images and report the size of each bitplane:

```
pixcrumb picture.png other.png
```

For every file the command prints a header, then the raw and compressed size of
every bitplane with its ratio, and the totals. Files that cannot be loaded are
reported on standard error and skipped. With no file names it prints an error
and exits with status 1.

Gather crumb statistics over a set of images:

```
pixcrumb-crumbhist picture.png other.png
```

This prints, as comma-separated lines, how often each of the 16 crumb values
occurs after delta encoding, followed by a 16x16 table of how often each crumb
follows each other crumb in serpentine order (each row prefixed with that
crumb's frequency). Pairs of two zero crumbs are not counted. Unlike
`pixcrumb`, this command stops with status 1 at the first file it cannot load.

## Library use

```python
from pixcrumb.imageload import load_image
from pixcrumb.planes import PlanarImage, planar_to_crumb
from pixcrumb.codec import PixCrumbRLE, RLEBlob

image = load_image("picture.png")
planar = PlanarImage.from_pixels(image.pixels, image.palette)
for plane in planar.planes:
    plane.delta_encode()

codec = PixCrumbRLE()
for crumb_plane in planar_to_crumb(planar).planes:
    blob = codec.compress(crumb_plane)
    data = blob.marshal()

    decoder = PixCrumbRLE()
    decoder.load_blob(RLEBlob.unmarshal(data))
    plane_again = decoder.decompress()  # a CrumbPlane
```

Modules:

- `pixcrumb.imageload`: `load_image(filename)` returns a `PalettedImage` with
  `pixels` (rows of palette indices) and `palette`.
- `pixcrumb.planes`: `Bitplane`, `PlanarImage.from_pixels`, `CrumbPlane`
  (`from_bitplane`, `from_matrix`), `CrumbImage` and `planar_to_crumb`.
- `pixcrumb.bitstream`: `BitstreamMSB`, an MSB-first bit reader/writer with
  exp-Golomb coding, plus `count_bits16` and `exp_golomb_bit_length`.
- `pixcrumb.crumbiterator`: `CrumbIterator`, serpentine reading and writing of
  crumb matrices.
- `pixcrumb.coders`: the two coding methods.
- `pixcrumb.entropy`: prefix-code tables `DICT_RLE` and `DICT_LZ`, `DictWord`
  and `dict_coded_bit_length`.
- `pixcrumb.cli`: `compress_image(image, codec)` runs the whole pipeline for one
  image, prints the size report and returns the list of blobs.
- `pixcrumb.crumbhist`: `crumb_statistics(crumb_planes)` and
  `format_statistics(bins, predict_bins)`.

## Errors

Codec errors derive from `pixcrumb.codec.PixCrumbError`: oversized planes raise
`ImageTooLargeError`, malformed blob data raises `BlobDataInvalidError` or
`BlobDataInconsistentError`, and loading something other than an `RLEBlob`
raises `WrongBlobTypeError`. Image loading problems raise
`pixcrumb.imageload.ImageLoadError`. A palette needing more than 16 bitplanes
raises `ValueError`.

## What it does not do

- The `pixcrumb` command only reports sizes; it does not write compressed blobs
  to disk.
- Decompression stops at a `CrumbPlane`. There is no step that turns crumb
  planes back into bitplanes, undoes the delta encoding or writes an image file.