"""The PixCrumb RLE codec: literal runs and zero runs over a crumb plane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .bitstream import BitstreamMSB
from .coders import ExpGolombZeroRLECoder, ZeroTerminatedLiteralCoder
from .crumbiterator import CrumbIterator
from .planes import CrumbPlane

__all__ = [
    "BlobDataInconsistentError",
    "BlobDataInvalidError",
    "ImageTooLargeError",
    "PixCrumbError",
    "PixCrumbRLE",
    "RLEBlob",
    "WrongBlobTypeError",
]

_HEADER_SIZE = 4
_MAX_DIMENSION = 255
_GOLOMB_ORDER = 2


class PixCrumbError(Exception):
    """Base class for codec errors."""


class ImageTooLargeError(PixCrumbError):
    """Raised when a plane is too big for the blob header."""


class BlobDataInvalidError(PixCrumbError):
    """Raised when blob data is invalid."""


class BlobDataInconsistentError(PixCrumbError):
    """Raised when blob data has inconsistencies."""


class WrongBlobTypeError(PixCrumbError):
    """Raised when a blob of the wrong type is given to a codec."""


@dataclass
class RLEBlob:
    """A compressed crumb plane: header fields, the run stream and the literal stream."""

    height_crumbs: int
    width_tiles: int
    rle_stream: bytes = b""
    data_stream: bytes = b""

    def total_size(self) -> int:
        """Return the size of the marshalled blob in bytes."""
        return len(self.rle_stream) + len(self.data_stream) + _HEADER_SIZE

    def marshal(self) -> bytes:
        """Serialise the blob: height, width, little-endian data offset, then both streams."""
        data_offset = len(self.rle_stream) + _HEADER_SIZE
        if data_offset > 0xFFFF:
            raise BlobDataInvalidError("blob data is invalid: RLE stream is too long")
        result = (
            bytes((self.height_crumbs, self.width_tiles))
            + data_offset.to_bytes(2, "little")
            + bytes(self.rle_stream)
            + bytes(self.data_stream)
        )
        assert len(result) == self.total_size()
        return result

    @classmethod
    def unmarshal(cls, data: bytes) -> RLEBlob:
        """Parse a blob produced by :meth:`marshal`."""
        if len(data) < _HEADER_SIZE:
            raise BlobDataInvalidError("blob data is invalid")
        data_offset = int.from_bytes(data[2:4], "little")
        rle_len = (data_offset - _HEADER_SIZE) & 0xFFFF
        rle_end = _HEADER_SIZE + rle_len
        if rle_end > len(data):
            raise BlobDataInconsistentError(
                "blob data has inconsistencies: end of data reached while reading RLE blob"
            )
        return cls(
            height_crumbs=data[0],
            width_tiles=data[1],
            rle_stream=bytes(data[_HEADER_SIZE:rle_end]),
            data_stream=bytes(data[rle_end:]),
        )


@dataclass
class PixCrumbRLE:
    """Alternates zero-terminated literal runs with exp-Golomb coded zero runs."""

    blob: RLEBlob | None = None

    name: ClassVar[str] = "pixcrumb-rle"
    abbrev_name: ClassVar[str] = "pcrle"

    def __post_init__(self) -> None:
        if self.blob is not None:
            self.load_blob(self.blob)

    def load_blob(self, blob: object) -> None:
        """Make ``blob`` the one that :meth:`decompress` works on."""
        if not isinstance(blob, RLEBlob):
            raise WrongBlobTypeError(
                "cannot load blob into PixCrumbRLE: wrong blob type for this codec"
            )
        self.blob = blob

    def compress(self, plane: CrumbPlane) -> RLEBlob:
        """Compress a crumb plane into a new blob, which also becomes the loaded one."""
        width_bytes = plane.width_bp_bytes()
        height = plane.height_crumbs()
        if width_bytes > _MAX_DIMENSION or height > _MAX_DIMENSION:
            raise ImageTooLargeError(
                f"image too big: rounded pixel dimensions {width_bytes * 8}x{height * 2} "
                "exceed max dimensions of 2040x510"
            )
        rle_stream = bytearray()
        data_stream = bytearray()
        rle_writer = BitstreamMSB(rle_stream)
        data_writer = BitstreamMSB(data_stream)

        reader = CrumbIterator.reader(plane.crumbs)
        literal_coder = ZeroTerminatedLiteralCoder(reader, data_writer, None, None)
        rle_coder = ExpGolombZeroRLECoder(reader, rle_writer, None, None, _GOLOMB_ORDER)

        rle_mode = False
        while not reader.is_at_end():
            (rle_coder if rle_mode else literal_coder).encode_some()
            rle_mode = not rle_mode

        self.blob = RLEBlob(
            height_crumbs=height,
            width_tiles=width_bytes,
            rle_stream=bytes(rle_writer.data),
            data_stream=bytes(data_writer.data),
        )
        return self.blob

    def decompress(self) -> CrumbPlane:
        """Decode the loaded blob back into a crumb plane."""
        if self.blob is None:
            raise PixCrumbError("no blob loaded")
        blob = self.blob
        width = blob.width_tiles * 4
        if width == 0 or blob.height_crumbs == 0:
            raise BlobDataInvalidError("blob data is invalid: zero-sized plane")

        rle_reader = BitstreamMSB(bytes(blob.rle_stream))
        data_reader = BitstreamMSB(bytes(blob.data_stream))
        writer = CrumbIterator.writer(width)
        literal_coder = ZeroTerminatedLiteralCoder(None, None, data_reader, writer)
        rle_coder = ExpGolombZeroRLECoder(None, None, rle_reader, writer, _GOLOMB_ORDER)

        total = blob.height_crumbs * width
        rle_mode = False
        try:
            while writer.tell() < total:
                (rle_coder if rle_mode else literal_coder).decode_some()
                rle_mode = not rle_mode
        except EOFError as error:
            raise BlobDataInconsistentError(
                "blob data has inconsistencies: end of stream reached before the plane was filled"
            ) from error

        matrix = writer.crumb_matrix()[: blob.height_crumbs]
        return CrumbPlane.from_matrix(matrix)