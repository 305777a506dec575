import pytest

from pixcrumb.codec import (
    BlobDataInconsistentError,
    BlobDataInvalidError,
    ImageTooLargeError,
    PixCrumbError,
    PixCrumbRLE,
    RLEBlob,
    WrongBlobTypeError,
)
from pixcrumb.planes import CrumbPlane


def _plane(value, rows=4, cols=4):
    return CrumbPlane.from_matrix([[value] * cols for _ in range(rows)])


def test_total_size_counts_header():
    blob = RLEBlob(2, 1, b"\xaa", b"\xbb\xcc")
    assert blob.total_size() == len(blob.rle_stream) + len(blob.data_stream) + 4


def test_marshal_layout():
    blob = RLEBlob(2, 1, b"\xaa", b"\xbb\xcc")
    assert blob.marshal() == bytes([2, 1, 5, 0, 0xAA, 0xBB, 0xCC])


def test_marshal_length_matches_total_size():
    blob = RLEBlob(7, 3, b"\x01\x02\x03", b"\x04")
    assert len(blob.marshal()) == blob.total_size()


def test_unmarshal_round_trip():
    blob = RLEBlob(9, 4, b"\x10\x20\x30", b"\x40\x50")
    assert RLEBlob.unmarshal(blob.marshal()) == blob


def test_unmarshal_empty_streams():
    blob = RLEBlob(1, 1)
    assert RLEBlob.unmarshal(blob.marshal()) == blob


def test_unmarshal_too_short():
    with pytest.raises(BlobDataInvalidError):
        RLEBlob.unmarshal(b"\x01\x02\x03")


def test_unmarshal_truncated_rle_stream():
    data = RLEBlob(1, 1, b"\x01\x02\x03\x04", b"").marshal()[:-2]
    with pytest.raises(BlobDataInconsistentError):
        RLEBlob.unmarshal(data)


def test_unmarshal_offset_below_header():
    with pytest.raises(BlobDataInconsistentError):
        RLEBlob.unmarshal(bytes([1, 1, 2, 0, 0xFF]))


def test_errors_share_base():
    plane = CrumbPlane(crumbs=[[0] * 1024], height=2, width=2048)
    with pytest.raises(PixCrumbError) as too_large:
        PixCrumbRLE().compress(plane)
    assert isinstance(too_large.value, ImageTooLargeError)
    with pytest.raises(PixCrumbError) as wrong_type:
        PixCrumbRLE().load_blob(b"not a blob")
    assert isinstance(wrong_type.value, WrongBlobTypeError)


def test_codec_names():
    codec = PixCrumbRLE()
    assert (codec.name, codec.abbrev_name) == ("pixcrumb-rle", "pcrle")


def test_compress_header_fields():
    blob = PixCrumbRLE().compress(_plane(0))
    assert blob.height_crumbs == 4
    assert blob.width_tiles == 1


def test_compress_all_zero_uses_single_terminator():
    blob = PixCrumbRLE().compress(_plane(0))
    assert blob.data_stream == b"\x00"
    assert len(blob.rle_stream) >= 1


def test_compress_without_zeros_is_all_literals():
    blob = PixCrumbRLE().compress(_plane(0xF))
    assert blob.data_stream == b"\xff" * 8
    assert blob.rle_stream == b""


def test_compress_stores_blob():
    codec = PixCrumbRLE()
    blob = codec.compress(_plane(0))
    assert codec.blob is blob


def test_compress_too_wide():
    plane = CrumbPlane(crumbs=[[0] * 1024], height=2, width=2048)
    with pytest.raises(ImageTooLargeError):
        PixCrumbRLE().compress(plane)


def test_compress_too_tall():
    plane = CrumbPlane(crumbs=[[0] for _ in range(256)], height=512, width=2)
    with pytest.raises(ImageTooLargeError):
        PixCrumbRLE().compress(plane)


def test_compressed_blob_marshal_round_trip():
    matrix = [[1, 0, 0, 2], [0, 0, 0, 0], [3, 0, 5, 0], [0, 0, 0, 7]]
    blob = PixCrumbRLE().compress(CrumbPlane.from_matrix(matrix))
    assert RLEBlob.unmarshal(blob.marshal()) == blob


def test_load_blob_wrong_type():
    with pytest.raises(WrongBlobTypeError):
        PixCrumbRLE().load_blob(b"not a blob")


def test_constructor_rejects_wrong_type():
    with pytest.raises(WrongBlobTypeError):
        PixCrumbRLE(blob="nope")


def test_decompress_without_blob():
    with pytest.raises(PixCrumbError):
        PixCrumbRLE().decompress()


def test_decompress_zero_sized():
    with pytest.raises(BlobDataInvalidError):
        PixCrumbRLE(RLEBlob(0, 1)).decompress()


def test_decompress_empty_streams_runs_out():
    with pytest.raises(BlobDataInconsistentError):
        PixCrumbRLE(RLEBlob(1, 1)).decompress()


def test_decompress_shape_matches_header():
    blob = PixCrumbRLE().compress(_plane(0))
    plane = PixCrumbRLE(blob).decompress()
    assert len(plane.crumbs) == blob.height_crumbs
    assert all(len(row) == blob.width_tiles * 4 for row in plane.crumbs)
    assert plane.height_crumbs() == blob.height_crumbs