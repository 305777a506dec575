import os

import pytest

from pixcrumb.bitstream import (
    BitstreamError,
    BitstreamMSB,
    count_bits16,
    exp_golomb_bit_length,
)


def test_byte_written_lands_in_buffer():
    stream = BitstreamMSB(bytearray())
    stream.write_bits(0xAB, 8)
    assert stream.data == bytearray(b"\xab")
    assert stream.tell() == 8


def test_writes_extend_caller_buffer_in_place():
    buffer = bytearray()
    stream = BitstreamMSB(buffer)
    stream.write_bits(0x1234, 16)
    stream.write_bit(1)
    assert len(buffer) == 3
    assert stream.length_bits == 17


@pytest.mark.parametrize(
    "fields",
    [[(1, 1)], [(5, 3), (0, 2), (0x3FF, 10)], [(0xDEAD, 16), (7, 4), (1, 9)]],
)
def test_bits_round_trip(fields):
    writer = BitstreamMSB(bytearray())
    for value, count in fields:
        writer.write_bits(value, count)
    reader = BitstreamMSB(writer.data)
    assert [reader.read_bits(count) for _, count in fields] == [v for v, _ in fields]


def test_crumbs_round_trip():
    crumbs = [0xA, 0xB, 0x0, 0xF, 0x3]
    writer = BitstreamMSB(bytearray())
    writer.write_crumbs(crumbs)
    reader = BitstreamMSB(writer.data)
    assert [reader.read_bits(4) for _ in crumbs] == crumbs


def test_read_on_empty_stream_raises_eof():
    with pytest.raises(EOFError):
        BitstreamMSB(b"").read_bit()


def test_read_past_end_raises_eof():
    stream = BitstreamMSB(b"\xff")
    with pytest.raises(EOFError):
        stream.read_bits(9)


def test_bits_left_tracks_reads():
    stream = BitstreamMSB(b"\x00\x00")
    stream.read_bits(5)
    assert stream.bits_left() == 11
    assert stream.tell() == 5


def test_seek_modes():
    stream = BitstreamMSB(bytes(2))
    assert stream.seek(5, os.SEEK_SET) == 5
    assert stream.seek(3, os.SEEK_CUR) == 8
    assert stream.seek(-4, os.SEEK_END) == 12
    assert stream.tell() == 12


@pytest.mark.parametrize("offset,whence", [(20, os.SEEK_SET), (-1, os.SEEK_SET), (1, os.SEEK_END)])
def test_seek_outside_raises_and_keeps_position(offset, whence):
    stream = BitstreamMSB(bytes(2))
    stream.seek(3)
    with pytest.raises(BitstreamError):
        stream.seek(offset, whence)
    assert stream.tell() == 3


def test_reset_returns_to_start():
    stream = BitstreamMSB(b"\x80")
    stream.read_bits(6)
    stream.reset()
    assert stream.tell() == 0
    assert stream.read_bit() == 1


def test_poke_bit_does_not_advance():
    stream = BitstreamMSB(bytearray(1))
    stream.poke_bit(1)
    assert stream.tell() == 0
    assert stream.read_bit() == 1


def test_count_bits16_bounds_value():
    for value in range(1, 2000):
        n = count_bits16(value)
        assert 2 ** (n - 1) <= value < 2**n


def test_count_bits16_of_zero():
    assert count_bits16(0) == 0


def test_order0_code_of_zero_is_single_one_bit():
    stream = BitstreamMSB(bytearray())
    stream.write_exp_golomb(0, 0)
    assert stream.data == bytearray(b"\x80")
    assert stream.tell() == 1


@pytest.mark.parametrize("value", [0, 1, 2, 3, 7, 100, 255, 4096, 0xFFFE])
def test_order0_exp_golomb_round_trip(value):
    writer = BitstreamMSB(bytearray())
    writer.write_exp_golomb(value, 0)
    reader = BitstreamMSB(writer.data)
    assert reader.read_exp_golomb(0) == value


@pytest.mark.parametrize("order", [0, 1, 2, 3])
@pytest.mark.parametrize("value", [0, 1, 5, 37, 1000])
def test_exp_golomb_bit_length_matches_stream(order, value):
    writer = BitstreamMSB(bytearray())
    writer.write_exp_golomb(value, order)
    assert writer.tell() == exp_golomb_bit_length(value, order)
    reader = BitstreamMSB(writer.data)
    reader.read_exp_golomb(order)
    assert reader.tell() == exp_golomb_bit_length(value, order)


def test_order0_exp_golomb_of_max_overflows():
    with pytest.raises(OverflowError):
        BitstreamMSB(bytearray()).write_exp_golomb(0xFFFF, 0)


def test_exp_golomb_sequence_round_trip():
    values = [3, 0, 9, 1, 64]
    writer = BitstreamMSB(bytearray())
    for value in values:
        writer.write_exp_golomb(value, 0)
    reader = BitstreamMSB(writer.data)
    assert [reader.read_exp_golomb(0) for _ in values] == values