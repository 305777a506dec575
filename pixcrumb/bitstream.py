"""MSB-first bit stream over a growable byte buffer, with exp-Golomb coding."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from .entropy import DictWord

__all__ = [
    "BitstreamError",
    "BitstreamMSB",
    "count_bits16",
    "exp_golomb_bit_length",
]


class BitstreamError(Exception):
    """Raised when a seek would move outside the stream."""


def count_bits16(value: int) -> int:
    """Return the number of significant bits of ``value`` taken as a 16-bit integer."""
    return (value & 0xFFFF).bit_length()


def exp_golomb_bit_length(value: int, order: int) -> int:
    """Return how many bits an order-``order`` exp-Golomb code of ``value`` occupies."""
    bit_count = count_bits16(((value & 0xFFFF) >> order) + 1)
    n_bits = bit_count * 2 - 1
    if order > 0:
        n_bits += order
    return n_bits


class BitstreamMSB:
    """Reads and writes bits most-significant first.

    Writing past the end of ``data`` appends bytes to it in place when it is
    a ``bytearray``.
    """

    def __init__(self, data: bytes | bytearray) -> None:
        self.data = data if isinstance(data, bytearray) else bytearray(data)
        self._pos = 0
        self.length_bits = len(self.data) * 8

    def reset(self) -> None:
        """Move back to the first bit."""
        self._pos = 0

    def peek_bit(self) -> int:
        """Return the bit at the current position without advancing."""
        byte_index, bit_index = divmod(self._pos, 8)
        return (self.data[byte_index] >> (7 - bit_index)) & 0x01

    def tell(self) -> int:
        """Return the current position in bits."""
        return self._pos

    def bits_left(self) -> int:
        """Return the number of bits between the position and the end of the stream."""
        return self.length_bits - self._pos

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the position in bits; raise BitstreamError if it would leave the stream."""
        if whence == os.SEEK_SET:
            new_pos = offset
        elif whence == os.SEEK_CUR:
            new_pos = self._pos + offset
        elif whence == os.SEEK_END:
            new_pos = self.length_bits + offset
        else:
            raise ValueError(f"invalid whence value {whence}")
        if new_pos < 0 or self.length_bits - new_pos < 0:
            raise BitstreamError(f"seek to bit {new_pos} is outside the stream")
        self._pos = new_pos
        return new_pos

    def read_bit(self) -> int:
        """Read one bit; raise EOFError at the end of the stream."""
        if self.bits_left() <= 0:
            raise EOFError("end of bit stream")
        bit = self.peek_bit()
        self._pos += 1
        return bit

    def read_bits(self, count: int) -> int:
        """Read ``count`` bits as an unsigned integer, first bit most significant."""
        result = 0
        for _ in range(count):
            result = (result << 1) | self.read_bit()
        return result

    def poke_bit(self, bit: int) -> None:
        """Overwrite the bit at the current position without advancing."""
        byte_index, bit_index = divmod(self._pos, 8)
        shift = 7 - bit_index
        self.data[byte_index] = (self.data[byte_index] & ~(1 << shift) & 0xFF) | ((bit & 0x01) << shift)

    def write_bit(self, bit: int) -> None:
        """Write one bit at the current position, growing the buffer as needed."""
        if self._pos // 8 >= len(self.data):
            self.data.append(0)
        self.poke_bit(bit)
        self._pos += 1
        self.length_bits += 1

    def write_bits(self, value: int, count: int) -> None:
        """Write the low ``count`` bits of ``value``, most significant first."""
        for shift in range(count - 1, -1, -1):
            self.write_bit((value >> shift) & 0x01)

    def write_crumbs(self, crumbs: Iterable[int]) -> None:
        """Write each crumb as a plain 4-bit value."""
        for crumb in crumbs:
            self.write_bits(crumb, 4)

    def write_dict_entry(self, word: DictWord) -> None:
        """Write a single code word."""
        self.write_bits(word.value, word.length)

    def write_dict_coded_crumbs(self, crumbs: Iterable[int], table: Mapping[int, DictWord]) -> None:
        """Write each crumb as its code word from ``table``."""
        for crumb in crumbs:
            self.write_dict_entry(table[crumb])

    def _write_order0_exp_golomb(self, value: int) -> None:
        if value == 0xFFFF:
            raise OverflowError("cannot exp-Golomb encode 16-bit value 0xFFFF")
        bit_count = count_bits16(value + 1)
        self.write_bits(0, bit_count - 1)
        self.write_bits(value + 1, bit_count)

    def write_exp_golomb(self, value: int, order: int) -> None:
        """Write ``value`` as an order-``order`` exp-Golomb code over 16 bits."""
        value &= 0xFFFF
        self._write_order0_exp_golomb(value >> order)
        if order > 0:
            self.write_bits(value & (order - 1), order)

    def read_exp_golomb(self, order: int) -> int:
        """Read an order-``order`` exp-Golomb code and return it as a 16-bit value."""
        leading_zeros = 0
        while self.read_bit() == 0:
            leading_zeros += 1
        trailing = leading_zeros + order
        suffix = self.read_bits(trailing)
        return (suffix + (1 << trailing) - 1) & 0xFFFF