"""Coding methods moving crumbs between a crumb iterator and a bit stream."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod

from .bitstream import BitstreamMSB, exp_golomb_bit_length
from .crumbiterator import CrumbIterator

__all__ = ["CodingMethod", "ExpGolombZeroRLECoder", "ZeroTerminatedLiteralCoder"]

MAX_RUN = 0xFFFF


class CodingMethod(ABC):
    """Encodes or decodes one run of crumbs at a time."""

    @abstractmethod
    def encode_some(self) -> tuple[int, int]:
        """Encode one run; return (crumbs consumed, bits written)."""

    @abstractmethod
    def decode_some(self) -> tuple[int, int]:
        """Decode one run; return (crumbs produced, bits read)."""


def _check_pairs(enc_src, enc_dest, dec_src, dec_dest) -> None:
    if (enc_src is None) != (enc_dest is None):
        raise ValueError("encode source supplied without a destination (or vice-versa)")
    if (dec_src is None) != (dec_dest is None):
        raise ValueError("decode source supplied without a destination (or vice-versa)")


class ZeroTerminatedLiteralCoder(CodingMethod):
    """Stores crumbs as plain 4-bit literals, a run ending at the first zero crumb."""

    def __init__(
        self,
        enc_src: CrumbIterator | None,
        enc_dest: BitstreamMSB | None,
        dec_src: BitstreamMSB | None,
        dec_dest: CrumbIterator | None,
    ) -> None:
        _check_pairs(enc_src, enc_dest, dec_src, dec_dest)
        self.crumb_reader = enc_src
        self.literal_writer = enc_dest
        self.literal_reader = dec_src
        self.crumb_writer = dec_dest

    def encode_some(self) -> tuple[int, int]:
        if self.crumb_reader is None or self.literal_writer is None:
            raise RuntimeError("tried to encode without an encoding source and destination")
        crumbs: list[int] = []
        while not self.crumb_reader.is_at_end():
            crumb = self.crumb_reader.read_crumb()
            crumbs.append(crumb)
            if crumb == 0:
                break
        self.literal_writer.write_crumbs(crumbs)
        return len(crumbs) - 1, len(crumbs) * 4

    def decode_some(self) -> tuple[int, int]:
        if self.literal_reader is None or self.crumb_writer is None:
            raise RuntimeError("tried to decode without a decoding source and destination")
        crumbs: list[int] = []
        while self.literal_reader.bits_left() > 4:
            crumb = self.literal_reader.read_bits(4)
            if crumb == 0:
                break
            crumbs.append(crumb)
        self.crumb_writer.write_crumbs(crumbs)
        return len(crumbs), (len(crumbs) + 1) * 4


class ExpGolombZeroRLECoder(CodingMethod):
    """Stores a run of zero crumbs as its length in an exp-Golomb code."""

    def __init__(
        self,
        enc_src: CrumbIterator | None,
        enc_dest: BitstreamMSB | None,
        dec_src: BitstreamMSB | None,
        dec_dest: CrumbIterator | None,
        golomb_order: int,
    ) -> None:
        _check_pairs(enc_src, enc_dest, dec_src, dec_dest)
        self.crumb_reader = enc_src
        self.code_writer = enc_dest
        self.code_reader = dec_src
        self.crumb_writer = dec_dest
        self.golomb_order = golomb_order

    def decode_some(self) -> tuple[int, int]:
        if self.code_reader is None or self.crumb_writer is None:
            raise RuntimeError("tried to decode without a decoding source and destination")
        run = self.code_reader.read_exp_golomb(self.golomb_order)
        self.crumb_writer.write_crumbs([0] * run)
        return run, exp_golomb_bit_length(run, self.golomb_order)

    def encode_some(self) -> tuple[int, int]:
        if self.crumb_reader is None or self.code_writer is None:
            raise RuntimeError("tried to encode without an encoding source and destination")
        run = 0
        while not self.crumb_reader.is_at_end() and run < MAX_RUN:
            if self.crumb_reader.read_crumb() != 0:
                self.crumb_reader.seek(-1, os.SEEK_CUR)
                break
            run += 1
        self.code_writer.write_exp_golomb(run, self.golomb_order)
        return run, exp_golomb_bit_length(run, self.golomb_order)