"""Prefix-code tables for crumb values and helpers to measure coded lengths."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

__all__ = [
    "CRUMB_HISTOGRAM",
    "DICT_LZ",
    "DICT_RLE",
    "DictWord",
    "TOKEN_END_OF_LITERALS",
    "dict_coded_bit_length",
]


@dataclass(frozen=True)
class DictWord:
    """A variable-length code word: ``length`` bits holding ``value``, MSB first."""

    value: int
    length: int


TOKEN_END_OF_LITERALS = 16

# Observed crumb frequencies in a sample corpus, indexed by crumb value.
CRUMB_HISTOGRAM: tuple[int, ...] = (
    190717, 25529, 32942, 16299, 28947, 35376, 18160, 19100,
    29189, 17495, 54283, 20529, 17301, 18498, 19300, 93882,
)

DICT_RLE: dict[int, DictWord] = {
    0x0: DictWord(0b00, 2),
    0xF: DictWord(0b01, 2),
    0xA: DictWord(0b100, 3),
    0x5: DictWord(0b101, 3),
    0x2: DictWord(0b1100, 4),
    0x8: DictWord(0b1101, 4),
    0x4: DictWord(0b11100, 5),
    0x1: DictWord(0b11101, 5),
    0xB: DictWord(0b1111000, 7),
    0xE: DictWord(0b1111001, 7),
    0x7: DictWord(0b1111010, 7),
    0xD: DictWord(0b1111011, 7),
    0x6: DictWord(0b1111100, 7),
    0x9: DictWord(0b1111101, 7),
    0xC: DictWord(0b1111110, 7),
    0x3: DictWord(0b1111111, 7),
}

DICT_LZ: dict[int, DictWord] = {
    TOKEN_END_OF_LITERALS: DictWord(0b00, 2),
    0x0: DictWord(0b01, 2),
    0xF: DictWord(0b10, 2),
    0xA: DictWord(0b1100, 4),
    0x5: DictWord(0b1101, 4),
    0x2: DictWord(0b11100, 5),
    0x8: DictWord(0b11101, 5),
    0x4: DictWord(0b111100, 6),
    0x1: DictWord(0b111101, 6),
    0xB: DictWord(0b11111000, 8),
    0xE: DictWord(0b11111001, 8),
    0x7: DictWord(0b11111010, 8),
    0xD: DictWord(0b11111011, 8),
    0x6: DictWord(0b11111100, 8),
    0x9: DictWord(0b11111101, 8),
    0xC: DictWord(0b11111110, 8),
    0x3: DictWord(0b11111111, 8),
}


def dict_coded_bit_length(crumbs: Iterable[int], table: Mapping[int, DictWord]) -> int:
    """Return the number of bits needed to code ``crumbs`` with ``table``."""
    return sum(table[crumb].length for crumb in crumbs)