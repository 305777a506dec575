"""Serpentine-order reading and writing over a matrix of crumbs."""

from __future__ import annotations

import os
from collections.abc import Iterable

__all__ = ["CrumbAlignmentError", "CrumbIndexError", "CrumbIterator"]


class CrumbIndexError(IndexError):
    """Raised when a crumb index falls outside the data."""


class CrumbAlignmentError(ValueError):
    """Raised when the crumb data does not fill the last line of the matrix."""


def _truncated(crumbs: list[int]) -> EOFError:
    error = EOFError(f"unexpected end of crumb data after {len(crumbs)} crumbs")
    error.crumbs = crumbs
    return error


class CrumbIterator:
    """Walks a crumb matrix row by row, alternating direction on every row.

    Even rows are traversed left to right and odd rows right to left. The
    length is the number of crumbs present when the iterator was created;
    writing extends the matrix but not that length.
    """

    def __init__(self, matrix: list[list[int]], width: int) -> None:
        self.matrix = matrix
        self.width = width
        self._index = 0
        self._length = len(matrix) * width

    @classmethod
    def reader(cls, matrix: list[list[int]]) -> CrumbIterator:
        """Create an iterator that reads the crumbs of ``matrix``."""
        if not matrix:
            raise ValueError("cannot read from an empty crumb matrix")
        return cls(matrix, len(matrix[0]))

    @classmethod
    def writer(cls, width: int) -> CrumbIterator:
        """Create an iterator that builds a new matrix ``width`` crumbs wide."""
        return cls([], width)

    def __len__(self) -> int:
        return self._length

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move to a crumb index; raise CrumbIndexError if it would leave the data."""
        if whence == os.SEEK_SET:
            new_index = offset
        elif whence == os.SEEK_CUR:
            new_index = self._index + offset
        elif whence == os.SEEK_END:
            new_index = self._length + offset
        else:
            raise ValueError(f"invalid whence value {whence}")
        if new_index > self._length or new_index < 0:
            raise CrumbIndexError(f"seek to crumb {new_index} is outside the data")
        self._index = new_index
        return new_index

    def tell(self) -> int:
        """Return the current crumb index."""
        return self._index

    def _position(self, index: int) -> tuple[int, int]:
        y, x_offset = divmod(index, self.width)
        x = x_offset if y % 2 == 0 else self.width - x_offset - 1
        return y, x

    def height_crumbs(self) -> int:
        """Return the number of rows in the matrix."""
        return len(self.matrix)

    def is_length_aligned(self) -> bool:
        """Tell whether the data length ends at the start of a matrix row."""
        _, x = self._position(self._length)
        return x == 0

    def is_at_end(self) -> bool:
        """Tell whether every crumb has been read."""
        return self._index >= self._length

    def crumb_matrix(self) -> list[list[int]]:
        """Return the matrix; raise CrumbAlignmentError if it is not filled."""
        if not self.is_length_aligned():
            raise CrumbAlignmentError("crumb data does not fill the last line of the matrix")
        return self.matrix

    def peek_crumb_at(self, offset: int, relative: bool = False) -> int:
        """Return the crumb at an absolute index, or one relative to the position."""
        index = self._index + offset if relative else offset
        if index >= self._length:
            raise CrumbIndexError(
                f"tried to access index {index} where crumb data has length "
                f"{self._length} (size {self.width}x{len(self.matrix)})"
            )
        if index < 0:
            raise CrumbIndexError(f"tried to access negative index {index}")
        y, x = self._position(index)
        return self.matrix[y][x]

    def peek_crumb(self) -> int:
        """Return the crumb at the current position without advancing."""
        return self.peek_crumb_at(self._index, False)

    def peek_crumbs_at(self, n: int, offset: int, relative: bool = False) -> list[int]:
        """Return ``n`` crumbs from an index without advancing.

        Raises CrumbIndexError if the first index is outside the data, and
        EOFError carrying the crumbs found in ``crumbs`` if the data runs out.
        """
        self.peek_crumb_at(offset, relative)
        crumbs: list[int] = []
        for step in range(n):
            try:
                crumbs.append(self.peek_crumb_at(offset + step, relative))
            except CrumbIndexError:
                raise _truncated(crumbs) from None
        return crumbs

    def peek_crumbs(self, n: int) -> list[int]:
        """Return the next ``n`` crumbs without advancing."""
        return self.peek_crumbs_at(n, 0, True)

    def read_crumb(self) -> int:
        """Read one crumb; raise EOFError at the end of the data."""
        if self._index >= self._length:
            raise EOFError("end of crumb data")
        crumb = self.peek_crumb()
        self._index += 1
        return crumb

    def read_crumbs(self, n: int) -> list[int]:
        """Read ``n`` crumbs; raise EOFError carrying the crumbs read if data runs out."""
        crumbs: list[int] = []
        for _ in range(n):
            try:
                crumbs.append(self.read_crumb())
            except EOFError:
                raise _truncated(crumbs) from None
        return crumbs

    def write_crumb(self, crumb: int) -> None:
        """Write one crumb at the current position, adding a row when needed."""
        y, x = self._position(self._index)
        if y > len(self.matrix) - 1:
            self.matrix.append([0] * self.width)
        self.matrix[y][x] = crumb
        self._index += 1

    def write_crumbs(self, crumbs: Iterable[int]) -> None:
        """Write each crumb in turn."""
        for crumb in crumbs:
            self.write_crumb(crumb)