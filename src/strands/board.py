"""Classes and functions for representing the letter grid."""

from collections.abc import Iterable, Sequence

import numpy as np

from strands.exceptions import InvalidDimensionsError


def neighbors(index: int, width: int, height: int) -> list[int]:
    """Return the indices of the cells adjacent to `index`, including diagonals.

    The grid is stored in row-major order as a 1D sequence of `width * height` cells.  Moves off
    the edge of the grid do not wrap around to the neighbouring row or column.

    Neighbours are listed in a fixed order: north, west, east, south, northwest, northeast,
    southwest, southeast (each only if it lies on the grid).

    Args:
        index: 1D index of the cell.  Must be in `[0, width * height)`.
        width: Number of columns in the grid.
        height: Number of rows in the grid.
    """
    size = width * height
    col = index % width
    has_west = col != 0
    has_east = col != width - 1
    has_north = index >= width
    has_south = index + width < size

    result: list[int] = []
    if has_north:
        result.append(index - width)
    if has_west:
        result.append(index - 1)
    if has_east:
        result.append(index + 1)
    if has_south:
        result.append(index + width)
    if has_north and has_west:
        result.append(index - width - 1)
    if has_north and has_east:
        result.append(index - width + 1)
    if has_south and has_west:
        result.append(index + width - 1)
    if has_south and has_east:
        result.append(index + width + 1)
    return result


class Board:
    """Store a 2D matrix of letters as a 1D string.

    Contains support for both 1D and 2D indexing.  A Board is immutable once constructed.
    """

    def __init__(self, letters: str | Iterable[str], n_rows: int, n_cols: int) -> None:
        letters = letters if isinstance(letters, str) else "".join(letters)
        if n_rows <= 0 or n_cols <= 0:
            raise InvalidDimensionsError(
                f"Board dimensions must be positive, got {n_rows}x{n_cols}."
            )
        if len(letters) != n_rows * n_cols:
            raise InvalidDimensionsError(
                f"Expected {n_rows * n_cols} letters for a {n_rows}x{n_cols} board, "
                f"got {len(letters)}."
            )
        self._letters = letters
        self._n_rows = n_rows
        self._n_cols = n_cols
        self._neighbors: tuple[tuple[int, ...], ...] = tuple(
            tuple(neighbors(idx, n_cols, n_rows)) for idx in range(len(letters))
        )

    @classmethod
    def from_letters(cls, letters: str | Iterable[str], width: int, height: int) -> "Board":
        """Create a Board from a flat, row-major sequence of letters.

        Raises:
            InvalidDimensionsError: If the number of letters is not `width * height`.
        """
        return cls(letters, n_rows=height, n_cols=width)

    @property
    def letters(self) -> str:
        """The board letters in row-major order."""
        return self._letters

    @property
    def n_rows(self) -> int:
        """Number of rows (the board height)."""
        return self._n_rows

    @property
    def n_cols(self) -> int:
        """Number of columns (the board width)."""
        return self._n_cols

    @property
    def width(self) -> int:
        return self._n_cols

    @property
    def height(self) -> int:
        return self._n_rows

    @property
    def size(self) -> int:
        """Total number of cells on the board."""
        return len(self._letters)

    @property
    def full_mask(self) -> int:
        """Bit mask with one bit set for every cell of the board."""
        return (1 << self.size) - 1

    def __len__(self) -> int:
        return len(self._letters)

    def __str__(self) -> str:
        """Returns the board rows separated by spaces."""
        return " ".join(self.rows())

    def __repr__(self) -> str:
        return f"Board({self._letters!r}, n_rows={self._n_rows}, n_cols={self._n_cols})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self._letters, self._n_rows, self._n_cols) == (
            other._letters,
            other._n_rows,
            other._n_cols,
        )

    def __hash__(self) -> int:
        return hash((self._letters, self._n_rows, self._n_cols))

    def __getitem__(self, idx: int | tuple[int, int]) -> str:
        """Get cell content by 1D (row-major order) or 2D index."""
        if isinstance(idx, int):
            return self._letters[idx]
        if isinstance(idx, tuple) and len(idx) == 2:
            row, col = idx
            return self._letters[row * self._n_cols + col]
        raise IndexError("Invalid index type for Board.")

    def rows(self) -> list[str]:
        """Return the letters of each row, top to bottom."""
        return [
            self._letters[start : start + self._n_cols]
            for start in range(0, len(self._letters), self._n_cols)
        ]

    def to_array(self) -> np.ndarray:
        """Return the letters as a 2D numpy array of shape (n_rows, n_cols)."""
        return np.array(list(self._letters)).reshape(self._n_rows, self._n_cols)

    def neighbors_of(self, index: int) -> tuple[int, ...]:
        """Get the cells adjacent to `index`, in the order given by `neighbors`."""
        return self._neighbors[index]

    def word_at(self, path: Sequence[int]) -> str:
        """Spell out the letters visited by `path`, in order."""
        return "".join(self._letters[idx] for idx in path)

    def mask_of(self, path: Iterable[int]) -> int:
        """Bit mask with one bit set for each cell in `path`."""
        mask = 0
        for idx in path:
            mask |= 1 << idx
        return mask
