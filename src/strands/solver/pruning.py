"""Pruning checks for the coverage search.

Each check only rejects search states from which no full cover can be reached, so enabling them
never changes which solution the search finds first.
"""

from collections.abc import Sequence

from bitarray import bitarray
from bitarray.util import zeros

from strands.solver.candidates import Candidate
from strands.solver.geometry import mask_to_indices


class CellCoverIndex:
    """Per-cell index of the candidates covering each cell.

    Element `cover[cell]` is a bit array over candidate positions: bit `k` is set if
    `candidates[k]` covers `cell`.  It is very important that the candidate list is never
    reordered after the index is built, so that all bit arrays align correctly.
    """

    def __init__(self, candidates: Sequence[Candidate], n_cells: int) -> None:
        self.n_cells = n_cells
        """Number of cells on the board."""

        self.full_mask = (1 << n_cells) - 1
        """Mask with every board cell set."""

        self.cover: list[bitarray] = [zeros(len(candidates)) for _ in range(n_cells)]
        """Bit arrays of covering candidate positions, one per cell."""

        self.longest: int = max((len(c.path) for c in candidates), default=0)
        """Length of the longest candidate path."""

        for position, candidate in enumerate(candidates):
            for cell in candidate.path:
                self.cover[cell][position] = True

    def uncovered_cells(self, board_mask: int) -> list[int]:
        """Return the cells not set in `board_mask`."""
        return mask_to_indices(~board_mask & self.full_mask)

    def is_coverable(self, board_mask: int, start: int) -> bool:
        """Check that every uncovered cell is covered by some candidate at or after `start`."""
        for cell in self.uncovered_cells(board_mask):
            if self.cover[cell].find(1, start) == -1:
                return False
        return True

    def has_capacity(self, board_mask: int, words_left: int) -> bool:
        """Check that `words_left` words could still fill the uncovered cells."""
        n_uncovered = self.n_cells - board_mask.bit_count()
        return n_uncovered <= words_left * self.longest

    def can_complete(self, board_mask: int, start: int, words_left: int) -> bool:
        """Return False if no full cover is reachable from this search state."""
        return self.has_capacity(board_mask, words_left) and self.is_coverable(board_mask, start)
