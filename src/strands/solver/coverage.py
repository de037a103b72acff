"""Backtracking search for a covering, non-overlapping, non-crossing word selection."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from time import time
from typing import TextIO

from strands.exceptions import SearchTimeoutError
from strands.solver.candidates import Candidate
from strands.solver.geometry import crosses_any, overlaps
from strands.solver.pruning import CellCoverIndex
from strands.solver.utils import int_comma, time_str


@dataclass(frozen=True)
class CoverageSolution:
    """A selection of candidates covering every board cell exactly once."""

    selected: tuple[Candidate, ...]
    """The selected candidates, in the order they were placed."""

    board_mask: int
    """Union of the masks of the selected candidates."""

    @property
    def words(self) -> list[str]:
        return [c.word for c in self.selected]

    @property
    def paths(self) -> list[tuple[int, ...]]:
        return [c.path for c in self.selected]

    def __len__(self) -> int:
        return len(self.selected)


@dataclass
class SearchStats:
    """Statistics collected during solving."""

    nodes_examined: int = 0
    """Number of search states (partial selections) examined."""

    max_depth_reached: int = 0
    """Maximum number of words placed at once."""

    branches_pruned: int = 0
    """Number of search states discarded by the pruning checks."""

    start_time: float = field(default_factory=time)
    """Timestamp when solving started."""


class CoverageSearch:
    """Depth-first search over an ordered candidate list.

    Candidates are only ever tried in increasing list order, so each combination of words is
    examined at most once.  The running board mask and the selection are owned by the search and
    restored on every backtrack.
    """

    def __init__(
        self,
        candidates: Sequence[Candidate],
        max_words: int,
        board_width: int,
        board_height: int,
        *,
        prune: bool = True,
        time_limit: float | None = None,
        deadline: float | None = None,
        report_interval: int = 0,
        out: TextIO | None = None,
        stats: SearchStats | None = None,
    ) -> None:
        """Initialize the search.

        Args:
            candidates (Sequence[Candidate]): Candidates in the order they should be tried.
            max_words (int): Maximum number of words in a solution (inclusive).
            board_width (int): Number of board columns.
            board_height (int): Number of board rows.
            prune (bool): Whether to discard states from which no full cover is reachable.
            time_limit (float | None): Seconds after which to abandon the search.
            deadline (float | None): Absolute timestamp after which to abandon the search.
                Takes precedence over `time_limit`.
            report_interval (int): Print progress to `out` every this many states (0 disables).
            out (TextIO | None): Output stream for progress reports.
            stats (SearchStats | None): Statistics object to update; a new one if None.
        """
        self.candidates = candidates
        self.max_words = max_words
        self.width = board_width
        self.full_mask = (1 << (board_width * board_height)) - 1
        self.cover_index = (
            CellCoverIndex(candidates, board_width * board_height) if prune else None
        )
        self.stats = stats if stats is not None else SearchStats()
        if deadline is None and time_limit is not None:
            deadline = self.stats.start_time + time_limit
        self.deadline = deadline
        self.report_interval = report_interval
        self.out = out

        self.selection: list[Candidate] = []
        """Candidates placed on the current search branch."""

    def run(
        self, *, start: int = 0, placed: Sequence[Candidate] = ()
    ) -> CoverageSolution | None:
        """Search for a solution, optionally extending an initial placement.

        Args:
            start (int): Index of the first candidate that may be placed.
            placed (Sequence[Candidate]): Candidates already on the board.  They must be
                pairwise disjoint and non-crossing.

        Returns:
            The first solution found, or None if there is none.
        """
        self.selection = list(placed)
        board_mask = self._placed_mask()
        if placed and board_mask == self.full_mask:
            return self._solution(board_mask)
        if self._search(start, board_mask):
            return self._solution(self._placed_mask())
        return None

    def _placed_mask(self) -> int:
        mask = 0
        for candidate in self.selection:
            mask |= candidate.mask
        return mask

    def _solution(self, board_mask: int) -> CoverageSolution:
        return CoverageSolution(selected=tuple(self.selection), board_mask=board_mask)

    def _search(self, start: int, board_mask: int) -> bool:
        """Try to complete the cover using candidates from `start` onward.

        On success, `self.selection` holds the solution.  On failure, `self.selection` is left
        exactly as it was on entry.
        """
        depth = len(self.selection)
        if depth >= self.max_words:
            return False

        stats = self.stats
        stats.nodes_examined += 1
        stats.max_depth_reached = max(stats.max_depth_reached, depth)
        if self.report_interval and stats.nodes_examined % self.report_interval == 0:
            self._report(board_mask)

        if self.cover_index is not None and not self.cover_index.can_complete(
            board_mask, start, self.max_words - depth
        ):
            stats.branches_pruned += 1
            return False

        placed_paths = [c.path for c in self.selection]
        for idx in range(start, len(self.candidates)):
            if self.deadline is not None and time() > self.deadline:
                raise SearchTimeoutError(
                    f"No solution found within the time limit "
                    f"({int_comma(stats.nodes_examined)} states examined)."
                )

            candidate = self.candidates[idx]
            if overlaps(candidate.mask, board_mask):
                continue
            if crosses_any(placed_paths, candidate.path, self.width):
                continue

            # Tentative placement
            self.selection.append(candidate)
            new_mask = board_mask | candidate.mask
            if new_mask == self.full_mask:
                stats.max_depth_reached = max(stats.max_depth_reached, depth + 1)
                return True
            if depth + 1 < self.max_words and self._search(idx + 1, new_mask):
                return True
            self.selection.pop()

        return False

    def _report(self, board_mask: int) -> None:
        if self.out is None:
            return
        elapsed = time() - self.stats.start_time
        print(
            f"[{time_str(elapsed)}] states: {int_comma(self.stats.nodes_examined)}, "
            f"depth: {len(self.selection)}, "
            f"covered: {board_mask.bit_count()}/{self.full_mask.bit_count()}, "
            f"current: {' '.join(c.word for c in self.selection)}",
            file=self.out,
            flush=True,
        )


def solve(
    candidates: Sequence[Candidate],
    max_words: int,
    board_width: int,
    board_height: int,
    *,
    prune: bool = True,
    time_limit: float | None = None,
    report_interval: int = 0,
    out: TextIO | None = None,
    stats: SearchStats | None = None,
) -> CoverageSolution | None:
    """Find a selection of at most `max_words` candidates covering the whole board.

    The selected candidates are pairwise disjoint and their paths do not cross.  Candidates are
    tried in list order and the first full cover found is returned; other covers that may exist
    are not considered.

    Returns:
        The solution, or None if no selection covers the board.

    Raises:
        SearchTimeoutError: If `time_limit` seconds elapse before the search finishes.
    """
    search = CoverageSearch(
        candidates,
        max_words,
        board_width,
        board_height,
        prune=prune,
        time_limit=time_limit,
        report_interval=report_interval,
        out=out,
        stats=stats,
    )
    return search.run()
