"""Utility functions for the Strands solver."""

from collections.abc import Sequence

import numpy as np

from strands.board import Board, neighbors
from strands.solver.candidates import Candidate
from strands.solver.geometry import crosses, overlaps

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"


def time_str(seconds: float) -> str:
    """Convert a time duration in seconds to a human-readable string.

    Args:
        seconds: Time duration in seconds.

    Returns:
        A string formatted as "HH:MM:SS.ss".
    """
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def int_comma(n: int) -> str:
    """Format an integer with commas as thousands separators."""
    return f"{n:,}"


def is_valid_candidate(board: Board, candidate: Candidate) -> bool:
    """Check that a candidate spells its word along a simple path of adjacent cells."""
    path = candidate.path
    if len(set(path)) != len(path) or board.word_at(path) != candidate.word:
        return False
    if candidate.mask != board.mask_of(path):
        return False
    return all(
        b in neighbors(a, board.width, board.height) for a, b in zip(path, path[1:])
    )


def validate_solution(board: Board, selected: Sequence[Candidate], max_words: int) -> bool:
    """Validate a word selection: full coverage, no overlaps, no crossings, within the limit."""
    if len(selected) > max_words:
        return False

    board_mask = 0
    for i, candidate in enumerate(selected):
        if not is_valid_candidate(board, candidate):
            return False
        if overlaps(board_mask, candidate.mask):
            return False
        for other in selected[:i]:
            if crosses(other.path, candidate.path, board.width):
                return False
        board_mask |= candidate.mask

    return board_mask == board.full_mask


def solution_grid(board: Board, selected: Sequence[Candidate]) -> np.ndarray:
    """Return a (n_rows, n_cols) array giving the 1-based word number covering each cell.

    Cells not covered by any word are 0.
    """
    grid = np.zeros(board.size, dtype=int)
    for number, candidate in enumerate(selected, start=1):
        grid[list(candidate.path)] = number
    return grid.reshape(board.n_rows, board.n_cols)


def format_solution(board: Board, selected: Sequence[Candidate]) -> str:
    """Render the board with each letter tagged by the number of the word covering it."""
    letters = board.to_array()
    numbers = solution_grid(board, selected)
    width = len(str(len(selected)))
    lines = []
    for row in range(board.n_rows):
        lines.append(
            " ".join(
                f"{letters[row, col].upper()}{numbers[row, col]:<{width}}"
                for col in range(board.n_cols)
            )
        )
    return "\n".join(lines)
