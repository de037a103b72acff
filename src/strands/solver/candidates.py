"""Enumeration of the dictionary words that can be traced on a board."""

from bisect import bisect_left
from collections.abc import Sequence
from typing import NamedTuple

from strands.board import Board


class Candidate(NamedTuple):
    """A word traced along a path of adjacent board cells."""

    word: str
    """The word spelled by the path."""

    path: tuple[int, ...]
    """1D cell indices visited by the word, in order.  No cell appears twice."""

    mask: int
    """Bit mask of the cells in `path`."""


def prefix_range(words: Sequence[str], prefix: str, lo: int = 0, hi: int | None = None) -> range:
    """Return the index range of entries in `words[lo:hi]` starting with `prefix`.

    `words` must be sorted.  Words sharing a prefix are therefore contiguous, and the first entry
    of the returned range equals `prefix` if and only if `prefix` itself is a word.
    """
    if hi is None:
        hi = len(words)
    if not prefix:
        return range(lo, hi)
    start = bisect_left(words, prefix, lo, hi)
    # Smallest string greater than every string that starts with `prefix`
    upper = prefix[:-1] + chr(ord(prefix[-1]) + 1)
    return range(start, bisect_left(words, upper, start, hi))


def find_from(board: Board, start_idx: int, words: Sequence[str]) -> list[Candidate]:
    """Find every word in `words` that can be traced on `board` starting at `start_idx`.

    Performs a depth-first traversal over simple paths of adjacent cells, pruning a branch as
    soon as no word starts with the letters spelled so far.  Candidates are emitted in
    pre-order: a word is listed before any longer word extending the same path.

    A word is only matched after extending the path by at least one cell, so one-letter words
    are never emitted.

    Args:
        board: The letter grid.
        start_idx: 1D index of the first cell of each path.
        words: Sorted, deduplicated word list.
    """
    found: list[Candidate] = []
    path = [start_idx]
    in_path = 1 << start_idx

    def _extend(prefix: str, span: range) -> None:
        nonlocal in_path
        for nbr in board.neighbors_of(path[-1]):
            if in_path >> nbr & 1:
                continue  # No cell reuse within one word
            word = prefix + board[nbr]
            sub_span = prefix_range(words, word, span.start, span.stop)
            if not sub_span:
                continue  # Prefix pruning
            path.append(nbr)
            in_path |= 1 << nbr
            if words[sub_span.start] == word:
                found.append(Candidate(word, tuple(path), in_path))
            _extend(word, sub_span)
            in_path &= ~(1 << nbr)
            path.pop()

    first = board[start_idx]
    span = prefix_range(words, first)
    if span:
        _extend(first, span)
    return found


def find_all(board: Board, words: Sequence[str]) -> list[Candidate]:
    """Find the candidates for every starting cell of the board.

    Candidates are ordered by starting cell index (ascending), then in the order produced by
    `find_from`.
    """
    candidates: list[Candidate] = []
    for start_idx in range(board.size):
        candidates.extend(find_from(board, start_idx, words))
    return candidates
