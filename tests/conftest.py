"""Shared fixtures for the Strands test suite."""

import pytest

from strands.board import Board
from strands.solver.candidates import find_all

EXAMPLE_WORDS = sorted(
    ["talon", "regs", "rage", "ogre", "ergo", "solar", "lose", "long", "glare", "nose"]
)


@pytest.fixture
def example_board() -> Board:
    """3x3 board:  t a l / r g o / e s n."""
    return Board.from_letters("talrgoesn", width=3, height=3)


@pytest.fixture
def example_words() -> list[str]:
    return list(EXAMPLE_WORDS)


@pytest.fixture
def example_candidates(example_board, example_words):
    return find_all(example_board, example_words)


@pytest.fixture
def crossing_board() -> Board:
    """3x3 board:  c d p / a m r / s s e."""
    return Board.from_letters("cdpamrsse", width=3, height=3)


@pytest.fixture
def crossing_candidates(crossing_board):
    return find_all(crossing_board, ["camp", "dress"])
