"""Module for word list management in Strands."""

import re
from collections import Counter
from collections.abc import Iterable
from functools import lru_cache
from os import PathLike
from pathlib import Path

from sortedcontainers import SortedList

VALID_WORD_PATTERN = re.compile(r"^[a-z]+$")
"""A usable word consists of lowercase ASCII letters only."""


def clean_words(lines: Iterable[str], *, min_len: int = 4) -> SortedList:
    """Clean raw dictionary lines into a sorted, deduplicated word list.

    Entries containing uppercase letters (proper nouns) and possessives ending in "'s" are
    dropped, as are entries with any character other than a-z.

    Args:
        lines: Raw dictionary entries, one word per entry.
        min_len: Minimum word length to include.
    """
    words: set[str] = set()
    for line in lines:
        word = line.strip()
        if not word:
            continue
        if any(ch.isupper() for ch in word) or word.endswith("'s"):
            continue
        if len(word) < min_len or not VALID_WORD_PATTERN.match(word):
            continue
        words.add(word)
    return SortedList(words)


def load_word_list(path: str | PathLike, *, min_len: int = 4) -> SortedList:
    """Load the word list from a dictionary file.

    Args:
        path: Path to a text file with one word per line.
        min_len: Minimum word length to include (defaults to 4).

    Returns:
        A sorted list of valid words.
    """
    word_list_path = Path(path)
    if not word_list_path.is_file():
        raise FileNotFoundError(f"Word list file not found: {word_list_path}")

    with word_list_path.open("r", encoding="utf-8") as f:
        return clean_words(f, min_len=min_len)


@lru_cache(maxsize=300_000)
def get_word_counter(word: str) -> Counter[str]:
    """Return a cached Counter for a word.

    Note: the returned Counter must be treated as immutable.
    """
    return Counter(word)


def is_playable(to_play: Counter[str], letters: Counter[str]) -> bool:
    """Returns whether the letters to play can be taken from the available letters.

    Args:
        to_play (Counter[str]): A counter of the letters needed.
        letters (Counter[str]): A counter of the available letters.
    """
    return all(to_play[ch] <= letters[ch] for ch in to_play)


def filter_playable(words: Iterable[str], letters: str) -> SortedList:
    """Keep only the words that can be spelled with the board letters.

    A word is traced along a path that never reuses a cell, so it cannot need more copies of a
    letter than the board has.
    """
    available = Counter(letters)
    return SortedList(w for w in words if is_playable(get_word_counter(w), available))
