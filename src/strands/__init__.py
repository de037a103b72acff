"""Strands Puzzle Solver.

Finds a set of dictionary words hidden in a rectangular letter grid.  Each word is traced along a
path of horizontally, vertically or diagonally adjacent cells; together the words use every cell
exactly once, and no two words' paths cross.  Uses backtracking over all traceable words to find
such a partition of the board.
"""

import argparse
import sys

from strands.exceptions import StrandsError
from strands.puzzle_config import PuzzleConfig, load_configs
from strands.solver import solver
from strands.solver.config import config as solver_config
from strands.wordlist import load_word_list


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strands",
        description="Find the words that partition a letter grid without crossing.",
    )
    parser.add_argument(
        "letters",
        nargs="?",
        help='Each row of letters, separated by a space. E.g. "abc def ghi".',
    )
    parser.add_argument("-f", "--file", help="Puzzle file with one or more boards")
    parser.add_argument(
        "-d",
        "--dictionary-file",
        default=solver_config.word_list_path,
        help="Dictionary file with one word per line",
    )
    parser.add_argument(
        "-m",
        "--max-words",
        type=int,
        default=None,
        help=f"Maximum number of words in a solution (default: {solver_config.max_words}); "
        "puzzle files give their own limit",
    )
    parser.add_argument(
        "--min-len",
        type=int,
        default=solver_config.min_word_length,
        help="Shortest dictionary word to consider",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        default=solver_config.use_parallel,
        help="Explore first-level branches in worker processes",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=solver_config.time_limit,
        help="Seconds after which to abandon the search",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the Strands solver."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.letters is None) == (args.file is None):
        parser.error("Give either the board letters or --file, but not both.")

    if args.file is not None and args.max_words is not None:
        parser.error("--max-words cannot be used with --file; the puzzle file sets the limit.")
    max_words = args.max_words if args.max_words is not None else solver_config.max_words

    try:
        if args.file is not None:
            configs = load_configs(args.file)
        else:
            configs = [PuzzleConfig.from_rows(args.letters, max_words)]
        words = load_word_list(args.dictionary_file, min_len=args.min_len)
    except (StrandsError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Loaded {len(words)} words from {args.dictionary_file}")

    unsolved = 0
    for config in configs:
        solution = solver.run(
            config, words=words, parallel=args.parallel, time_limit=args.time_limit
        )
        if solution is None:
            unsolved += 1
        print()
    if unsolved:
        sys.exit(1)
