"""Main solver module for Strands puzzles."""

import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from time import time
from typing import TextIO

from strands.board import Board
from strands.exceptions import NoSolutionError, SearchTimeoutError
from strands.puzzle_config import PuzzleConfig
from strands.solver.candidates import find_all
from strands.solver.config import config as solver_config
from strands.solver.coverage import CoverageSolution, SearchStats, solve
from strands.solver.parallel import solve_parallel
from strands.solver.utils import (
    TIMESTAMP_FMT,
    format_solution,
    int_comma,
    time_str,
    validate_solution,
)
from strands.wordlist import filter_playable, load_word_list


def solve_puzzle(
    letters: str,
    width: int,
    height: int,
    words: Sequence[str],
    max_words: int,
    *,
    parallel: bool = False,
    n_workers: int | None = None,
    deterministic: bool = True,
    prune: bool = True,
    time_limit: float | None = None,
    report_interval: int = 0,
    out: TextIO | None = None,
    stats: SearchStats | None = None,
) -> CoverageSolution:
    """Find the words that partition a board, as a pure function of its inputs.

    Args:
        letters (str): Board letters in row-major order.
        width (int): Number of board columns.
        height (int): Number of board rows.
        words (Sequence[str]): Sorted, deduplicated word list.
        max_words (int): Maximum number of words in the solution.
        parallel (bool): Whether to explore first-level branches in worker processes.
        n_workers (int | None): Number of worker processes for parallel solving.
        deterministic (bool): Whether parallel solving must match sequential solving.
        prune (bool): Whether to use the search pruning checks.
        time_limit (float | None): Seconds after which to abandon the search.
        report_interval (int): Progress reporting interval, in search states.
        out (TextIO | None): Output stream for progress reports.
        stats (SearchStats | None): Statistics object to update.

    Raises:
        InvalidDimensionsError: If `letters` does not have `width * height` entries.
        NoSolutionError: If no selection of at most `max_words` words covers the board.
        SearchTimeoutError: If the time limit is exceeded.
    """
    board = Board.from_letters(letters, width, height)
    candidates = find_all(board, words)
    if out is not None:
        print(f"Found {int_comma(len(candidates))} candidates.", file=out, flush=True)

    if parallel:
        solution = solve_parallel(
            candidates,
            max_words,
            width,
            height,
            n_workers=n_workers,
            deterministic=deterministic,
            prune=prune,
            time_limit=time_limit,
            out=out,
            stats=stats,
        )
    else:
        solution = solve(
            candidates,
            max_words,
            width,
            height,
            prune=prune,
            time_limit=time_limit,
            report_interval=report_interval,
            out=out,
            stats=stats,
        )

    if solution is None:
        raise NoSolutionError(
            f"No selection of at most {max_words} words covers the board '{board}'."
        )
    return solution


def run(
    puzzle_config: PuzzleConfig,
    words: Sequence[str] | None = None,
    *,
    parallel: bool | None = None,
    time_limit: float | None = None,
) -> CoverageSolution | None:
    """Run the solver on the given puzzle, logging to a per-puzzle log file.

    Args:
        puzzle_config (PuzzleConfig): The puzzle to solve.
        words (Sequence[str] | None): Word list to use.  If None, it is loaded from the
            configured dictionary file.
        parallel (bool | None): Whether to solve in worker processes.  If None, the
            configured `use_parallel` is used.
        time_limit (float | None): Seconds after which to abandon the search.  If None, the
            configured `time_limit` is used.

    Returns:
        The solution, or None if there is none.
    """
    print(f"config: {puzzle_config}")

    logfile = Path(solver_config.log_dir) / f"{puzzle_config.rows_str.replace(' ', '_')}.log"
    print(f"Log file: {logfile}")

    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        try:
            return solve_one(
                puzzle_config,
                words=words,
                logf=logf,
                parallel=parallel,
                time_limit=time_limit,
            )
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            print("Solver interrupted by user.")
            sys.exit(1)


def solve_one(
    puzzle_config: PuzzleConfig,
    *,
    logf: TextIO,
    words: Sequence[str] | None = None,
    parallel: bool | None = None,
    time_limit: float | None = None,
) -> CoverageSolution | None:
    """Attempt to solve a Strands puzzle, reporting the outcome.

    Args:
        puzzle_config (PuzzleConfig): The puzzle to solve.
        logf: File object to log the solving process.
        words (Sequence[str] | None): Word list to use.  If None, it is loaded from the
            configured dictionary file.
        parallel (bool | None): Overrides the configured `use_parallel` unless None.
        time_limit (float | None): Overrides the configured `time_limit` unless None.
    """
    if parallel is None:
        parallel = solver_config.use_parallel
    if time_limit is None:
        time_limit = solver_config.time_limit

    board = Board.from_letters(puzzle_config.letters, puzzle_config.width, puzzle_config.height)
    print(f"Dimensions: {puzzle_config.dims}", file=logf, flush=True)
    print(f"Word limit: {puzzle_config.max_words}", file=logf, flush=True)
    print("Initial grid:", file=logf, flush=True)
    print("", file=logf, flush=True)
    for row in board.rows():
        print(row, file=logf, flush=True)
    print("", file=logf, flush=True)

    if words is None:
        words = load_word_list(
            solver_config.word_list_path, min_len=solver_config.min_word_length
        )
    playable = filter_playable(words, puzzle_config.letters)
    print(
        f"Dictionary: {int_comma(len(words))} words, {int_comma(len(playable))} playable.",
        file=logf,
        flush=True,
    )

    stats = SearchStats()
    start_time_str = datetime.fromtimestamp(stats.start_time).astimezone().strftime(TIMESTAMP_FMT)
    print(f"Start time: {start_time_str}", file=logf, flush=True)

    solution: CoverageSolution | None = None
    try:
        solution = solve_puzzle(
            puzzle_config.letters,
            puzzle_config.width,
            puzzle_config.height,
            playable,
            puzzle_config.max_words,
            parallel=parallel,
            n_workers=solver_config.max_workers,
            deterministic=solver_config.deterministic,
            prune=solver_config.prune,
            time_limit=time_limit,
            report_interval=solver_config.report_interval,
            out=logf,
            stats=stats,
        )
    except NoSolutionError as e:
        print(f"No solution found: {e}", file=logf, flush=True)
    except SearchTimeoutError as e:
        print(f"Search abandoned: {e}", file=logf, flush=True)

    elapsed = time_str(time() - stats.start_time)
    print(f"States examined: {int_comma(stats.nodes_examined)}", file=logf, flush=True)
    print(f"Branches pruned: {int_comma(stats.branches_pruned)}", file=logf, flush=True)
    print(f"Time taken: {elapsed}", file=logf, flush=True)

    if solution is None:
        print("No solution found.")
        return None

    if not validate_solution(board, solution.selected, puzzle_config.max_words):
        raise RuntimeError("Solver returned an invalid solution.")

    print("Solution found!", file=logf, flush=True)
    for stream in (logf, sys.stdout):
        for candidate in solution.selected:
            print(f"  {candidate.word:<12} {list(candidate.path)}", file=stream)
        print("", file=stream)
        print(format_solution(board, solution.selected), file=stream, flush=True)
    return solution
