"""Implementation of the parallel solver: task distribution and worker management.

Each first-level branch of the coverage search (the choice of the first word) is independent of
the others, so branches are submitted as separate tasks to a process pool.  Every task builds
its own search state; nothing is shared between tasks except the read-only candidate list, which
is sent once to each worker process by the pool initializer.
"""

import os
import traceback
from collections.abc import Sequence
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from time import time
from typing import Literal, TextIO

from strands.exceptions import SearchTimeoutError
from strands.solver.candidates import Candidate
from strands.solver.coverage import CoverageSearch, CoverageSolution, SearchStats
from strands.solver.pruning import CellCoverIndex
from strands.solver.utils import int_comma


@dataclass(kw_only=True)
class WorkerState:
    """Global state maintained by each worker process."""

    candidates: Sequence[Candidate]
    """Ordered candidate list shared by all tasks."""

    max_words: int
    """Maximum number of words in a solution."""

    board_width: int
    """Number of board columns."""

    board_height: int
    """Number of board rows."""

    prune: bool
    """Whether tasks use the pruning checks."""

    deadline: float | None
    """Absolute timestamp after which every task abandons its search."""


worker_state: WorkerState | None = None
"""Global state for each worker process."""


def init_worker_globals(
    candidates: Sequence[Candidate],
    max_words: int,
    board_width: int,
    board_height: int,
    prune: bool,
    deadline: float | None,
) -> None:
    """Initialize global variables for worker processes."""
    global worker_state  # noqa: PLW0603
    worker_state = WorkerState(
        candidates=candidates,
        max_words=max_words,
        board_width=board_width,
        board_height=board_height,
        prune=prune,
        deadline=deadline,
    )


@dataclass
class Result:
    """Wrapper for worker task results."""

    first_idx: int
    """Index of the candidate placed first in this branch."""

    status: Literal["success", "no_solution", "timeout", "error"]
    selected: tuple[Candidate, ...] | None
    nodes_examined: int = 0
    err_msg: str | None = None


def branch_task(first_idx: int) -> Result:
    """Search the branch in which `candidates[first_idx]` is the first word placed.

    Returns:
        A Result wrapper.  Exceptions are reported through the wrapper rather than raised.
    """
    try:
        if not worker_state:
            raise RuntimeError("Worker state not initialized. Call init_worker_globals first.")

        candidates = worker_state.candidates
        search = CoverageSearch(
            candidates,
            worker_state.max_words,
            worker_state.board_width,
            worker_state.board_height,
            prune=worker_state.prune,
            deadline=worker_state.deadline,
        )
        try:
            solution = search.run(start=first_idx + 1, placed=[candidates[first_idx]])
        except SearchTimeoutError as e:
            return Result(
                first_idx=first_idx,
                status="timeout",
                selected=None,
                nodes_examined=search.stats.nodes_examined,
                err_msg=str(e),
            )
        return Result(
            first_idx=first_idx,
            status="success" if solution is not None else "no_solution",
            selected=solution.selected if solution is not None else None,
            nodes_examined=search.stats.nodes_examined,
        )
    except Exception as e:
        return Result(
            first_idx=first_idx,
            status="error",
            selected=None,
            err_msg=f"Worker encountered an error: {str(e)}\n{traceback.format_exc()}",
        )


def get_executor(
    *,
    n_workers: int | None = None,
    candidates: Sequence[Candidate],
    max_words: int,
    board_width: int,
    board_height: int,
    prune: bool = True,
    deadline: float | None = None,
) -> ProcessPoolExecutor:
    """Get a ProcessPoolExecutor whose workers hold the candidate list.

    Args:
        n_workers (int | None): Number of worker processes to create.  If None,
            defaults to number of CPU cores minus one.
        candidates (Sequence[Candidate]): Ordered candidate list to pass to workers.
        max_words (int): Maximum number of words in a solution.
        board_width (int): Number of board columns.
        board_height (int): Number of board rows.
        prune (bool): Whether workers use the pruning checks.
        deadline (float | None): Absolute timestamp shared by all tasks as their time limit.

    Returns:
        A ProcessPoolExecutor instance for worker processes.
    """
    cpus = os.cpu_count() or 1  # Fallback to 1 if os.cpu_count() is None
    if n_workers is None:
        n_workers = max(1, cpus - 1)  # Leave one core free
    if n_workers > cpus:
        raise ValueError(
            f"Requested number of workers ({n_workers}) exceeds CPU count ({cpus})",
        )
    return ProcessPoolExecutor(
        max_workers=n_workers,
        initializer=init_worker_globals,
        initargs=(list(candidates), max_words, board_width, board_height, prune, deadline),
    )


def solve_parallel(
    candidates: Sequence[Candidate],
    max_words: int,
    board_width: int,
    board_height: int,
    *,
    n_workers: int | None = None,
    deterministic: bool = True,
    prune: bool = True,
    time_limit: float | None = None,
    out: TextIO | None = None,
    stats: SearchStats | None = None,
) -> CoverageSolution | None:
    """Find a covering word selection, exploring first-level branches in parallel.

    In deterministic mode, branch results are consumed in candidate order, so the returned
    solution is the one `coverage.solve` would return.  Otherwise the first branch to report a
    solution wins.  Once a solution is accepted, pending branches are cancelled.

    Returns:
        The solution, or None if no selection covers the board.

    Raises:
        SearchTimeoutError: If `time_limit` seconds elapse before the search finishes.
        RuntimeError: If a worker fails.
    """
    stats = stats if stats is not None else SearchStats()
    if max_words <= 0 or not candidates:
        return None

    if prune:
        cover_index = CellCoverIndex(candidates, board_width * board_height)
        if not cover_index.can_complete(0, 0, max_words):
            stats.branches_pruned += 1
            return None

    # One deadline for the whole search, shared by every branch
    deadline = stats.start_time + time_limit if time_limit is not None else None

    with get_executor(
        n_workers=n_workers,
        candidates=candidates,
        max_words=max_words,
        board_width=board_width,
        board_height=board_height,
        prune=prune,
        deadline=deadline,
    ) as executor:
        futures: list[Future[Result]] = [
            executor.submit(branch_task, first_idx) for first_idx in range(len(candidates))
        ]
        # Send tasks to worker processes, read results and return (early exit) the first
        # accepted solution
        ordered = futures if deterministic else as_completed(futures)
        try:
            for future in ordered:
                result = future.result()
                stats.nodes_examined += result.nodes_examined
                if result.status == "timeout":
                    raise SearchTimeoutError(result.err_msg)
                if result.status == "error":
                    raise RuntimeError(result.err_msg)
                if result.status == "success" and result.selected is not None:
                    if out is not None:
                        print(
                            f"Branch {result.first_idx} "
                            f"({candidates[result.first_idx].word}) found a solution.",
                            file=out,
                            flush=True,
                        )
                    stats.max_depth_reached = max(stats.max_depth_reached, len(result.selected))
                    board_mask = 0
                    for candidate in result.selected:
                        board_mask |= candidate.mask
                    return CoverageSolution(selected=result.selected, board_mask=board_mask)
                if deadline is not None and time() > deadline:
                    raise SearchTimeoutError(
                        f"No solution found within the time limit "
                        f"({int_comma(stats.nodes_examined)} states examined)."
                    )
        finally:
            # Queued branches are cancelled; leaving the `with` block still waits for the
            # branches already running to finish.
            executor.shutdown(wait=False, cancel_futures=True)

    # All branches completed, no solution found
    if out is not None:
        print("All first-level branches processed, no solution found.", file=out, flush=True)
    return None
