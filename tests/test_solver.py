"""Tests for the end-to-end solver and command-line entry point."""

import pytest

from strands import main
from strands.exceptions import InvalidDimensionsError, NoSolutionError
from strands.puzzle_config import PuzzleConfig
from strands.solver import solver
from strands.solver.config import SolverConfig
from strands.solver.config import config as solver_config
from strands.solver.solver import solve_puzzle


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(solver_config, "log_dir", str(tmp_path / "logs"))
    monkeypatch.setattr(solver_config, "use_parallel", False)
    monkeypatch.setattr(solver_config, "time_limit", None)
    return tmp_path / "logs"


@pytest.fixture
def dictionary(tmp_path, example_words):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(example_words + ["camp", "dress", "Talon"]), encoding="utf-8")
    return path


class TestSolvePuzzle:
    """Test the pure end-to-end entry point."""

    def test_example(self, example_words):
        solution = solve_puzzle("talrgoesn", 3, 3, example_words, 2)
        assert solution.words == ["talon", "regs"]
        assert solution.paths == [(0, 1, 2, 5, 8), (3, 6, 4, 7)]

    def test_parallel(self, example_words):
        solution = solve_puzzle("talrgoesn", 3, 3, example_words, 2, parallel=True, n_workers=1)
        assert solution.words == ["talon", "regs"]

    def test_no_solution(self):
        with pytest.raises(NoSolutionError):
            solve_puzzle("cdpamrsse", 3, 3, ["camp", "dress"], 2)

    def test_invalid_dimensions(self, example_words):
        with pytest.raises(InvalidDimensionsError):
            solve_puzzle("talrgoes", 3, 3, example_words, 2)


class TestRun:
    """Test the logging runner."""

    def test_solved(self, log_dir, example_words, capsys):
        puzzle = PuzzleConfig.from_rows("tal rgo esn", max_words=2)
        solution = solver.run(puzzle, words=example_words)
        assert solution is not None
        assert solution.words == ["talon", "regs"]

        log = (log_dir / "tal_rgo_esn.log").read_text(encoding="utf-8")
        assert "Solution found!" in log
        assert "T1 A1 L1" in log
        assert "talon" in capsys.readouterr().out

    def test_unsolved(self, log_dir, capsys):
        puzzle = PuzzleConfig.from_rows("cdp amr sse", max_words=2)
        assert solver.run(puzzle, words=["camp", "dress"]) is None
        log = (log_dir / "cdp_amr_sse.log").read_text(encoding="utf-8")
        assert "No solution found" in log
        assert "No solution found." in capsys.readouterr().out


class TestMain:
    """Test the command-line interface."""

    def test_letters(self, log_dir, dictionary, capsys):
        main(["tal rgo esn", "-d", str(dictionary), "-m", "2"])
        out = capsys.readouterr().out
        assert "talon" in out
        assert "regs" in out

    def test_no_solution_exit_code(self, log_dir, dictionary):
        with pytest.raises(SystemExit) as exc_info:
            main(["cdp amr sse", "-d", str(dictionary), "-m", "2"])
        assert exc_info.value.code == 1

    def test_puzzle_file(self, log_dir, dictionary, tmp_path, capsys):
        puzzles = tmp_path / "puzzles.txt"
        puzzles.write_text("2\n\ntal\nrgo\nesn\n", encoding="utf-8")
        main(["--file", str(puzzles), "-d", str(dictionary)])
        assert "regs" in capsys.readouterr().out

    def test_bad_board(self, log_dir, dictionary):
        with pytest.raises(SystemExit) as exc_info:
            main(["tal rg", "-d", str(dictionary)])
        assert exc_info.value.code == 1

    def test_letters_or_file_required(self, log_dir):
        with pytest.raises(SystemExit):
            main([])

    def test_max_words_with_file(self, log_dir, dictionary, tmp_path):
        """Puzzle files carry their own word limit, so -m is rejected rather than ignored."""
        puzzles = tmp_path / "puzzles.txt"
        puzzles.write_text("2\n\ntal\nrgo\nesn\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["--file", str(puzzles), "-d", str(dictionary), "-m", "3"])
        assert exc_info.value.code == 2

    def test_default_max_words(self, log_dir, dictionary, capsys):
        main(["tal rgo esn", "-d", str(dictionary)])
        assert f"Word limit: {solver_config.max_words}" in (
            log_dir / "tal_rgo_esn.log"
        ).read_text(encoding="utf-8")
        assert "talon" in capsys.readouterr().out

    def test_options_do_not_change_config(self, log_dir, dictionary, monkeypatch):
        """Command-line options reach the solver without modifying the shared config."""
        calls = []
        solve_puzzle_orig = solver.solve_puzzle

        def solve_puzzle_spy(*args, **kwargs):
            calls.append(kwargs)
            return solve_puzzle_orig(*args, **kwargs)

        monkeypatch.setattr(solver, "solve_puzzle", solve_puzzle_spy)
        main(["tal rgo esn", "-d", str(dictionary), "-m", "2", "--time-limit", "100"])
        assert calls[0]["time_limit"] == 100
        assert calls[0]["parallel"] is False
        assert solver_config.time_limit is None
        assert solver_config.use_parallel is False


class TestSolverConfig:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STRANDS_MAX_WORDS", "5")
        monkeypatch.setenv("STRANDS_USE_PARALLEL", "true")
        config = SolverConfig()
        assert config.max_words == 5
        assert config.use_parallel is True

    def test_defaults(self):
        config = SolverConfig()
        assert config.min_word_length == 4
        assert config.deterministic is True
