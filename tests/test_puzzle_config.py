"""Tests for puzzle parsing and loading."""

import pytest

from strands.exceptions import InvalidPuzzleError
from strands.puzzle_config import PuzzleConfig, load_configs, parse_board


class TestParseBoard:
    def test_parse(self):
        assert parse_board("tal rgo esn") == ("talrgoesn", (3, 3))

    def test_non_square_and_case(self):
        assert parse_board("ABCD\nefgh") == ("abcdefgh", (2, 4))

    def test_strands_sized_board(self):
        letters, dims = parse_board("olwish heucbl sykoda ecpeny sheyub ranngm ormora hscksh")
        assert dims == (8, 6)
        assert letters[:6] == "olwish"
        assert len(letters) == 48

    @pytest.mark.parametrize(
        "rows",
        [
            "",
            "olwishd heucbl sykoda",  # first row too long
            "abc de",
            "ab1 cde",
        ],
    )
    def test_invalid(self, rows):
        with pytest.raises(InvalidPuzzleError):
            parse_board(rows)


class TestPuzzleConfig:
    def test_from_rows(self):
        config = PuzzleConfig.from_rows("tal rgo esn", max_words=2)
        assert config.letters == "talrgoesn"
        assert config.width == 3
        assert config.height == 3
        assert config.rows_str == "tal rgo esn"
        assert "tal rgo esn" in str(config)

    def test_invalid(self):
        with pytest.raises(InvalidPuzzleError):
            PuzzleConfig(letters="abc", dims=(2, 2), max_words=2)
        with pytest.raises(InvalidPuzzleError):
            PuzzleConfig(letters="abcd", dims=(2, 2), max_words=0)
        with pytest.raises(InvalidPuzzleError):
            PuzzleConfig(letters="ABCD", dims=(2, 2), max_words=2)


class TestLoadConfigs:
    def test_load(self, tmp_path):
        path = tmp_path / "puzzles.txt"
        path.write_text("2\n\ntal\nrgo\nesn\n\ncdp\namr\nsse\n", encoding="utf-8")
        configs = load_configs(path)
        assert [c.letters for c in configs] == ["talrgoesn", "cdpamrsse"]
        assert all(c.max_words == 2 for c in configs)

    def test_bad_header(self, tmp_path):
        path = tmp_path / "puzzles.txt"
        path.write_text("two\n\ntal\n", encoding="utf-8")
        with pytest.raises(InvalidPuzzleError):
            load_configs(path)

    def test_missing_blank_line(self, tmp_path):
        path = tmp_path / "puzzles.txt"
        path.write_text("2\ntal\nrgo\nesn\n", encoding="utf-8")
        with pytest.raises(InvalidPuzzleError):
            load_configs(path)
