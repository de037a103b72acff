"""Loader for puzzle definitions."""

from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from strands.exceptions import InvalidPuzzleError


def parse_board(rows: str) -> tuple[str, tuple[int, int]]:
    """Parse whitespace-separated rows of letters into a flat board.

    Example: "tal rgo esn" is a board of 3 rows and 3 columns.

    Returns:
        The letters in row-major order (lowercased), and the (height, width) of the board.

    Raises:
        InvalidPuzzleError: If there are no rows, the rows differ in length, or a row contains
            anything other than letters.
    """
    row_list = rows.split()
    if not row_list:
        raise InvalidPuzzleError("Board contains no rows.")

    width = len(row_list[0])
    for row in row_list:
        if len(row) != width:
            raise InvalidPuzzleError(
                f"Row '{row}' has {len(row)} letters, expected {width}."
            )
        if not row.isalpha():
            raise InvalidPuzzleError(f"Row '{row}' contains non-letter characters.")

    return "".join(row_list).lower(), (len(row_list), width)


@dataclass
class PuzzleConfig:
    """A puzzle configuration."""

    letters: str
    """The board letters, in row-major order."""

    dims: tuple[int, int]
    """The height and width of the puzzle grid."""

    max_words: int
    """Maximum number of words in a solution."""

    def __post_init__(self) -> None:
        """Validate the board."""
        height, width = self.dims
        if height <= 0 or width <= 0:
            raise InvalidPuzzleError(f"Invalid board dimensions {self.dims}.")
        if len(self.letters) != height * width:
            raise InvalidPuzzleError(
                f"Board letter count ({len(self.letters)}) does not match dimensions {self.dims}."
            )
        if not (self.letters.isalpha() and self.letters.islower()):
            raise InvalidPuzzleError("Board must contain only lowercase letters.")
        if self.max_words <= 0:
            raise InvalidPuzzleError(f"max_words must be positive, got {self.max_words}.")

    def __str__(self) -> str:
        """Return a string representation of the Config."""
        return f"{self.rows_str} ({self.dims[0]}x{self.dims[1]}, max {self.max_words} words)"

    @property
    def height(self) -> int:
        return self.dims[0]

    @property
    def width(self) -> int:
        return self.dims[1]

    @property
    def rows_str(self) -> str:
        """The board rows separated by spaces."""
        width = self.width
        return " ".join(
            self.letters[start : start + width] for start in range(0, len(self.letters), width)
        )

    @classmethod
    def from_rows(cls, rows: str, max_words: int) -> "PuzzleConfig":
        """Create a Config from whitespace-separated rows of letters."""
        letters, dims = parse_board(rows)
        return cls(letters=letters, dims=dims, max_words=max_words)


def load_configs(configs_path: str | PathLike) -> list[PuzzleConfig]:
    """Load puzzle configurations from the given path.

    The first line holds the maximum number of words per solution, followed by a blank line.
    Each board is then given as rows of letters, one row per line, with boards separated by
    blank lines.

    Args:
        configs_path (PathLike): Path to the puzzle file.
    """
    configs = []

    path = Path(configs_path).resolve()
    with open(path, "r", encoding="utf-8") as f:
        first_line = f.readline().strip()
        try:
            max_words = int(first_line)
        except ValueError:
            raise InvalidPuzzleError(f"Invalid word limit line: '{first_line}'") from None

        if f.readline().strip() != "":
            raise InvalidPuzzleError("Expected a blank line after the word limit.")

        # Read the board lines, each board is separated by a blank line
        while True:
            board_lines = []
            while True:
                line = f.readline()
                if not line or line.strip() == "":
                    break
                board_lines.append(line.strip())

            if not board_lines:
                break  # No more boards to read

            configs.append(PuzzleConfig.from_rows(" ".join(board_lines), max_words))

    return configs
