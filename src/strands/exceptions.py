"""Exception hierarchy for the Strands solver."""


class StrandsError(Exception):
    """Base exception for solver failures."""


class InvalidDimensionsError(StrandsError, ValueError):
    """Raised when the board letters do not match the given width and height."""


class InvalidPuzzleError(StrandsError, ValueError):
    """Raised when puzzle input (rows of letters, puzzle files) cannot be parsed."""


class NoSolutionError(StrandsError):
    """Raised when no covering word selection exists within the word limit."""


class SearchTimeoutError(StrandsError):
    """Raised when the coverage search exceeds its time limit."""
