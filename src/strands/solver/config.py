"""Strands solver configuration."""

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the Strands solver."""

    deterministic: bool = True
    """Whether parallel solving returns the same solution as sequential solving. Default: True.

    If False, the parallel solver returns whichever first-level branch finishes first.
    """

    use_parallel: bool = False
    """Whether to explore first-level branches in worker processes. Default: False."""

    max_workers: int | None = None
    """Maximum number of worker processes to use. If None (default), uses os.cpu_count() - 1."""

    min_word_length: int = 4
    """Shortest dictionary word to consider. Default: 4."""

    max_words: int = 8
    """Maximum number of words in a solution, used when a puzzle does not specify one."""

    report_interval: int = 100_000
    """Interval (in number of search states) at which to report progress. Default: 100000."""

    time_limit: float | None = None
    """Seconds after which to abandon the search. If None (default), no limit."""

    prune: bool = True
    """Whether to discard search states from which no full cover is reachable. Default: True."""

    word_list_path: str = "words.txt"

    log_dir: str = "logs"
    """Directory for per-puzzle log files."""

    model_config = SettingsConfigDict(
        env_prefix="STRANDS_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SolverConfig()
