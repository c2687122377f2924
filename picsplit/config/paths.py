"""Output path configuration models for the picsplit package."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class PathsConfig(BaseModel):
    """Configuration for output locations.

    Parameters
    ----------
    lists_file : Path
        JSONL file receiving the two experiment lists.
    summary_csv : Path | None
        Optional CSV file receiving the summary statistics.

    Examples
    --------
    >>> config = PathsConfig()
    >>> config.lists_file
    PosixPath('lists.jsonl')
    """

    lists_file: Path = Field(default=Path("lists.jsonl"), description="Lists output")
    summary_csv: Path | None = Field(default=None, description="Summary CSV output")
