"""JSON Lines reading and writing for pydantic models."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import BaseModel, ValidationError

from picsplit.errors import PicsplitError


class SerializationError(PicsplitError):
    """Raised when records cannot be written."""


class DeserializationError(PicsplitError):
    """Raised when a JSONL line cannot be parsed into a model.

    Parameters
    ----------
    message : str
        Error message.
    line_number : int | None
        1-based line number of the offending record.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


def write_jsonlines[T: BaseModel](
    records: Iterable[T], path: Path, append: bool = False
) -> None:
    """Write models to a JSONL file, one record per line.

    Parameters
    ----------
    records : Iterable[T]
        Models to write.
    path : Path
        Destination file. Parent directories are created.
    append : bool, default=False
        Append instead of overwriting.

    Raises
    ------
    SerializationError
        If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(path, "a" if append else "w", encoding="utf-8") as f:
            for record in records:
                f.write(record.model_dump_json() + "\n")
    except OSError as e:
        raise SerializationError(f"Failed to write {path}: {e}") from e


def stream_jsonlines[T: BaseModel](path: Path, model: type[T]) -> Iterator[T]:
    """Yield models from a JSONL file, skipping blank lines.

    Parameters
    ----------
    path : Path
        Source file.
    model : type[T]
        Model class used to validate each line.

    Yields
    ------
    T
        Validated records.

    Raises
    ------
    DeserializationError
        If a line is not valid JSON or does not validate.
    """
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield model.model_validate(json.loads(line))
            except (json.JSONDecodeError, ValidationError) as e:
                raise DeserializationError(str(e), line_number=line_number) from e


def read_jsonlines[T: BaseModel](path: Path, model: type[T]) -> list[T]:
    """Read all models from a JSONL file.

    Parameters
    ----------
    path : Path
        Source file.
    model : type[T]
        Model class used to validate each line.

    Returns
    -------
    list[T]
        Validated records in file order.
    """
    return list(stream_jsonlines(path, model))
