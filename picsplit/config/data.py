"""Input data configuration models for the picsplit package."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class DataConfig(BaseModel):
    """Configuration for reading candidate stimulus tables.

    Parameters
    ----------
    files : list[Path]
        Delimited files to read. Several files are inner-joined on the
        label column (e.g. one table per measure).
    separator : str
        Field separator.
    decimal : Literal[".", ","]
        Decimal mark used by numeric columns.
    id_column : str | None
        Column holding item identifiers. If None, labels are used as ids.
    label_column : str
        Column holding the canonical word for each picture.

    Examples
    --------
    >>> config = DataConfig()
    >>> config.separator
    ','
    >>> config.decimal
    '.'
    """

    files: list[Path] = Field(default_factory=list, description="Input tables")
    separator: str = Field(default=",", description="Field separator")
    decimal: Literal[".", ","] = Field(default=".", description="Decimal mark")
    id_column: str | None = Field(default=None, description="Identifier column")
    label_column: str = Field(default="label", description="Label column")

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """Validate separator is non-empty.

        Parameters
        ----------
        v : str
            Separator to validate.

        Returns
        -------
        str
            Validated separator.

        Raises
        ------
        ValueError
            If separator is empty.
        """
        if not v:
            raise ValueError("separator must be non-empty")
        return v
