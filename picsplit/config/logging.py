"""Logging configuration models for the picsplit package."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    """Configuration for standard library logging.

    Parameters
    ----------
    level : LogLevel
        Root log level.
    format : str
        Log record format.

    Examples
    --------
    >>> config = LoggingConfig()
    >>> config.level
    'INFO'
    """

    level: LogLevel = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )

    def apply(self) -> None:
        """Configure the root logger with this level and format."""
        logging.basicConfig(
            level=getattr(logging, self.level), format=self.format, force=True
        )
