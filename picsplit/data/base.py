"""Base model shared by persisted picsplit records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from picsplit.data.identifiers import generate_uuid


def _now_utc() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(UTC)


def _empty_metadata() -> dict[str, Any]:
    """Return empty metadata dict."""
    return {}


class PicsplitBaseModel(BaseModel):
    """Base model with identifier, timestamps and free-form metadata.

    Attributes
    ----------
    id : UUID
        Unique identifier, generated on creation.
    created_at : datetime
        Creation time (UTC).
    modified_at : datetime
        Last modification time (UTC).
    version : str
        Schema version of the record.
    metadata : dict[str, Any]
        Free-form metadata.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=generate_uuid, description="Unique identifier")
    created_at: datetime = Field(default_factory=_now_utc)
    modified_at: datetime = Field(default_factory=_now_utc)
    version: str = Field(default="1.0.0", description="Schema version")
    metadata: dict[str, Any] = Field(default_factory=_empty_metadata)

    def update_modified_time(self) -> None:
        """Set modified_at to the current time."""
        self.modified_at = _now_utc()
