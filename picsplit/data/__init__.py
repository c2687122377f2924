"""Data infrastructure for picsplit package.

Provides the shared base model, identifiers and JSONL serialization.
"""

from __future__ import annotations

from picsplit.data.base import PicsplitBaseModel
from picsplit.data.identifiers import generate_uuid
from picsplit.data.serialization import (
    DeserializationError,
    SerializationError,
    read_jsonlines,
    stream_jsonlines,
    write_jsonlines,
)

__all__ = [
    "PicsplitBaseModel",
    "generate_uuid",
    "write_jsonlines",
    "read_jsonlines",
    "stream_jsonlines",
    "SerializationError",
    "DeserializationError",
]
