"""Identifier generation for picsplit records."""

from __future__ import annotations

from uuid import UUID, uuid4


def generate_uuid() -> UUID:
    """Generate a random UUID for a new record.

    Returns
    -------
    UUID
        A version 4 UUID.
    """
    return uuid4()
