"""Candidate stimulus items, pool construction and input loading."""

from __future__ import annotations

from picsplit.items.loading import build_pool, load_items, select_candidates
from picsplit.items.models import StimulusItem, StimulusPool

__all__ = [
    "StimulusItem",
    "StimulusPool",
    "load_items",
    "select_candidates",
    "build_pool",
]
