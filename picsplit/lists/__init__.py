"""List models for the two balanced stimulus lists."""

from picsplit.lists.models import ExperimentList, ListCollection

__all__ = [
    "ExperimentList",
    "ListCollection",
]
