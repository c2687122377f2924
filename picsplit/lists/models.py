"""Data models for the two selected stimulus lists.

Lists use stand-off annotation: they store item identifiers (with their
labels for readability), not the full item records.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from picsplit.balancing.search import Partition
from picsplit.balancing.summary import GROUP_NAMES, SummaryTable
from picsplit.data.base import PicsplitBaseModel
from picsplit.items.models import StimulusPool


# Factory functions for default values
def _empty_str_list() -> list[str]:
    """Return empty string list."""
    return []


def _empty_any_dict() -> dict[str, Any]:
    """Return empty string-to-Any dict."""
    return {}


def _empty_experiment_list_list() -> list[ExperimentList]:
    """Return empty ExperimentList list."""
    return []


class ExperimentList(PicsplitBaseModel):
    """One list of stimuli for presentation to participants.

    Attributes
    ----------
    name : str
        Name of this list (e.g., "list_a").
    list_number : int
        Numeric identifier for this list (must be >= 0).
    item_refs : list[str]
        Identifiers of items in this list, in list order.
    labels : list[str]
        Labels of the items, parallel to item_refs.
    balance_metrics : dict[str, Any]
        Descriptive statistics of the list's covariates.

    Examples
    --------
    >>> exp_list = ExperimentList(name="list_a", list_number=0)
    >>> exp_list.add_item("p001", "apple")
    >>> exp_list.item_refs
    ['p001']
    """

    name: str = Field(..., description="List name")
    list_number: int = Field(..., ge=0, description="Numeric list identifier")
    item_refs: list[str] = Field(
        default_factory=_empty_str_list, description="Item ids (stand-off)"
    )
    labels: list[str] = Field(default_factory=_empty_str_list, description="Labels")
    balance_metrics: dict[str, Any] = Field(
        default_factory=_empty_any_dict, description="Balance metrics"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name is non-empty.

        Parameters
        ----------
        v : str
            Name to validate.

        Returns
        -------
        str
            Validated name (whitespace stripped).

        Raises
        ------
        ValueError
            If name is empty or contains only whitespace.
        """
        if not v or not v.strip():
            raise ValueError("name must be non-empty")
        return v.strip()

    def add_item(self, item_id: str, label: str) -> None:
        """Append an item to this list.

        Parameters
        ----------
        item_id : str
            Identifier of the item.
        label : str
            Label of the item.

        Raises
        ------
        ValueError
            If the item is already in the list.
        """
        if item_id in self.item_refs:
            raise ValueError(f"Item {item_id} already in list {self.name}")
        self.item_refs.append(item_id)
        self.labels.append(label)
        self.update_modified_time()


class ListCollection(PicsplitBaseModel):
    """The lists produced by one balancing run.

    Attributes
    ----------
    name : str
        Name of this collection.
    lists : list[ExperimentList]
        The experiment lists.
    partitioning_strategy : str
        Strategy used for partitioning.
    partitioning_config : dict[str, Any]
        Configuration used for partitioning.
    partitioning_stats : dict[str, Any]
        Statistics about the partitioning process (score, iteration).

    Examples
    --------
    >>> collection = ListCollection(name="run", partitioning_strategy="random_search")
    >>> collection.add_list(ExperimentList(name="list_a", list_number=0))
    >>> collection.get_list_by_number(0).name
    'list_a'
    """

    name: str = Field(..., description="Collection name")
    lists: list[ExperimentList] = Field(
        default_factory=_empty_experiment_list_list, description="Experiment lists"
    )
    partitioning_strategy: str = Field(..., description="Partitioning strategy used")
    partitioning_config: dict[str, Any] = Field(
        default_factory=_empty_any_dict, description="Partitioning configuration"
    )
    partitioning_stats: dict[str, Any] = Field(
        default_factory=_empty_any_dict, description="Partitioning statistics"
    )

    @field_validator("name", "partitioning_strategy")
    @classmethod
    def validate_non_empty_string(cls, v: str) -> str:
        """Validate string fields are non-empty.

        Raises
        ------
        ValueError
            If string is empty or contains only whitespace.
        """
        if not v or not v.strip():
            raise ValueError("Field must be non-empty")
        return v.strip()

    @field_validator("lists")
    @classmethod
    def validate_unique_list_numbers(
        cls, v: list[ExperimentList]
    ) -> list[ExperimentList]:
        """Validate all list_numbers are unique.

        Raises
        ------
        ValueError
            If duplicate list_numbers found.
        """
        list_numbers = [exp_list.list_number for exp_list in v]
        if len(list_numbers) != len(set(list_numbers)):
            duplicates = [num for num in list_numbers if list_numbers.count(num) > 1]
            raise ValueError(f"Duplicate list_numbers found: {set(duplicates)}")
        return v

    def add_list(self, exp_list: ExperimentList) -> None:
        """Add a list to the collection.

        Raises
        ------
        ValueError
            If a list with the same number already exists.
        """
        if self.get_list_by_number(exp_list.list_number) is not None:
            raise ValueError(f"Duplicate list_number {exp_list.list_number}")
        self.lists.append(exp_list)
        self.update_modified_time()

    def get_list_by_number(self, list_number: int) -> ExperimentList | None:
        """Get a list by its number, or None if not found."""
        for exp_list in self.lists:
            if exp_list.list_number == list_number:
                return exp_list
        return None

    def validate_coverage(self, all_item_ids: set[str]) -> dict[str, Any]:
        """Check that all items are assigned exactly once.

        Parameters
        ----------
        all_item_ids : set[str]
            Identifiers of every item that should be assigned.

        Returns
        -------
        dict[str, Any]
            Validation report with keys:
            - "valid": bool - Whether validation passed
            - "missing_items": list[str] - Items not assigned to any list
            - "duplicate_items": list[str] - Items assigned more than once
            - "unknown_items": list[str] - Assigned items not in all_item_ids
            - "total_assigned": int - Total assignments across all lists
        """
        item_counts: dict[str, int] = {}
        for exp_list in self.lists:
            for item_id in exp_list.item_refs:
                item_counts[item_id] = item_counts.get(item_id, 0) + 1

        assigned_items = set(item_counts)
        missing_items = sorted(all_item_ids - assigned_items)
        unknown_items = sorted(assigned_items - all_item_ids)
        duplicate_items = sorted(
            item_id for item_id, count in item_counts.items() if count > 1
        )

        return {
            "valid": not (missing_items or duplicate_items or unknown_items),
            "missing_items": missing_items,
            "duplicate_items": duplicate_items,
            "unknown_items": unknown_items,
            "total_assigned": sum(item_counts.values()),
        }

    @classmethod
    def from_partition(
        cls,
        pool: StimulusPool,
        partition: Partition,
        summary: SummaryTable,
        name: str = "balanced_lists",
        partitioning_config: dict[str, Any] | None = None,
    ) -> ListCollection:
        """Build the two-list collection for a chosen partition.

        Parameters
        ----------
        pool : StimulusPool
            The partitioned pool.
        partition : Partition
            Chosen partition (positions into ``pool``).
        summary : SummaryTable
            Statistics of the partition, stored as balance metrics.
        name : str, default="balanced_lists"
            Collection name.
        partitioning_config : dict[str, Any] | None
            Settings used to find the partition.

        Returns
        -------
        ListCollection
            Collection with list A (number 0) and list B (number 1).
        """
        collection = cls(
            name=name,
            partitioning_strategy="random_search",
            partitioning_config=partitioning_config or {},
            partitioning_stats={
                "score": partition.score,
                "iteration": partition.iteration,
                "pool_item_ids": list(pool.ids),
                "pairs": [
                    [pool.items[a].item_id, pool.items[b].item_id]
                    for a, b in partition.pairs()
                ],
            },
        )
        for number, (list_name, positions, group) in enumerate(
            zip(
                GROUP_NAMES,
                (partition.group_a, partition.group_b),
                summary.groups,
                strict=True,
            )
        ):
            exp_list = ExperimentList(name=list_name, list_number=number)
            for position in positions:
                item = pool.items[position]
                exp_list.add_item(item.item_id, item.label)
            exp_list.balance_metrics = {"means": group.means, "sds": group.sds}
            collection.add_list(exp_list)
        return collection
