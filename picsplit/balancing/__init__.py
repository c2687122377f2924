"""Balancing of two stimulus lists.

The stages run leaf-first: covariates are standardized (``normalize``),
pairwise cosine similarities are computed and indexed (``similarity``),
random bipartitions are searched for the best-matched split (``search``),
and the winning lists are described (``summary``). ``pipeline`` wires the
stages together.
"""

from picsplit.balancing.normalize import zscore
from picsplit.balancing.pipeline import BalanceResult, balance_pool, prepare_pool
from picsplit.balancing.search import (
    Partition,
    PartitionSearch,
    enumerate_partitions,
    exhaustive_search,
    sample_partition,
    score_partition,
)
from picsplit.balancing.similarity import (
    SimilarityIndex,
    condensed_position,
    n_pairs,
    pairwise_cosine,
)
from picsplit.balancing.summary import (
    GroupSummary,
    SummaryTable,
    describe,
    summarize_partition,
)

__all__ = [
    # Normalization
    "zscore",
    # Similarity
    "pairwise_cosine",
    "SimilarityIndex",
    "condensed_position",
    "n_pairs",
    # Search
    "Partition",
    "PartitionSearch",
    "sample_partition",
    "score_partition",
    "enumerate_partitions",
    "exhaustive_search",
    # Summary
    "GroupSummary",
    "SummaryTable",
    "describe",
    "summarize_partition",
    # Pipeline
    "BalanceResult",
    "balance_pool",
    "prepare_pool",
]
