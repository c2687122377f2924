"""End-to-end balancing: pool to lists and summary statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from picsplit.balancing.normalize import zscore
from picsplit.balancing.search import Partition, PartitionSearch, ProgressCallback
from picsplit.balancing.similarity import SimilarityIndex
from picsplit.balancing.summary import SummaryTable, summarize_partition
from picsplit.config.config import PicsplitConfig
from picsplit.config.search import SearchConfig
from picsplit.items.loading import build_pool, load_items, select_candidates
from picsplit.items.models import StimulusPool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceResult:
    """Outputs of one balancing run.

    Attributes
    ----------
    pool : StimulusPool
        The partitioned pool.
    features : np.ndarray
        Standardized covariates, rows in pool order.
    index : SimilarityIndex
        Pair similarity lookup.
    partition : Partition
        Best partition found.
    summary : SummaryTable
        Per-list statistics of the raw covariates.
    """

    pool: StimulusPool
    features: np.ndarray
    index: SimilarityIndex
    partition: Partition
    summary: SummaryTable


def balance_pool(
    pool: StimulusPool,
    search_config: SearchConfig | None = None,
    progress: ProgressCallback | None = None,
) -> BalanceResult:
    """Split a pool into two lists matched on its covariates.

    Parameters
    ----------
    pool : StimulusPool
        Validated candidate pool.
    search_config : SearchConfig | None
        Search settings; defaults when None.
    progress : ProgressCallback | None
        Forwarded to :meth:`PartitionSearch.run`.

    Returns
    -------
    BalanceResult
        Intermediate and final outputs.
    """
    search_config = search_config or SearchConfig()

    features = zscore(pool.covariate_matrix(), pool.covariate_names)
    index = SimilarityIndex.from_features(pool.ids, features)
    logger.info(f"Computed {len(index)} pair similarities for {len(pool)} items")

    partition = PartitionSearch.from_config(index, search_config).run(progress=progress)
    summary = summarize_partition(pool, partition)
    return BalanceResult(
        pool=pool, features=features, index=index, partition=partition, summary=summary
    )


def prepare_pool(config: PicsplitConfig) -> StimulusPool:
    """Load, filter and validate the candidate pool described by a config.

    Parameters
    ----------
    config : PicsplitConfig
        Configuration with data and pool sections.

    Returns
    -------
    StimulusPool
        Validated pool of ``config.pool.pool_size`` items.
    """
    covariates = config.pool.covariates
    # name agreement ranks candidates even when the lists are not matched on it
    items = load_items(
        config.data, covariates, extra_columns=[config.pool.name_agreement_column]
    )
    selected = select_candidates(
        items,
        pool_size=config.pool.pool_size,
        name_agreement_column=config.pool.name_agreement_column,
        name_agreement_max=config.pool.name_agreement_max,
    )
    return build_pool(selected, covariates)
