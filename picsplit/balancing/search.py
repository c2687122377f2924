"""Randomized search for the best-balanced bipartition of the pool.

Each iteration draws a uniformly random permutation of the 2N pool
positions. The first N drawn positions form list A in draw order; the
remaining positions form list B in ascending (pool) order. A partition is
scored by pairing the i-th item of A with the i-th item of B and averaging
the N pair similarities. Only the best partition seen so far is kept; ties
go to the earliest iteration.

Permutations are obtained by arg-sorting one row of uniform draws per
iteration. Draws are consumed row by row from a single generator, so the
winner depends only on the seed and the iteration budget, not on how the
iterations are batched.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from concurrent.futures import ProcessPoolExecutor
from itertools import permutations

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from picsplit.balancing.similarity import SimilarityIndex
from picsplit.config.search import SearchConfig

logger = logging.getLogger(__name__)

# Type aliases for clarity
type ProgressCallback = Callable[[int, int], None]  # (iterations done, total)
type _RangeResult = tuple[float, int, np.ndarray, np.ndarray]

MAX_EXHAUSTIVE_POOL_SIZE = 12


class Partition(BaseModel):
    """A split of the pool into two equal-size lists.

    Attributes
    ----------
    group_a : tuple[int, ...]
        Pool positions of list A, in draw order.
    group_b : tuple[int, ...]
        Pool positions of list B, in ascending order.
    score : float
        Mean similarity of the positional pairs ``(group_a[i], group_b[i])``.
    iteration : int
        0-based iteration at which the partition was drawn.

    Examples
    --------
    >>> partition = Partition(group_a=(2, 0), group_b=(1, 3), score=0.5, iteration=0)
    >>> partition.pairs()
    [(2, 1), (0, 3)]
    >>> partition.covers(4)
    True
    """

    model_config = ConfigDict(frozen=True)

    group_a: tuple[int, ...]
    group_b: tuple[int, ...]
    score: float
    iteration: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_groups(self) -> Partition:
        """Validate the two lists are non-empty, equal-size and disjoint.

        Returns
        -------
        Partition
            Validated partition.

        Raises
        ------
        ValueError
            If the lists are empty, differ in size, repeat a position or
            share a position.
        """
        if not self.group_a:
            raise ValueError("Partition lists must be non-empty")
        if len(self.group_a) != len(self.group_b):
            raise ValueError(
                f"Lists differ in size: {len(self.group_a)} != {len(self.group_b)}"
            )
        set_a, set_b = set(self.group_a), set(self.group_b)
        if len(set_a) != len(self.group_a) or len(set_b) != len(self.group_b):
            raise ValueError("Partition lists contain repeated positions")
        shared = set_a & set_b
        if shared:
            raise ValueError(f"Positions assigned to both lists: {sorted(shared)}")
        return self

    @property
    def half_size(self) -> int:
        """Size N of each list."""
        return len(self.group_a)

    def pairs(self) -> list[tuple[int, int]]:
        """Return the positional ``(a, b)`` pairs the score averages over."""
        return list(zip(self.group_a, self.group_b, strict=True))

    def covers(self, pool_size: int) -> bool:
        """Check that the two lists together are exactly ``range(pool_size)``."""
        return set(self.group_a) | set(self.group_b) == set(range(pool_size))


def _split_permutations(keys: np.ndarray, half: int) -> tuple[np.ndarray, np.ndarray]:
    """Turn rows of uniform draws into (A in draw order, B ascending)."""
    order = np.argsort(keys, axis=1, kind="stable")
    return order[:, :half], np.sort(order[:, half:], axis=1)


def sample_partition(
    rng: np.random.Generator, pool_size: int
) -> tuple[np.ndarray, np.ndarray]:
    """Draw one random bipartition of ``range(pool_size)``.

    Parameters
    ----------
    rng : np.random.Generator
        Random source; advanced by ``pool_size`` draws.
    pool_size : int
        Even number of pool positions.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        List A in draw order and list B in ascending order.
    """
    if pool_size < 2 or pool_size % 2 != 0:
        raise ValueError(f"Pool size must be even and >= 2, got {pool_size}")
    group_a, group_b = _split_permutations(rng.random((1, pool_size)), pool_size // 2)
    return group_a[0], group_b[0]


def score_partition(
    matrix: np.ndarray, group_a: np.ndarray, group_b: np.ndarray
) -> float:
    """Return the mean similarity of the positional pairs of two lists.

    Parameters
    ----------
    matrix : np.ndarray
        Square similarity matrix.
    group_a, group_b : np.ndarray
        Equal-length position arrays.

    Returns
    -------
    float
        ``mean(matrix[group_a[i], group_b[i]])``.
    """
    return float(np.mean(matrix[np.asarray(group_a), np.asarray(group_b)]))


def _search_range(
    matrix: np.ndarray,
    iterations: int,
    seed: int | np.random.SeedSequence,
    batch_size: int,
    start_iteration: int = 0,
    progress: ProgressCallback | None = None,
    total: int | None = None,
) -> _RangeResult:
    """Search ``iterations`` random partitions and return the best one.

    Returns ``(score, global_iteration, group_a, group_b)``.
    """
    rng = np.random.default_rng(seed)
    n_items = matrix.shape[0]
    half = n_items // 2

    best: _RangeResult | None = None
    done = 0
    while done < iterations:
        size = min(batch_size, iterations - done)
        group_a, group_b = _split_permutations(rng.random((size, n_items)), half)
        scores = matrix[group_a, group_b].mean(axis=1)
        k = int(np.argmax(scores))
        if best is None or scores[k] > best[0]:
            best = (
                float(scores[k]),
                start_iteration + done + k,
                group_a[k].copy(),
                group_b[k].copy(),
            )
        done += size
        if progress is not None:
            progress(start_iteration + done, total or iterations)

    assert best is not None
    return best


def _search_worker(
    args: tuple[np.ndarray, int, np.random.SeedSequence, int, int],
) -> _RangeResult:
    matrix, iterations, seed, batch_size, start = args
    return _search_range(matrix, iterations, seed, batch_size, start)


def _to_partition(result: _RangeResult) -> Partition:
    score, iteration, group_a, group_b = result
    return Partition(
        group_a=tuple(int(i) for i in group_a),
        group_b=tuple(int(i) for i in group_b),
        score=score,
        iteration=iteration,
    )


class PartitionSearch:
    """Randomized best-of-K search over equal-size bipartitions.

    Parameters
    ----------
    index : SimilarityIndex
        Precomputed pair similarities for an even-sized pool.
    iterations : int, default=1_000_000
        Number of random partitions to score.
    seed : int, default=42
        Seed of the random generator.
    batch_size : int, default=10_000
        Iterations scored together; does not affect the result.
    n_workers : int, default=1
        Worker processes. With more than one worker, the budget is split
        into contiguous shares searched with seeds spawned from ``seed``,
        and the best share result wins (ties to the lowest iteration).

    Examples
    --------
    >>> import numpy as np
    >>> index = SimilarityIndex.from_features(
    ...     ["a", "b", "c", "d"],
    ...     np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0], [-1.0, -1.0]]),
    ... )
    >>> best = PartitionSearch(index, iterations=100, seed=1).run()
    >>> best.covers(4)
    True
    """

    def __init__(
        self,
        index: SimilarityIndex,
        iterations: int = 1_000_000,
        seed: int = 42,
        batch_size: int = 10_000,
        n_workers: int = 1,
    ) -> None:
        if index.n_items < 2 or index.n_items % 2 != 0:
            raise ValueError(f"Pool size must be even and >= 2, got {index.n_items}")
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {n_workers}")

        self.index = index
        self.iterations = iterations
        self.seed = seed
        self.batch_size = batch_size
        self.n_workers = n_workers

    @classmethod
    def from_config(
        cls, index: SimilarityIndex, config: SearchConfig
    ) -> PartitionSearch:
        """Create a search from a SearchConfig."""
        return cls(
            index,
            iterations=config.iterations,
            seed=config.seed,
            batch_size=config.batch_size,
            n_workers=config.n_workers,
        )

    def run(self, progress: ProgressCallback | None = None) -> Partition:
        """Run the search and return the best partition.

        Parameters
        ----------
        progress : ProgressCallback | None
            Called with ``(iterations_done, iterations_total)`` after each
            batch (single worker) or each finished share (several workers).

        Returns
        -------
        Partition
            Highest-scoring partition, earliest on ties.
        """
        logger.info(
            f"Searching {self.iterations} partitions of {self.index.n_items} items "
            f"(seed={self.seed}, workers={self.n_workers})"
        )
        matrix = self.index.matrix
        if self.n_workers == 1:
            result = _search_range(
                matrix,
                self.iterations,
                self.seed,
                self.batch_size,
                progress=progress,
            )
        else:
            result = self._run_parallel(matrix, progress)

        partition = _to_partition(result)
        logger.info(
            f"Best partition score {partition.score:.6f} "
            f"at iteration {partition.iteration}"
        )
        return partition

    def _run_parallel(
        self, matrix: np.ndarray, progress: ProgressCallback | None
    ) -> _RangeResult:
        n_shares = min(self.n_workers, self.iterations)
        base, extra = divmod(self.iterations, n_shares)
        sizes = [base + (1 if i < extra else 0) for i in range(n_shares)]
        starts = [sum(sizes[:i]) for i in range(n_shares)]
        seeds = np.random.SeedSequence(self.seed).spawn(n_shares)
        tasks = [
            (matrix, size, child, self.batch_size, start)
            for size, child, start in zip(sizes, seeds, starts, strict=True)
        ]

        results: list[_RangeResult] = []
        with ProcessPoolExecutor(max_workers=n_shares) as executor:
            for result in executor.map(_search_worker, tasks):
                results.append(result)
                if progress is not None:
                    progress(sum(sizes[: len(results)]), self.iterations)

        return max(results, key=lambda r: (r[0], -r[1]))


def enumerate_partitions(
    pool_size: int,
) -> Iterator[tuple[tuple[int, ...], tuple[int, ...]]]:
    """Yield every (A in draw order, B ascending) split of ``range(pool_size)``.

    Draw order is part of a partition's identity because of positional
    pairing, so this yields ``pool_size! / N!`` splits.

    Parameters
    ----------
    pool_size : int
        Even number of pool positions.

    Yields
    ------
    tuple[tuple[int, ...], tuple[int, ...]]
        List A and list B.
    """
    if pool_size < 2 or pool_size % 2 != 0:
        raise ValueError(f"Pool size must be even and >= 2, got {pool_size}")
    positions = range(pool_size)
    for group_a in permutations(positions, pool_size // 2):
        chosen = set(group_a)
        yield group_a, tuple(i for i in positions if i not in chosen)


def exhaustive_search(index: SimilarityIndex) -> Partition:
    """Score every split of a small pool and return the best.

    ``iteration`` of the result is its rank in :func:`enumerate_partitions`
    order; ties go to the first enumerated split.

    Raises
    ------
    ValueError
        If the pool is larger than MAX_EXHAUSTIVE_POOL_SIZE.
    """
    if index.n_items > MAX_EXHAUSTIVE_POOL_SIZE:
        count = math.perm(index.n_items, index.n_items // 2)
        raise ValueError(
            f"Exhaustive search over {count} splits of {index.n_items} items "
            f"is not supported (max pool size {MAX_EXHAUSTIVE_POOL_SIZE})"
        )

    matrix = index.matrix
    best: Partition | None = None
    for rank, (group_a, group_b) in enumerate(enumerate_partitions(index.n_items)):
        score = score_partition(matrix, np.array(group_a), np.array(group_b))
        if best is None or score > best.score:
            best = Partition(
                group_a=group_a, group_b=group_b, score=score, iteration=rank
            )
    assert best is not None
    return best
