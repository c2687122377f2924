"""Pairwise cosine similarity and the pair lookup index.

Similarities are stored once, as the condensed strict upper triangle of the
similarity matrix (the layout of ``scipy.spatial.distance.pdist``): pair
``(i, j)`` with ``i < j`` lives at ``n*i - i*(i+1)//2 + (j - i - 1)``.
The search loop works on the square matrix view; item-level lookups go
through :class:`SimilarityIndex`.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from functools import cached_property

import numpy as np

from picsplit.errors import DegenerateCovariateError, SimilarityLookupError


def n_pairs(n_items: int) -> int:
    """Return the number of unordered pairs among ``n_items`` items."""
    return n_items * (n_items - 1) // 2


def condensed_position(i: int, j: int, n_items: int) -> int:
    """Return the condensed index of the unordered pair ``{i, j}``.

    Parameters
    ----------
    i, j : int
        Distinct item positions in ``[0, n_items)``, in either order.
    n_items : int
        Number of items.

    Returns
    -------
    int
        Position in the condensed vector.

    Examples
    --------
    >>> condensed_position(0, 1, 4), condensed_position(3, 2, 4)
    (0, 5)
    """
    if i > j:
        i, j = j, i
    return n_items * i - i * (i + 1) // 2 + (j - i - 1)


def pairwise_cosine(features: np.ndarray) -> np.ndarray:
    """Compute cosine similarity for every unordered pair of rows.

    Parameters
    ----------
    features : np.ndarray
        Normalized feature vectors, shape (n_items, n_features).

    Returns
    -------
    np.ndarray
        Condensed vector of length ``n_items * (n_items - 1) // 2``.

    Raises
    ------
    DegenerateCovariateError
        If a row has zero norm, leaving its cosine undefined.

    Examples
    --------
    >>> pairwise_cosine(np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])).round(4)
    array([0.    , 0.7071, 0.7071])
    """
    vectors = np.asarray(features, dtype=float)
    norms = np.linalg.norm(vectors, axis=1)
    zero = np.flatnonzero(norms == 0.0)
    if zero.size:
        raise DegenerateCovariateError(
            f"Cosine similarity undefined for zero-norm feature rows {zero.tolist()}"
        )

    unit = vectors / norms[:, np.newaxis]
    gram = np.clip(unit @ unit.T, -1.0, 1.0)
    rows, cols = np.triu_indices(len(vectors), k=1)
    return gram[rows, cols]


class SimilarityIndex:
    """Read-only lookup of precomputed similarities by item identifier.

    Parameters
    ----------
    ids : Sequence[str]
        Item identifiers in pool order.
    condensed : np.ndarray
        Condensed similarities as returned by :func:`pairwise_cosine`.

    Raises
    ------
    ValueError
        If ids repeat or the condensed vector has the wrong length.

    Examples
    --------
    >>> index = SimilarityIndex.from_features(
    ...     ["a", "b", "c"], np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    ... )
    >>> len(index)
    3
    >>> index.similarity("c", "a") == index.similarity("a", "c")
    True
    """

    def __init__(self, ids: Sequence[str], condensed: np.ndarray) -> None:
        self.ids: tuple[str, ...] = tuple(ids)
        if len(set(self.ids)) != len(self.ids):
            raise ValueError("Item ids must be unique")

        values = np.array(condensed, dtype=float)
        expected = n_pairs(len(self.ids))
        if values.shape != (expected,):
            raise ValueError(
                f"Expected {expected} pair similarities for {len(self.ids)} "
                f"items, got shape {values.shape}"
            )
        values.flags.writeable = False
        self._values = values
        self._positions = {item_id: i for i, item_id in enumerate(self.ids)}

    @classmethod
    def from_features(cls, ids: Sequence[str], features: np.ndarray) -> SimilarityIndex:
        """Build an index from normalized feature vectors.

        Parameters
        ----------
        ids : Sequence[str]
            Item identifiers, one per feature row.
        features : np.ndarray
            Normalized features, shape (n_items, n_features).

        Returns
        -------
        SimilarityIndex
            The populated index.
        """
        if len(ids) != len(features):
            raise ValueError(f"Got {len(ids)} ids for {len(features)} feature rows")
        return cls(ids, pairwise_cosine(features))

    @property
    def n_items(self) -> int:
        """Number of items covered by the index."""
        return len(self.ids)

    @property
    def values(self) -> np.ndarray:
        """Condensed similarities (read-only)."""
        return self._values

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._positions

    def position(self, item_id: str) -> int:
        """Return the pool position of an item.

        Raises
        ------
        SimilarityLookupError
            If the item is not indexed.
        """
        try:
            return self._positions[item_id]
        except KeyError:
            raise SimilarityLookupError(f"Unknown item id {item_id!r}") from None

    def similarity_at(self, i: int, j: int) -> float:
        """Return the similarity of the items at positions ``i`` and ``j``.

        Raises
        ------
        SimilarityLookupError
            If ``i == j`` or either position is out of range.
        """
        n = len(self.ids)
        if not (0 <= i < n and 0 <= j < n):
            raise SimilarityLookupError(
                f"Positions ({i}, {j}) out of range for {n} items"
            )
        if i == j:
            raise SimilarityLookupError(f"No self-similarity for position {i}")
        return float(self._values[condensed_position(i, j, n)])

    def similarity(self, id_a: str, id_b: str) -> float:
        """Return the similarity of an unordered pair of items.

        Parameters
        ----------
        id_a, id_b : str
            Distinct item identifiers, in either order.

        Returns
        -------
        float
            Cosine similarity in [-1, 1].

        Raises
        ------
        SimilarityLookupError
            If the ids are equal or either is unknown.
        """
        if id_a == id_b:
            raise SimilarityLookupError(f"No self-similarity for item {id_a!r}")
        return self.similarity_at(self.position(id_a), self.position(id_b))

    def pairs(self) -> Iterator[tuple[str, str, float]]:
        """Yield ``(id_a, id_b, similarity)`` for every pair in condensed order."""
        rows, cols = np.triu_indices(len(self.ids), k=1)
        for i, j, value in zip(rows, cols, self._values, strict=True):
            yield self.ids[i], self.ids[j], float(value)

    @cached_property
    def matrix(self) -> np.ndarray:
        """Square symmetric similarity matrix with NaN on the diagonal (read-only)."""
        n = len(self.ids)
        square = np.full((n, n), np.nan)
        rows, cols = np.triu_indices(n, k=1)
        square[rows, cols] = self._values
        square[cols, rows] = self._values
        square.flags.writeable = False
        return square
