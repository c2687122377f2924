"""picsplit - Balanced two-list selection of picture-naming stimuli.

Splits a candidate pool of pictures into two lists matched on name agreement,
word frequency and age of acquisition by randomized search over bipartitions
scored with pairwise cosine similarity.
"""

from __future__ import annotations

__version__ = "0.1.0"
