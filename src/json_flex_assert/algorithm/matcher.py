"""Bag matching for any-order array elements.

Given a boolean compatibility matrix (``compatible[i, j]`` is True when
expected element ``i`` matches actual element ``j``), find the largest set of
one-to-one pairs.  This is maximum bipartite matching, solved with scipy's
``linear_sum_assignment`` by maximising the number of compatible pairs.
Pairs that landed on incompatible cells are dropped afterwards.

A greedy first-fit would fail ``[A-or-B, A]`` against ``[A, B]`` when the
first expected element grabs ``A``; the assignment never does.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["bag_match"]


def bag_match(compatible: np.ndarray) -> list[tuple[int, int]]:
    """Return ``(expected_index, actual_index)`` pairs of a maximum matching.

    Args:
        compatible: 2-D boolean array of shape ``(m, n)``.

    Returns:
        Pairs sorted by expected index.  Expected rows absent from the result
        could not be matched.
    """
    if compatible.size == 0:
        return []

    weights = np.asarray(compatible, dtype=float)
    if not weights.any():
        return []

    row_ind, col_ind = linear_sum_assignment(weights, maximize=True)
    keep = weights[row_ind, col_ind] > 0.0
    return sorted(
        zip(row_ind[keep].tolist(), col_ind[keep].tolist(), strict=True)
    )
