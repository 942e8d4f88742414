"""algorithm subpackage: matching primitives used by the comparator.

Example::

    import numpy as np
    from json_flex_assert.algorithm import bag_match

    bag_match(np.array([[True, True], [True, False]]))
    # [(0, 1), (1, 0)]
"""

from __future__ import annotations

from json_flex_assert.algorithm.matcher import bag_match

__all__ = ["bag_match"]
