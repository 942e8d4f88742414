"""JSONComparator: walks expected and actual value trees under a ConfigTree.

The comparator never stops at the first problem.  Every mismatch is recorded
with its path, expected value and actual value; a structural mismatch stops
descent into that one subtree only.

Policy at each position comes from the ConfigTree:
- ``COLLECTION_EQUAL_COUNT`` is read from the container's own node.
- ``PRIMITIVE_EXACT_MATCH``, ``ANY_ORDER_MATCH`` and ``KEY_MUST_BE_ABSENT``
  describe a value inside a container and go through ``resolve_option`` with
  the container as parent.

Any-order array elements are matched as a bag: each expected element is
trial-compared against every actual element not used positionally, and a
maximum bipartite matching (``bag_match``) pairs them up.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import numpy as np

from json_flex_assert.algorithm.matcher import bag_match
from json_flex_assert.config.nodes import ConfigNode, ConfigTree
from json_flex_assert.config.parser import escape_key
from json_flex_assert.config.resolver import own_option, resolve_option
from json_flex_assert.options import AssertionMode, OptionKind
from json_flex_assert.result import ComparisonResult, Mismatch, MismatchKind

__all__ = ["JSONComparator", "json_category"]

logger = logging.getLogger(__name__)

# Placeholders shown in reports where a value does not exist.
MISSING = "<missing>"
ABSENT = "<absent>"


def json_category(value: Any) -> str:
    """Return the JSON category of a decoded value.

    bool MUST be checked before int: bool subclasses int in Python.

    Raises:
        TypeError: If ``value`` is not a JSON value.
    """
    if isinstance(value, bool):
        return "boolean"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    raise TypeError(f"Unsupported JSON value type: {type(value)!r}")


def _key_path(path: str, key: str) -> str:
    escaped = escape_key(key)
    return f"{path}.{escaped}" if path else escaped


def _index_path(path: str, index: int) -> str:
    return f"{path}[{index}]"


class JSONComparator:
    """Compares values under the policies of one ConfigTree.

    Example::

        tree = build_config_tree([AnyOrderMatch("tags")])
        result = JSONComparator(tree).compare({"tags": [1, 2]}, {"tags": [2, 1]})
        result.passed   # True
    """

    def __init__(self, tree: ConfigTree, mode: AssertionMode = AssertionMode.EXACT) -> None:
        self._tree = tree
        self._mode = mode

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(self, expected: Any, actual: Any) -> ComparisonResult:
        """Compare ``actual`` against the ``expected`` template."""
        t0 = time.perf_counter()
        root = self._tree.root
        found: list[Mismatch] = []
        self._walk(expected, actual, root, root, "", found)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug(
            "%s comparison finished with %d mismatch(es) in %.3f ms",
            self._mode,
            len(found),
            elapsed_ms,
        )
        return ComparisonResult(
            mismatches=tuple(found),
            mode=self._mode,
            computation_time_ms=elapsed_ms,
        )

    # ------------------------------------------------------------------
    # Recursive walk
    # ------------------------------------------------------------------

    def _walk(
        self,
        expected: Any,
        actual: Any,
        node: ConfigNode,
        parent: ConfigNode,
        path: str,
        out: list[Mismatch],
    ) -> None:
        expected_category = json_category(expected)
        actual_category = json_category(actual)

        if expected_category in ("object", "array"):
            if actual_category != expected_category:
                out.append(
                    Mismatch(
                        kind=MismatchKind.STRUCTURAL,
                        path=path,
                        expected=expected,
                        actual=actual,
                        message=f"expected {expected_category}, found {actual_category}",
                    )
                )
            elif expected_category == "object":
                self._walk_object(expected, actual, node, path, out)
            else:
                self._walk_array(expected, actual, node, path, out)
            return

        if actual_category != expected_category:
            out.append(
                Mismatch(
                    kind=MismatchKind.VALUE,
                    path=path,
                    expected=expected,
                    actual=actual,
                    message=f"expected {expected_category}, found {actual_category}",
                )
            )
        elif (
            resolve_option(OptionKind.PRIMITIVE_EXACT_MATCH, node, parent, self._tree)
            and expected != actual
        ):
            out.append(
                Mismatch(
                    kind=MismatchKind.VALUE,
                    path=path,
                    expected=expected,
                    actual=actual,
                    message="values differ",
                )
            )

    def _check_count(
        self,
        expected: dict[str, Any] | list[Any],
        actual: dict[str, Any] | list[Any],
        node: ConfigNode,
        path: str,
        out: list[Mismatch],
    ) -> None:
        if not own_option(OptionKind.COLLECTION_EQUAL_COUNT, node):
            return
        if len(expected) != len(actual):
            out.append(
                Mismatch(
                    kind=MismatchKind.STRUCTURAL,
                    path=path,
                    expected=expected,
                    actual=actual,
                    message=(
                        f"expected {len(expected)} item(s), found {len(actual)}"
                    ),
                )
            )

    def _walk_object(
        self,
        expected: dict[str, Any],
        actual: dict[str, Any],
        node: ConfigNode,
        path: str,
        out: list[Mismatch],
    ) -> None:
        self._check_count(expected, actual, node, path, out)

        for key, expected_value in expected.items():
            child_path = _key_path(path, key)
            if key not in actual:
                out.append(
                    Mismatch(
                        kind=MismatchKind.STRUCTURAL,
                        path=child_path,
                        expected=expected_value,
                        actual=MISSING,
                        message="key is missing",
                    )
                )
                continue
            child = self._tree.next_node(node, key)
            self._walk(expected_value, actual[key], child, node, child_path, out)

        for key, actual_value in actual.items():
            if key in expected:
                continue
            child = self._tree.next_node(node, key)
            if resolve_option(OptionKind.KEY_MUST_BE_ABSENT, child, node, self._tree):
                out.append(
                    Mismatch(
                        kind=MismatchKind.PRESENCE,
                        path=_key_path(path, key),
                        expected=ABSENT,
                        actual=actual_value,
                        message="key must be absent",
                    )
                )

    def _walk_array(
        self,
        expected: list[Any],
        actual: list[Any],
        node: ConfigNode,
        path: str,
        out: list[Mismatch],
    ) -> None:
        self._check_count(expected, actual, node, path, out)

        ordered: list[int] = []
        any_order: list[int] = []
        for index in range(len(expected)):
            child = self._tree.next_node(node, str(index))
            if resolve_option(OptionKind.ANY_ORDER_MATCH, child, node, self._tree):
                any_order.append(index)
            else:
                ordered.append(index)

        used: set[int] = set()
        for index in ordered:
            child_path = _index_path(path, index)
            if index >= len(actual):
                out.append(
                    Mismatch(
                        kind=MismatchKind.STRUCTURAL,
                        path=child_path,
                        expected=expected[index],
                        actual=MISSING,
                        message="index is missing",
                    )
                )
                continue
            used.add(index)
            child = self._tree.next_node(node, str(index))
            self._walk(expected[index], actual[index], child, node, child_path, out)

        if any_order:
            candidates = [j for j in range(len(actual)) if j not in used]
            self._match_any_order(expected, actual, any_order, candidates, node, path, out)

    def _match_any_order(
        self,
        expected: list[Any],
        actual: list[Any],
        indices: list[int],
        candidates: list[int],
        node: ConfigNode,
        path: str,
        out: list[Mismatch],
    ) -> None:
        compatible = np.zeros((len(indices), len(candidates)), dtype=bool)
        for row, index in enumerate(indices):
            child = self._tree.next_node(node, str(index))
            for col, candidate in enumerate(candidates):
                trial: list[Mismatch] = []
                self._walk(expected[index], actual[candidate], child, node, "", trial)
                compatible[row, col] = not trial

        matched_rows = {row for row, _ in bag_match(compatible)}
        unused = [actual[j] for j in candidates]
        for row, index in enumerate(indices):
            if row in matched_rows:
                continue
            out.append(
                Mismatch(
                    kind=MismatchKind.VALUE,
                    path=_index_path(path, index),
                    expected=expected[index],
                    actual=unused,
                    message="no matching element in any order",
                )
            )
