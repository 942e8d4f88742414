"""Public API functions for json-flex-assert.

Each call builds a fresh ConfigTree from its options, runs a fresh
JSONComparator over it and throws both away, so no state is shared between
calls.

Options may be given variadically or as a single list/tuple::

    assert_exact_match(expected, actual, ValueTypeMatch("id"), AnyOrderMatch("tags"))
    assert_exact_match(expected, actual, [ValueTypeMatch("id"), AnyOrderMatch("tags")])
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from json_flex_assert.comparator import JSONComparator
from json_flex_assert.config.builder import build_config_tree
from json_flex_assert.errors import JSONAssertionError
from json_flex_assert.options import (
    AssertionMode,
    OptionKind,
    PathOption,
    Scope,
    ValueExactMatch,
    ValueTypeMatch,
)
from json_flex_assert.result import ComparisonResult

__all__ = [
    "assert_equal",
    "assert_exact_match",
    "assert_exact_match_legacy",
    "assert_type_match",
    "assert_type_match_legacy",
    "compare",
]

OptionArg = PathOption | Iterable[PathOption]


def _flatten_options(options: tuple[OptionArg, ...]) -> list[PathOption]:
    flat: list[PathOption] = []
    for item in options:
        if isinstance(item, PathOption):
            flat.append(item)
        else:
            for option in item:
                if not isinstance(option, PathOption):
                    msg = f"expected PathOption, got {type(option).__name__}"
                    raise TypeError(msg)
                flat.append(option)
    return flat


def _mode_option(mode: AssertionMode) -> PathOption:
    """Root subtree default for primitive matching, applied before user options."""
    return PathOption(
        paths=(None,),
        kind=OptionKind.PRIMITIVE_EXACT_MATCH,
        active=mode is AssertionMode.EXACT,
        scope=Scope.SUBTREE,
    )


def _run(
    expected: Any,
    actual: Any,
    options: list[PathOption],
    mode: AssertionMode,
    legacy_mode: bool = False,
) -> ComparisonResult:
    tree = build_config_tree([_mode_option(mode), *options], legacy_mode=legacy_mode)
    return JSONComparator(tree, mode=mode).compare(expected, actual)


def compare(
    expected: Any,
    actual: Any,
    *options: OptionArg,
    mode: AssertionMode = AssertionMode.EXACT,
) -> ComparisonResult:
    """Compare ``actual`` against the ``expected`` template without raising.

    Args:
        expected: Decoded JSON template.  Keys and indices it lacks are not
                  checked unless a ``CollectionEqualCount`` or
                  ``KeyMustBeAbsent`` option says otherwise.
        actual:   Decoded JSON value under test.
        options:  PathOptions, variadic or as one iterable, applied in order.
        mode:     ``AssertionMode.EXACT`` (default) or ``AssertionMode.TYPE``.

    Returns:
        A ``ComparisonResult`` listing every mismatch.
    """
    return _run(expected, actual, _flatten_options(options), AssertionMode(mode))


def assert_exact_match(expected: Any, actual: Any, *options: OptionArg) -> None:
    """Assert ``actual`` matches ``expected`` with equal primitive values.

    ``ValueTypeMatch`` options relax individual paths to type-only matching.

    Raises:
        JSONAssertionError: With the aggregated report when anything mismatches.
    """
    result = compare(expected, actual, *options, mode=AssertionMode.EXACT)
    if not result.passed:
        raise JSONAssertionError(result)


def assert_type_match(expected: Any, actual: Any, *options: OptionArg) -> None:
    """Assert ``actual`` matches ``expected`` with primitives compared by type.

    ``ValueExactMatch`` options tighten individual paths to value equality.

    Raises:
        JSONAssertionError: With the aggregated report when anything mismatches.
    """
    result = compare(expected, actual, *options, mode=AssertionMode.TYPE)
    if not result.passed:
        raise JSONAssertionError(result)


# ----------------------------------------------------------------------
# Legacy entry points
# ----------------------------------------------------------------------


def assert_equal(expected: Any, actual: Any) -> None:
    """Assert strict equality: exact values and equal counts everywhere."""
    options = [
        PathOption(
            paths=(None,),
            kind=OptionKind.COLLECTION_EQUAL_COUNT,
            active=True,
            scope=Scope.SUBTREE,
        )
    ]
    result = _run(expected, actual, options, AssertionMode.EXACT)
    if not result.passed:
        raise JSONAssertionError(result)


def assert_exact_match_legacy(
    expected: Any, actual: Any, type_match_paths: Iterable[str] = ()
) -> None:
    """Exact match with subtree-scoped type-match paths and legacy markers.

    ``[*]`` in a path matches every element of that array in any order and
    ``[N*]`` matches element ``N`` in any order.
    """
    paths = list(type_match_paths)
    options = [ValueTypeMatch(paths, scope=Scope.SUBTREE)] if paths else []
    result = _run(expected, actual, options, AssertionMode.EXACT, legacy_mode=True)
    if not result.passed:
        raise JSONAssertionError(result)


def assert_type_match_legacy(
    expected: Any, actual: Any, exact_match_paths: Iterable[str] = ()
) -> None:
    """Type match with subtree-scoped exact-match paths and legacy markers."""
    paths = list(exact_match_paths)
    options = [ValueExactMatch(paths, scope=Scope.SUBTREE)] if paths else []
    result = _run(expected, actual, options, AssertionMode.TYPE, legacy_mode=True)
    if not result.passed:
        raise JSONAssertionError(result)
