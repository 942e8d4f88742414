"""Flexible JSON assertions: compare expected and actual value trees with per-path policies."""

from __future__ import annotations

from json_flex_assert.api import (
    assert_equal,
    assert_exact_match,
    assert_exact_match_legacy,
    assert_type_match,
    assert_type_match_legacy,
    compare,
)
from json_flex_assert.errors import JSONAssertionError, JSONFlexAssertError, PathSyntaxError
from json_flex_assert.options import (
    AnyOrderMatch,
    AssertionMode,
    CollectionEqualCount,
    KeyMustBeAbsent,
    OptionKind,
    PathOption,
    Scope,
    ValueExactMatch,
    ValueTypeMatch,
)
from json_flex_assert.result import ComparisonResult, Mismatch, MismatchKind

__version__: str = "0.1.0"
__all__: list[str] = [
    "AnyOrderMatch",
    "AssertionMode",
    "CollectionEqualCount",
    "ComparisonResult",
    "JSONAssertionError",
    "JSONFlexAssertError",
    "KeyMustBeAbsent",
    "Mismatch",
    "MismatchKind",
    "OptionKind",
    "PathOption",
    "PathSyntaxError",
    "Scope",
    "ValueExactMatch",
    "ValueTypeMatch",
    "assert_equal",
    "assert_exact_match",
    "assert_exact_match_legacy",
    "assert_type_match",
    "assert_type_match_legacy",
    "compare",
]
