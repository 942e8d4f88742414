"""Tests for the path parser.

Covers:
- Root paths (None and empty string)
- Dotted keys, array indices, mixed key/index segments
- Wildcards (``*`` and ``[*]``) and the legacy ``[N*]`` marker
- Escapes for dots, stars and brackets
- Partial-failure behaviour: components before a malformed one are kept
- parse_path_strict raising PathSyntaxError
- format_path as the inverse of parse_path
- Memoisation of parse results
"""

from __future__ import annotations

import logging

import pytest

from json_flex_assert.config.parser import (
    PathComponent,
    clear_parse_cache,
    escape_key,
    format_path,
    parse_path,
    parse_path_strict,
)
from json_flex_assert.errors import PathSyntaxError


@pytest.fixture(autouse=True)
def _fresh_cache() -> None:
    """Each test sees an empty parse cache so warnings are always logged."""
    clear_parse_cache()


def _names(path: str | None) -> list[str]:
    return [c.name for c in parse_path(path)]


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class TestRoot:
    def test_none_is_root(self) -> None:
        assert parse_path(None) == ()

    def test_empty_string_is_root(self) -> None:
        assert parse_path("") == ()


# ---------------------------------------------------------------------------
# Keys and indices
# ---------------------------------------------------------------------------


class TestKeysAndIndices:
    def test_single_key(self) -> None:
        assert parse_path("key0") == (PathComponent(name="key0"),)

    def test_dotted_keys(self) -> None:
        assert _names("key0-1.key1-0") == ["key0-1", "key1-0"]

    def test_single_index(self) -> None:
        assert parse_path("[0]") == (PathComponent(name="0", is_array=True),)

    def test_nested_indices(self) -> None:
        components = parse_path("[1][0]")
        assert [c.name for c in components] == ["1", "0"]
        assert all(c.is_array for c in components)

    def test_key_then_indices(self) -> None:
        components = parse_path("key0-1.key1-0[0][*]")
        assert [c.name for c in components] == ["key0-1", "key1-0", "0", "*"]
        assert [c.is_array for c in components] == [False, False, True, True]

    def test_index_then_key(self) -> None:
        components = parse_path("[2].name")
        assert components == (
            PathComponent(name="2", is_array=True),
            PathComponent(name="name"),
        )

    def test_leading_zeros_normalised(self) -> None:
        assert _names("[007]") == ["7"]

    def test_empty_key_segment(self) -> None:
        assert _names("a..b") == ["a", "", "b"]


# ---------------------------------------------------------------------------
# Wildcards
# ---------------------------------------------------------------------------


class TestWildcards:
    def test_key_wildcard(self) -> None:
        (component,) = parse_path("*")
        assert component.is_wildcard
        assert not component.is_array
        assert not component.is_any_order

    def test_array_wildcard_is_any_order(self) -> None:
        (component,) = parse_path("[*]")
        assert component.is_wildcard
        assert component.is_array
        assert component.is_any_order

    def test_index_any_order_marker(self) -> None:
        (component,) = parse_path("[3*]")
        assert component == PathComponent(name="3", is_array=True, is_any_order=True)
        assert not component.is_wildcard

    def test_wildcard_inside_longer_path(self) -> None:
        components = parse_path("users.*.id")
        assert [c.is_wildcard for c in components] == [False, True, False]


# ---------------------------------------------------------------------------
# Escapes
# ---------------------------------------------------------------------------


class TestEscapes:
    def test_escaped_dot_stays_in_key(self) -> None:
        assert _names(r"a\.b.c") == ["a.b", "c"]

    def test_escaped_star_is_literal_key(self) -> None:
        (component,) = parse_path(r"\*")
        assert component.name == "*"
        assert not component.is_wildcard

    def test_escaped_brackets_stay_in_key(self) -> None:
        components = parse_path(r"key\[0\]")
        assert components == (PathComponent(name="key[0]"),)

    def test_escaped_backslash(self) -> None:
        assert _names(r"a\\b") == ["a\\b"]


# ---------------------------------------------------------------------------
# Malformed paths
# ---------------------------------------------------------------------------


class TestMalformedPaths:
    def test_non_numeric_index_keeps_prefix(self) -> None:
        assert _names("a.b[x].c") == ["a", "b"]

    def test_negative_index_keeps_prefix(self) -> None:
        assert _names("a[-1]") == ["a"]

    def test_unterminated_bracket_keeps_previous_segments(self) -> None:
        assert _names("a.b[0") == ["a"]

    def test_text_after_bracket_rejected(self) -> None:
        assert _names("a[0]b") == []

    def test_malformed_path_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="json_flex_assert.config.parser"):
            parse_path("items[abc]")
        assert any("items[abc]" in record.getMessage() for record in caplog.records)

    def test_strict_parse_raises(self) -> None:
        with pytest.raises(PathSyntaxError) as exc_info:
            parse_path_strict("a.b[x]")
        assert exc_info.value.fragment == "[x]"
        assert exc_info.value.parsed == 2

    def test_path_syntax_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_path_strict("[")

    def test_strict_parse_accepts_valid_path(self) -> None:
        assert parse_path_strict("a[0]") == parse_path("a[0]")


# ---------------------------------------------------------------------------
# Formatting and caching
# ---------------------------------------------------------------------------


class TestFormatPath:
    @pytest.mark.parametrize(
        "path",
        ["key0", "a.b.c", "[0]", "[1][0]", "items[*]", "users.*.id", "a[2*]", r"a\.b"],
    )
    def test_round_trip(self, path: str) -> None:
        assert format_path(parse_path(path)) == path

    def test_escape_key_star(self) -> None:
        assert escape_key("*") == r"\*"

    def test_escape_key_plain(self) -> None:
        assert escape_key("plain") == "plain"


class TestCaching:
    def test_same_path_returns_cached_tuple(self) -> None:
        assert parse_path("x.y[0]") is parse_path("x.y[0]")

    def test_clear_cache(self) -> None:
        first = parse_path("x.y[0]")
        clear_parse_cache()
        second = parse_path("x.y[0]")
        assert first == second
        assert first is not second
