"""Tests for PathOption, the option enums and the option factories.

Covers:
- Enum members and string values
- PathOption normalisation and validation
- Immutability
- Factory defaults, variadic vs list paths, ValueTypeMatch inversion
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

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


class TestEnums:
    def test_option_kind_has_four_members(self) -> None:
        assert {m.name for m in OptionKind} == {
            "ANY_ORDER_MATCH",
            "COLLECTION_EQUAL_COUNT",
            "PRIMITIVE_EXACT_MATCH",
            "KEY_MUST_BE_ABSENT",
        }

    def test_scope_values(self) -> None:
        assert Scope.SINGLE_NODE == "single_node"
        assert Scope.SUBTREE == "subtree"

    def test_mode_values(self) -> None:
        assert AssertionMode.EXACT == "exact"
        assert AssertionMode.TYPE == "type"


class TestPathOption:
    def test_empty_paths_target_root(self) -> None:
        option = PathOption(paths=(), kind=OptionKind.ANY_ORDER_MATCH)
        assert option.paths == (None,)

    def test_list_paths_become_tuple(self) -> None:
        option = PathOption(paths=["a", "b"], kind=OptionKind.ANY_ORDER_MATCH)  # type: ignore[arg-type]
        assert option.paths == ("a", "b")

    def test_bare_string_is_one_path(self) -> None:
        option = PathOption(paths="abc", kind=OptionKind.ANY_ORDER_MATCH)  # type: ignore[arg-type]
        assert option.paths == ("abc",)

    def test_defaults(self) -> None:
        option = PathOption(paths=("a",), kind=OptionKind.KEY_MUST_BE_ABSENT)
        assert option.active is True
        assert option.scope is Scope.SINGLE_NODE

    def test_kind_and_scope_coerced_from_strings(self) -> None:
        option = PathOption(paths=("a",), kind="any_order_match", scope="subtree")  # type: ignore[arg-type]
        assert option.kind is OptionKind.ANY_ORDER_MATCH
        assert option.scope is Scope.SUBTREE

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValueError):
            PathOption(paths=("a",), kind="fuzzy")  # type: ignore[arg-type]

    def test_non_string_path_rejected(self) -> None:
        with pytest.raises(TypeError, match="paths must be str or None"):
            PathOption(paths=(1,), kind=OptionKind.ANY_ORDER_MATCH)  # type: ignore[arg-type]

    def test_non_bool_active_rejected(self) -> None:
        with pytest.raises(TypeError, match="active must be a bool"):
            PathOption(paths=("a",), kind=OptionKind.ANY_ORDER_MATCH, active=1)  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        option = AnyOrderMatch("a")
        with pytest.raises(FrozenInstanceError):
            option.active = False  # type: ignore[misc]


class TestFactories:
    @pytest.mark.parametrize(
        ("factory", "kind"),
        [
            (ValueExactMatch, OptionKind.PRIMITIVE_EXACT_MATCH),
            (AnyOrderMatch, OptionKind.ANY_ORDER_MATCH),
            (CollectionEqualCount, OptionKind.COLLECTION_EQUAL_COUNT),
            (KeyMustBeAbsent, OptionKind.KEY_MUST_BE_ABSENT),
        ],
    )
    def test_kind_and_defaults(self, factory, kind: OptionKind) -> None:  # type: ignore[no-untyped-def]
        option = factory()
        assert option.kind is kind
        assert option.paths == (None,)
        assert option.active is True
        assert option.scope is Scope.SINGLE_NODE

    def test_value_type_match_inverts_activity(self) -> None:
        assert ValueTypeMatch("a").active is False
        assert ValueTypeMatch("a", is_active=False).active is True
        assert ValueTypeMatch().kind is OptionKind.PRIMITIVE_EXACT_MATCH

    def test_variadic_and_list_paths_equal(self) -> None:
        assert ValueTypeMatch("a", "b") == ValueTypeMatch(["a", "b"])

    def test_scope_forwarded(self) -> None:
        assert CollectionEqualCount(scope=Scope.SUBTREE).scope is Scope.SUBTREE

    def test_explicit_none_path(self) -> None:
        assert KeyMustBeAbsent(None, "a").paths == (None, "a")
