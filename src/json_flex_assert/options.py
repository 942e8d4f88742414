"""Path options: the policy values a test author attaches to expected-tree paths.

A ``PathOption`` is a frozen (immutable) dataclass naming one or more paths,
one ``OptionKind``, whether the option is active, and its ``Scope``.  The
PascalCase factory functions (``ValueExactMatch``, ``AnyOrderMatch``, ...) are
the intended way to build options in test code::

    assert_exact_match(expected, actual, ValueTypeMatch("items[*].id"))
    assert_type_match(expected, actual, CollectionEqualCount(scope=Scope.SUBTREE))
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = [
    "AnyOrderMatch",
    "AssertionMode",
    "CollectionEqualCount",
    "KeyMustBeAbsent",
    "OptionKind",
    "PathOption",
    "Scope",
    "ValueExactMatch",
    "ValueTypeMatch",
]


class OptionKind(StrEnum):
    """The closed set of policies a configuration node can carry.

    - ANY_ORDER_MATCH:        Array elements may match actual elements in any order.
    - COLLECTION_EQUAL_COUNT: Actual key/element count must equal expected's.
    - PRIMITIVE_EXACT_MATCH:  Primitive values must be equal, not just same type.
    - KEY_MUST_BE_ABSENT:     The key must not be present in actual.
    """

    ANY_ORDER_MATCH = auto()
    COLLECTION_EQUAL_COUNT = auto()
    PRIMITIVE_EXACT_MATCH = auto()
    KEY_MUST_BE_ABSENT = auto()


class Scope(StrEnum):
    """Which configuration nodes an option binds.

    - SINGLE_NODE: Only the node the path identifies.
    - SUBTREE:     The node and every current or later-created descendant.
    """

    SINGLE_NODE = auto()
    SUBTREE = auto()


class AssertionMode(StrEnum):
    """Default primitive comparison for an assertion call.

    - EXACT: Primitives must match in type and value unless relaxed per path.
    - TYPE:  Primitives must match in type only unless tightened per path.
    """

    EXACT = auto()
    TYPE = auto()


PathArg = str | None | Iterable[str | None]


@dataclass(frozen=True, slots=True)
class PathOption:
    """One policy application over an ordered set of paths.

    Attributes:
        paths:  Path strings in option path syntax.  ``None`` targets the
                root.  An empty tuple is normalised to ``(None,)``.
        kind:   The policy being set.
        active: Whether the policy is switched on or off at those paths.
        scope:  ``Scope.SINGLE_NODE`` or ``Scope.SUBTREE``.
    """

    paths: tuple[str | None, ...]
    kind: OptionKind
    active: bool = True
    scope: Scope = Scope.SINGLE_NODE

    def __post_init__(self) -> None:
        if isinstance(self.paths, str):
            paths: tuple[str | None, ...] = (self.paths,)
        else:
            paths = tuple(self.paths) if self.paths else (None,)
        for path in paths:
            if path is not None and not isinstance(path, str):
                msg = f"paths must be str or None, got {type(path).__name__}"
                raise TypeError(msg)
        if not isinstance(self.active, bool):
            msg = f"active must be a bool, got {type(self.active).__name__}"
            raise TypeError(msg)
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "paths", paths)
        object.__setattr__(self, "kind", OptionKind(self.kind))
        object.__setattr__(self, "scope", Scope(self.scope))


def _flatten_paths(paths: tuple[PathArg, ...]) -> tuple[str | None, ...]:
    """Accept ``f("a", "b")`` and ``f(["a", "b"])`` alike."""
    flat: list[str | None] = []
    for item in paths:
        if item is None or isinstance(item, str):
            flat.append(item)
        else:
            flat.extend(item)
    return tuple(flat)


def _option(
    kind: OptionKind, paths: tuple[PathArg, ...], active: bool, scope: Scope
) -> PathOption:
    return PathOption(
        paths=_flatten_paths(paths), kind=kind, active=active, scope=scope
    )


def ValueExactMatch(  # noqa: N802
    *paths: PathArg, is_active: bool = True, scope: Scope = Scope.SINGLE_NODE
) -> PathOption:
    """Require primitive value equality at ``paths`` (root when omitted)."""
    return _option(OptionKind.PRIMITIVE_EXACT_MATCH, paths, is_active, scope)


def ValueTypeMatch(  # noqa: N802
    *paths: PathArg, is_active: bool = True, scope: Scope = Scope.SINGLE_NODE
) -> PathOption:
    """Compare primitives at ``paths`` by type only.

    This is ``PRIMITIVE_EXACT_MATCH`` with the activity inverted.
    """
    return _option(OptionKind.PRIMITIVE_EXACT_MATCH, paths, not is_active, scope)


def AnyOrderMatch(  # noqa: N802
    *paths: PathArg, is_active: bool = True, scope: Scope = Scope.SINGLE_NODE
) -> PathOption:
    """Let array elements at ``paths`` match actual elements in any order."""
    return _option(OptionKind.ANY_ORDER_MATCH, paths, is_active, scope)


def CollectionEqualCount(  # noqa: N802
    *paths: PathArg, is_active: bool = True, scope: Scope = Scope.SINGLE_NODE
) -> PathOption:
    """Require the actual collection at ``paths`` to have the expected size."""
    return _option(OptionKind.COLLECTION_EQUAL_COUNT, paths, is_active, scope)


def KeyMustBeAbsent(  # noqa: N802
    *paths: PathArg, is_active: bool = True, scope: Scope = Scope.SINGLE_NODE
) -> PathOption:
    """Forbid the keys at ``paths`` from appearing in actual."""
    return _option(OptionKind.KEY_MUST_BE_ABSENT, paths, is_active, scope)
