"""Mismatch and ComparisonResult: the output of one comparison.

This module provides the result type returned by ``compare()`` and carried by
``JSONAssertionError``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from json_flex_assert.options import AssertionMode

__all__ = ["ComparisonResult", "Mismatch", "MismatchKind", "ROOT_LABEL"]

# How the root position is shown in reports.
ROOT_LABEL = "<root>"


class MismatchKind(StrEnum):
    """Categories of comparison findings.

    - STRUCTURAL: Shapes differ, or an expected key/index is missing, or a
                  collection count differs.
    - VALUE:      A primitive differs in type or (under exact match) value, or
                  an any-order element found no partner.
    - PRESENCE:   A key that must be absent is present.
    """

    STRUCTURAL = auto()
    VALUE = auto()
    PRESENCE = auto()


def _render(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, sort_keys=False)
    except (TypeError, ValueError):
        return repr(value)


@dataclass(frozen=True, slots=True)
class Mismatch:
    """One finding.

    Attributes:
        kind:     Finding category.
        path:     Position in option path syntax; ``""`` for the root.
        expected: Expected value (or a description such as ``"absent"``).
        actual:   Actual value (or a description such as ``"missing"``).
        message:  Human readable explanation.
    """

    kind: MismatchKind
    path: str
    expected: Any
    actual: Any
    message: str

    def describe(self) -> str:
        where = self.path or ROOT_LABEL
        return (
            f"[{self.kind}] {where}: {self.message}\n"
            f"    expected: {_render(self.expected)}\n"
            f"    actual:   {_render(self.actual)}"
        )


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Result of a ``compare()`` call.

    Attributes:
        mismatches:          Every finding, in traversal order.
        mode:                Assertion mode the comparison ran under.
        computation_time_ms: Wall-clock duration of the comparison in milliseconds.
    """

    mismatches: tuple[Mismatch, ...]
    mode: AssertionMode
    computation_time_ms: float

    @property
    def passed(self) -> bool:
        return not self.mismatches

    @property
    def paths(self) -> list[str]:
        return [m.path for m in self.mismatches]

    def report(self) -> str:
        """Multi-line failure report; a one-line note when nothing failed."""
        if self.passed:
            return f"JSON {self.mode} match passed"
        lines = [
            f"JSON {self.mode} match failed with {len(self.mismatches)} mismatch(es):"
        ]
        lines.extend(m.describe() for m in self.mismatches)
        return "\n".join(lines)
