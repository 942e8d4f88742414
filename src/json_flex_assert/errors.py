"""Exception types raised by json-flex-assert."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from json_flex_assert.result import ComparisonResult, Mismatch

__all__ = ["JSONAssertionError", "JSONFlexAssertError", "PathSyntaxError"]


class JSONFlexAssertError(Exception):
    """Base class for library errors that are not assertion failures."""


class PathSyntaxError(JSONFlexAssertError, ValueError):
    """A path string could not be parsed.

    Attributes:
        path:     The full path string being parsed.
        fragment: The offending piece of the path.
        parsed:   Number of components parsed successfully before the error.
    """

    def __init__(self, path: str, fragment: str, reason: str, parsed: int = 0) -> None:
        self.path = path
        self.fragment = fragment
        self.parsed = parsed
        super().__init__(f"invalid path {path!r} at {fragment!r}: {reason}")


class JSONAssertionError(AssertionError):
    """Aggregated failure of an assertion call.

    The message is the full multi-line report; ``mismatches`` holds the
    individual findings in traversal order.
    """

    def __init__(self, result: ComparisonResult) -> None:
        self.result = result
        super().__init__(result.report())

    @property
    def mismatches(self) -> tuple[Mismatch, ...]:
        return self.result.mismatches
