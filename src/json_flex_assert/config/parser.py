"""PathParser: converts option path strings into structured PathComponents.

Path syntax (the same syntax mismatch reports use):
- Object keys are separated by ``.``:  ``"user.address.city"``
- Array indices follow a key in brackets:  ``"items[0]"``, ``"matrix[1][2]"``
- ``*`` as a whole key is a wildcard:  ``"users.*.id"``
- ``[*]`` is an array wildcard (and a legacy any-order marker):  ``"items[*]"``
- ``[N*]`` is an index with the legacy any-order marker:  ``"items[0*]"``
- A backslash escapes the next character, so ``"a\\.b"`` is the single key
  ``a.b`` and ``"\\*"`` is the literal key ``*``.

Parsing is partial-failure tolerant: ``parse_path`` stops at the first
malformed component, logs a warning and returns what it parsed so far.
``parse_path_strict`` raises ``PathSyntaxError`` instead.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from cachetools import LRUCache, cached

from json_flex_assert.errors import PathSyntaxError

__all__ = [
    "PathComponent",
    "clear_parse_cache",
    "escape_key",
    "format_path",
    "parse_path",
    "parse_path_strict",
]

logger = logging.getLogger(__name__)

_ESCAPE = "\\"

# Body of an array component: digits with an optional legacy any-order star.
_INDEX_BODY = re.compile(r"(\d+)(\*?)")

# Characters that must be escaped when a key is rendered back into a path.
_NEEDS_ESCAPE = re.compile(r"([\\.\[\]])")

_parse_cache: LRUCache[str | None, tuple[PathComponent, ...]] = LRUCache(maxsize=1024)


@dataclass(frozen=True, slots=True)
class PathComponent:
    """One step of a parsed path.

    Attributes:
        name:         Key name, or the decimal index for array steps.  ``"*"``
                      for wildcards.
        is_array:     True for bracketed steps.
        is_wildcard:  True for ``*`` and ``[*]``.
        is_any_order: Legacy flag set by ``[*]`` and ``[N*]``.
    """

    name: str
    is_array: bool = False
    is_wildcard: bool = False
    is_any_order: bool = False


def _split_unescaped(text: str, sep: str) -> list[str]:
    """Split on ``sep`` where it is not preceded by an escape.

    Escapes are preserved in the output; they are resolved per component.
    """
    parts: list[str] = []
    current: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch == _ESCAPE:
            current.append(ch)
            current.append(next(chars, ""))
        elif ch == sep:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def _unescape(text: str) -> str:
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        out.append(next(chars, "") if ch == _ESCAPE else ch)
    return "".join(out)


def _split_segment(path: str, segment: str, parsed: int) -> tuple[str, list[str]]:
    """Split ``key[0][*]`` into ``("key", ["0", "*"])``.

    The key part keeps its escapes; bracket bodies are returned raw.
    """
    i = 0
    n = len(segment)
    while i < n and segment[i] != "[":
        i += 2 if segment[i] == _ESCAPE else 1
    key = segment[:i]
    bodies: list[str] = []
    while i < n:
        if segment[i] != "[":
            raise PathSyntaxError(
                path, segment[i:], "unexpected text after array index", parsed
            )
        close = segment.find("]", i + 1)
        if close == -1:
            raise PathSyntaxError(path, segment[i:], "unterminated bracket", parsed)
        bodies.append(segment[i + 1 : close])
        i = close + 1
    return key, bodies


def _iter_components(path: str) -> Iterator[PathComponent]:
    parsed = 0
    for segment in _split_unescaped(path, "."):
        key, bodies = _split_segment(path, segment, parsed)
        # "[0]" at the start of a path (or after a dot) has no key part.
        if key or not bodies:
            if key == "*":
                yield PathComponent(name="*", is_wildcard=True)
            else:
                yield PathComponent(name=_unescape(key))
            parsed += 1
        for body in bodies:
            if body == "*":
                yield PathComponent(
                    name="*", is_array=True, is_wildcard=True, is_any_order=True
                )
            else:
                match = _INDEX_BODY.fullmatch(body)
                if match is None:
                    raise PathSyntaxError(
                        path, f"[{body}]", "index must be a non-negative integer", parsed
                    )
                yield PathComponent(
                    name=str(int(match.group(1))),
                    is_array=True,
                    is_any_order=bool(match.group(2)),
                )
            parsed += 1


def parse_path_strict(path: str | None) -> tuple[PathComponent, ...]:
    """Parse ``path`` into components, raising on malformed input.

    Args:
        path: Path string, or ``None`` (or ``""``) for the root.

    Returns:
        Tuple of PathComponents; empty for the root.

    Raises:
        PathSyntaxError: On an unterminated bracket, a non-numeric index, or
            text following a bracket inside one segment.
    """
    if not path:
        return ()
    return tuple(_iter_components(path))


@cached(cache=_parse_cache, lock=threading.RLock())
def parse_path(path: str | None) -> tuple[PathComponent, ...]:
    """Parse ``path``, keeping the components before the first malformed one.

    Results are memoised in a bounded LRU cache; the returned tuples are
    immutable so they are safe to share between assertion calls.  Because of
    the cache a malformed path is only logged the first time it is seen.
    """
    if not path:
        return ()
    components: list[PathComponent] = []
    try:
        for component in _iter_components(path):
            components.append(component)
    except PathSyntaxError as exc:
        logger.warning(
            "%s; ignoring the rest of the path and applying the option to %r",
            exc,
            format_path(components),
        )
    return tuple(components)


def clear_parse_cache() -> None:
    """Drop all memoised parse results."""
    _parse_cache.clear()


def escape_key(key: str) -> str:
    """Escape ``key`` so it reads back as one literal path component."""
    escaped = _NEEDS_ESCAPE.sub(r"\\\1", key)
    return "\\*" if escaped == "*" else escaped


def format_path(components: list[PathComponent] | tuple[PathComponent, ...]) -> str:
    """Render components back into path syntax (the inverse of ``parse_path``)."""
    out: list[str] = []
    for component in components:
        if component.is_array:
            star = "*" if component.is_any_order and not component.is_wildcard else ""
            out.append(f"[{component.name}{star}]")
        else:
            name = "*" if component.is_wildcard else escape_key(component.name)
            out.append(f".{name}" if out else name)
    return "".join(out)
