"""
Nested path access for form state trees.

Paths are literal segments joined by dots. Numeric segments index lists,
and the bracket form ``items[0].name`` is accepted as a spelling of
``items.0.name``. Nothing in a path is ever evaluated.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping, MutableMapping
from typing import Any


class _Missing:
    """Marker for a path that resolves to nothing (never set)."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict) -> "_Missing":
        return self


MISSING: Any = _Missing()

_BRACKET_RE = re.compile(r"\[(\d+)\]")


def split_path(path: str) -> list[str]:
    """Split ``a.b[0].c`` into ``["a", "b", "0", "c"]``."""
    normalized = _BRACKET_RE.sub(r".\1", str(path))
    return normalized.split(".")


def last_segment(path: str) -> str:
    return split_path(path)[-1]


def get_path(obj: Any, path: str) -> Any:
    """
    Read the value at `path`.

    Returns MISSING instead of raising when any segment is absent, out of
    range, or crosses a value that is not a container.
    """
    current = obj
    for segment in split_path(path):
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, (list, tuple)) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def _empty_container_for(segment: str) -> Any:
    return [] if segment.isdigit() else {}


def _assign(container: Any, segment: str, value: Any, path: str) -> None:
    if isinstance(container, MutableMapping):
        container[segment] = value
        return
    if isinstance(container, list):
        if not segment.isdigit():
            raise ValueError(f"Cannot address key {segment!r} inside a list (path {path!r})")
        index = int(segment)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
        return
    raise ValueError(f"Cannot set {segment!r} on a {type(container).__name__} (path {path!r})")


def _child(container: Any, segment: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(segment, MISSING)
    if isinstance(container, list) and segment.isdigit():
        index = int(segment)
        return container[index] if index < len(container) else MISSING
    return MISSING


def set_path(obj: Any, path: str, value: Any) -> Any:
    """
    Return a deep copy of `obj` with `value` stored at `path`.

    Intermediate containers are created as needed: a list when the next
    segment is numeric, a dict otherwise. Scalars standing in the way are
    replaced. The input object is never modified.
    """
    segments = split_path(path)
    if any(not s for s in segments):
        raise ValueError(f"Invalid field path: {path!r}")

    root = copy.deepcopy(obj) if obj is not None else {}
    if isinstance(root, tuple):
        root = list(root)

    current = root
    for segment, next_segment in zip(segments, segments[1:]):
        child = _child(current, segment)
        if isinstance(child, tuple):
            child = list(child)
            _assign(current, segment, child, path)
        elif not isinstance(child, (MutableMapping, list)):
            child = _empty_container_for(next_segment)
            _assign(current, segment, child, path)
        current = child

    _assign(current, segments[-1], value, path)
    return root


def bind_value(path: str, value: Any, target: Any = None) -> Any:
    """Bind `value` at `path` on a copy of `target` (``{}`` when None)."""
    return set_path(target if target is not None else {}, path, value)
