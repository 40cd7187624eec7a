"""Accumulated form state across partial updates."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .paths import get_path, set_path


class FormStateCache:
    """
    Holds the merged form state of one validator.

    Every update builds a new snapshot dict; snapshots handed out earlier
    are never modified.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._snapshot: dict[str, Any] = dict(initial or {})

    @property
    def snapshot(self) -> dict[str, Any]:
        return self._snapshot

    def merge(self, partial: Mapping[str, Any] | None) -> dict[str, Any]:
        """Shallow-merge `partial` over the cached state; keys it omits are kept."""
        if partial:
            self._snapshot = {**self._snapshot, **partial}
        return self._snapshot

    def set_field_value(self, path: str, value: Any) -> dict[str, Any]:
        """Store a single value at `path`, creating parent containers."""
        self._snapshot = set_path(self._snapshot, path, value)
        return self._snapshot

    def get(self, path: str) -> Any:
        return get_path(self._snapshot, path)

    def __repr__(self) -> str:
        return f"FormStateCache(keys={sorted(self._snapshot)})"
