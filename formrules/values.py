from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import Any


def is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def number_to_text(value: Any) -> str:
    """Render a number the way a text input would hold it (5.0 -> "5")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_empty_value(value: Any) -> bool:
    """
    Emptiness used by skip_if_empty.

    Strings are empty when "", sequences and mappings when they have no
    items; any other value is empty when falsy.
    """
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return len(value) == 0
    return not value
