"""
Default predicate library.

Predicates are plain functions ``(value, *args) -> bool`` registered under
the names rules refer to (``method = "isEmail"``). Names follow the
validator.js vocabulary so rulesets written for it read the same here.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..values import is_empty_value, is_number, number_to_text

PredicateFn = Callable[..., bool]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if is_number(value):
        return number_to_text(value)
    raise TypeError(f"Expected a string value, got {type(value).__name__}")


def _options(options: Any) -> Mapping[str, Any]:
    return options if isinstance(options, Mapping) else {}


def _within(number: float, options: Mapping[str, Any]) -> bool:
    if options.get("min") is not None and number < float(options["min"]):
        return False
    if options.get("max") is not None and number > float(options["max"]):
        return False
    return True


_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def is_empty(value: Any, options: Any = None) -> bool:
    if value is not None and not isinstance(value, str) and not is_number(value):
        return is_empty_value(value)
    text = _as_text(value)
    if _options(options).get("ignore_whitespace"):
        text = text.strip()
    return len(text) == 0


def is_email(value: Any, options: Any = None) -> bool:
    try:
        validate_email(
            _as_text(value),
            check_deliverability=False,
            allow_smtputf8=not _options(options).get("ascii_only"),
        )
    except EmailNotValidError:
        return False
    return True


def matches(value: Any, pattern: Any, modifiers: str = "") -> bool:
    """True when `pattern` is found anywhere in the value (re.search)."""
    text = _as_text(value)
    if isinstance(pattern, re.Pattern):
        return pattern.search(text) is not None
    flags = 0
    for char in modifiers or "":
        flags |= _REGEX_FLAGS.get(char, 0)
    return re.search(str(pattern), text, flags) is not None


_INT_RE = re.compile(r"^[-+]?(?:[1-9][0-9]*|0)$")
_INT_LEADING_ZEROES_RE = re.compile(r"^[-+]?[0-9]+$")


def is_int(value: Any, options: Any = None) -> bool:
    opts = _options(options)
    text = _as_text(value)
    regex = _INT_LEADING_ZEROES_RE if opts.get("allow_leading_zeroes") else _INT_RE
    if not regex.match(text):
        return False
    return _within(int(text), opts)


_FLOAT_RE = re.compile(r"^[-+]?(?:[0-9]+)?(?:\.[0-9]*)?(?:[eE][-+]?[0-9]+)?$")


def is_float(value: Any, options: Any = None) -> bool:
    text = _as_text(value)
    if text in ("", ".", "-", "+") or not _FLOAT_RE.match(text):
        return False
    try:
        number = float(text)
    except ValueError:
        return False
    return _within(number, _options(options))


_NUMERIC_RE = re.compile(r"^[-+]?(?:[0-9]*\.)?[0-9]+$")


def is_numeric(value: Any, options: Any = None) -> bool:
    return _NUMERIC_RE.match(_as_text(value)) is not None


def is_length(value: Any, minimum: Any = 0, maximum: Any = None) -> bool:
    """Length check; accepts ``(min, max)`` or a single ``{"min":, "max":}`` mapping."""
    if isinstance(minimum, Mapping):
        maximum = minimum.get("max")
        minimum = minimum.get("min", 0)
    length = len(_as_text(value))
    if length < int(minimum or 0):
        return False
    return maximum is None or length <= int(maximum)


def equals(value: Any, comparison: Any) -> bool:
    return _as_text(value) == _as_text(comparison)


def contains(value: Any, seed: Any, options: Any = None) -> bool:
    text, needle = _as_text(value), _as_text(seed)
    if _options(options).get("ignore_case"):
        text, needle = text.lower(), needle.lower()
    return needle in text


def is_in(value: Any, choices: Any) -> bool:
    text = _as_text(value)
    if isinstance(choices, Mapping):
        return text in choices
    if isinstance(choices, Iterable) and not isinstance(choices, str):
        return text in {_as_text(c) for c in choices}
    if isinstance(choices, str):
        return text in choices
    return False


_ALPHA_RE = re.compile(r"^[A-Za-z]+$")
_ALPHANUMERIC_RE = re.compile(r"^[0-9A-Za-z]+$")


def is_alpha(value: Any) -> bool:
    return _ALPHA_RE.match(_as_text(value)) is not None


def is_alphanumeric(value: Any) -> bool:
    return _ALPHANUMERIC_RE.match(_as_text(value)) is not None


_URL_ADAPTER = TypeAdapter(AnyUrl)


def is_url(value: Any, options: Any = None) -> bool:
    text = _as_text(value)
    if not text or any(c.isspace() for c in text):
        return False
    protocols = _options(options).get("protocols", ["http", "https", "ftp"])
    if "://" not in text:
        if _options(options).get("require_protocol"):
            return False
        text = f"http://{text}"
    try:
        url = _URL_ADAPTER.validate_python(text)
    except ValidationError:
        return False
    host = url.host
    if url.scheme.lower() not in protocols or not host:
        return False
    return host == "localhost" or "." in host


PREDICATES: dict[str, PredicateFn] = {
    "isEmpty": is_empty,
    "isEmail": is_email,
    "matches": matches,
    "isInt": is_int,
    "isFloat": is_float,
    "isNumeric": is_numeric,
    "isLength": is_length,
    "equals": equals,
    "contains": contains,
    "isIn": is_in,
    "isAlpha": is_alpha,
    "isAlphanumeric": is_alphanumeric,
    "isURL": is_url,
}


class PredicateLibrary:
    """Name -> predicate lookup consumed by the validation engine."""

    def __init__(self, predicates: Mapping[str, PredicateFn] | None = None):
        self._predicates: dict[str, PredicateFn] = dict(predicates or {})

    def lookup(self, name: str) -> PredicateFn | None:
        return self._predicates.get(name)

    def register(self, name: str, fn: PredicateFn) -> "PredicateLibrary":
        self._predicates[name] = fn
        return self

    def names(self) -> list[str]:
        return sorted(self._predicates)

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __repr__(self) -> str:
        return f"PredicateLibrary(predicates={len(self._predicates)})"


def default_predicates() -> PredicateLibrary:
    """A fresh library holding the built-in predicates."""
    return PredicateLibrary(PREDICATES)
