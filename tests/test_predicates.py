from __future__ import annotations

import re

import pytest

from formrules.rules.predicates import (
    PREDICATES,
    PredicateLibrary,
    contains,
    default_predicates,
    equals,
    is_email,
    is_empty,
    is_float,
    is_in,
    is_int,
    is_length,
    is_numeric,
    is_url,
    matches,
)


def test_is_empty() -> None:
    assert is_empty("")
    assert is_empty(None)
    assert not is_empty(" ")
    assert is_empty("  ", {"ignore_whitespace": True})


def test_is_empty_handles_containers_and_booleans() -> None:
    assert is_empty([])
    assert is_empty({})
    assert is_empty(False)
    assert not is_empty(True)
    assert not is_empty(["a"])
    assert not is_empty({"street": "Main"})


def test_is_email() -> None:
    assert is_email("foo@bar.se")
    assert is_email("first.last+tag@sub.example.com")
    assert not is_email("foo@bar")
    assert not is_email("foo bar@example.com")
    assert not is_email("@example.com")


def test_is_email_accepts_internationalized_addresses() -> None:
    assert is_email("josé@example.com")
    assert not is_email("josé@example.com", {"ascii_only": True})


def test_matches_accepts_compiled_and_string_patterns() -> None:
    assert matches("abc123", re.compile(r"\d+"))
    assert matches("ABC", "^abc$", "i")
    assert not matches("ABC", "^abc$")


def test_is_int_respects_bounds_and_leading_zeroes() -> None:
    assert is_int("42")
    assert is_int("-7")
    assert not is_int("4.2")
    assert not is_int("007")
    assert is_int("007", {"allow_leading_zeroes": True})
    assert not is_int("11", {"min": 1, "max": 10})


def test_is_float_and_is_numeric() -> None:
    assert is_float("3.14")
    assert is_float("1e5")
    assert not is_float(".")
    assert not is_float("abc")
    assert is_numeric("-12.5")
    assert not is_numeric("12a")


def test_is_length_positional_and_options() -> None:
    assert is_length("abc", 1, 3)
    assert not is_length("abcd", 1, 3)
    assert is_length("abc", {"min": 2})
    assert not is_length("a", {"min": 2})


def test_equals_contains_is_in() -> None:
    assert equals("5", 5)
    assert contains("Hello World", "world", {"ignore_case": True})
    assert not contains("Hello World", "world")
    assert is_in("b", ["a", "b"])
    assert not is_in("c", ["a", "b"])


def test_is_url() -> None:
    assert is_url("https://example.com/path")
    assert is_url("example.com")
    assert not is_url("example.com", {"require_protocol": True})
    assert not is_url("gopher://example.com")
    assert not is_url("not a url")


def test_text_predicates_reject_containers() -> None:
    with pytest.raises(TypeError):
        is_email(["foo@bar.se"])


def test_library_lookup_and_register() -> None:
    library = default_predicates()
    assert library.lookup("isEmail") is is_email
    assert library.lookup("nope") is None

    library.register("isFoo", lambda value: value == "foo")
    assert "isFoo" in library
    assert "isFoo" not in PREDICATES


def test_empty_library_has_no_predicates() -> None:
    assert PredicateLibrary().names() == []
