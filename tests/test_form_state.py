from __future__ import annotations

from formrules.paths import MISSING
from formrules.state import FormStateCache


def test_merge_preserves_unspecified_keys() -> None:
    cache = FormStateCache()
    cache.merge({"first": "alice"})
    cache.merge({"last": "svensson"})
    assert cache.snapshot == {"first": "alice", "last": "svensson"}


def test_merge_does_not_mutate_previous_snapshot() -> None:
    cache = FormStateCache({"first": "alice"})
    before = cache.snapshot
    cache.merge({"first": "bob"})
    assert before == {"first": "alice"}
    assert cache.snapshot == {"first": "bob"}


def test_merge_is_shallow_per_top_level_key() -> None:
    cache = FormStateCache({"company": {"name": "Acme", "city": "Lund"}})
    cache.merge({"company": {"name": "Beta"}})
    assert cache.snapshot == {"company": {"name": "Beta"}}


def test_set_field_value_sets_nested_path() -> None:
    cache = FormStateCache({"company": {"city": "Lund"}})
    before = cache.snapshot
    cache.set_field_value("company.name", "Acme")
    assert cache.get("company.name") == "Acme"
    assert cache.get("company.city") == "Lund"
    assert before == {"company": {"city": "Lund"}}


def test_get_unset_field_is_missing() -> None:
    assert FormStateCache().get("anything") is MISSING
