"""Cross-field rules sharing a group id."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from formrules import FormValidator


def _passwords_match(value: Any, group: Mapping[str, Any]) -> bool:
    return group.get("password") == group.get("confirmPassword")


def _password_validator() -> FormValidator:
    return FormValidator(
        [
            {
                "field": "password",
                "method": _passwords_match,
                "group_id": "passwords",
                "skip_if_empty": False,
                "message": "Passwords do not match",
            },
            {
                "field": "confirmPassword",
                "method": _passwords_match,
                "group_id": "passwords",
                "skip_if_empty": False,
                "message": "Passwords do not match",
            },
        ]
    )


def test_password_confirmation_resolves_both_fields() -> None:
    validator = _password_validator()

    result = validator.validate({"password": "P1"})
    assert result["password"].is_invalid is True
    assert result["password"].group_id == "passwords"
    assert result["confirmPassword"].is_invalid is False

    result = validator.validate({"confirmPassword": "Q1"})
    assert result["confirmPassword"].is_invalid is True
    assert result["password"].is_invalid is True

    result = validator.validate({"confirmPassword": "P1"})
    assert result["password"].is_invalid is False
    assert result["confirmPassword"].is_invalid is False
    assert result.is_valid is True


def test_group_success_marks_every_member_valid() -> None:
    validator = FormValidator(
        [
            {"field": "start", "method": lambda v, group: group["start"] <= group["end"], "group_id": "range"},
            {"field": "end", "method": lambda v, group: group["start"] <= group["end"], "group_id": "range"},
            {"field": "end", "name": "required"},
        ]
    )
    result = validator.validate({"start": "b", "end": "a"})
    assert result["start"].is_invalid is True
    assert result["end"].is_invalid is True

    # "start" passes first and clears every entry flagged by the group
    result = validator.validate({"start": "a"})
    assert result.is_valid is True
    assert result["end"].group_id is None


def test_group_context_keyed_by_last_path_segment() -> None:
    seen: dict[str, Any] = {}

    def capture(value: Any, group: Mapping[str, Any]) -> bool:
        seen.update(group)
        return True

    validator = FormValidator(
        [
            {"field": "account.password", "method": capture, "group_id": "pw"},
            {"field": "account.repeat", "method": capture, "group_id": "pw"},
            {"field": "other", "method": capture, "group_id": "different"},
        ]
    )
    validator.validate({"account": {"password": "abc"}, "other": "x"})
    assert seen == {"password": "abc", "repeat": None, "other": "x"}


def test_group_success_does_not_clear_other_groups() -> None:
    validator = FormValidator(
        [
            {"field": "a", "method": lambda v: v == "ok", "group_id": "one"},
            {"field": "b", "method": lambda v: v == "ok", "group_id": "two"},
        ]
    )
    validator.validate({"a": "bad", "b": "bad"})
    result = validator.validate({"a": "ok"})
    assert result["a"].is_invalid is False
    assert result["b"].is_invalid is True
