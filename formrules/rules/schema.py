from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Union

from ..errors import ConfigurationError

Method = Union[str, Callable[..., bool]]

_KEY_ALIASES = {
    "validWhen": "valid_when",
    "skipIfEmpty": "skip_if_empty",
    "allowEmpty": "skip_if_empty",
    "groupId": "group_id",
}

_TEMPLATE_KEYS = {"name", "method", "args", "valid_when", "skip_if_empty", "message"}
_DECLARATION_KEYS = _TEMPLATE_KEYS | {"field", "group_id"}


def _coerce_args(value: Any) -> tuple[Any, ...] | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _normalize_keys(raw: Mapping[str, Any], allowed: set[str], kind: str) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, value in raw.items():
        key = _KEY_ALIASES.get(key, key)
        if key not in allowed:
            raise ConfigurationError(f"Unknown {kind} key {key!r}")
        data[key] = value
    return data


def _optional_bool(value: Any) -> bool | None:
    return None if value is None else bool(value)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class RuleTemplate:
    """A named, reusable rule not yet bound to a field.

    Attributes left as None are "not defined" and fall back to whatever the
    binding declaration supplies.
    """

    name: str
    method: Method | None = None
    args: tuple[Any, ...] | None = None
    valid_when: bool | None = None
    skip_if_empty: bool | None = None
    message: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RuleTemplate":
        data = _normalize_keys(raw, _TEMPLATE_KEYS, "template")
        return cls(
            name=str(data.get("name") or "").strip(),
            method=data.get("method"),
            args=_coerce_args(data.get("args")),
            valid_when=_optional_bool(data.get("valid_when")),
            skip_if_empty=_optional_bool(data.get("skip_if_empty")),
            message=data.get("message"),
        )


@dataclass(frozen=True)
class RuleDeclaration:
    """Caller-supplied rule for a field, possibly referring to a template by name."""

    field: str | None = None
    name: str | None = None
    group_id: str | None = None
    method: Method | None = None
    args: tuple[Any, ...] | None = None
    valid_when: bool | None = None
    skip_if_empty: bool | None = None
    message: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RuleDeclaration":
        data = _normalize_keys(raw, _DECLARATION_KEYS, "rule")
        return cls(
            field=_optional_str(data.get("field")),
            name=_optional_str(data.get("name")),
            group_id=_optional_str(data.get("group_id")),
            method=data.get("method"),
            args=_coerce_args(data.get("args")),
            valid_when=_optional_bool(data.get("valid_when")),
            skip_if_empty=_optional_bool(data.get("skip_if_empty")),
            message=data.get("message"),
        )


@dataclass(frozen=True)
class FieldRule:
    """A fully resolved rule bound to one field path."""

    field: str
    method: Method
    args: tuple[Any, ...] = ()
    valid_when: bool = True
    skip_if_empty: bool = True
    message: str | None = None
    name: str | None = None
    group_id: str | None = None

    @property
    def method_name(self) -> str:
        if isinstance(self.method, str):
            return self.method
        return getattr(self.method, "__name__", repr(self.method))
