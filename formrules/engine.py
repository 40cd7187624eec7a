"""
Incremental form validation engine.

A FormValidator keeps the merged form state and the last result between
calls. Each validate() call merges a partial update, runs every registered
rule once in registration order, and returns a fresh ValidationResult that
also becomes the starting point for the next call.
"""

from __future__ import annotations

import copy
import functools
import inspect
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from .errors import ConfigurationError
from .paths import MISSING, get_path, last_segment
from .rules import registry
from .rules.predicates import PredicateFn, PredicateLibrary, default_predicates
from .rules.schema import FieldRule, RuleDeclaration, RuleTemplate
from .state import FormStateCache
from .values import is_empty_value, is_number, number_to_text

logger = logging.getLogger(__name__)

_CONTEXT_KEYWORDS = ("state", "group")


@dataclass(frozen=True)
class ValidatorOptions:
    convert_number_to_string: bool = True
    default_message: str = "Invalid"


@dataclass(frozen=True)
class FieldValidationState:
    is_invalid: bool = False
    message: str = ""
    group_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"is_invalid": self.is_invalid, "message": self.message, "group_id": self.group_id}


VALID = FieldValidationState()


class ValidationResult(Mapping[str, FieldValidationState]):
    """Field path -> FieldValidationState, plus the overall is_valid flag."""

    def __init__(self, fields: Mapping[str, FieldValidationState] | None = None):
        self._fields: dict[str, FieldValidationState] = dict(fields or {})
        self._is_valid = not any(state.is_invalid for state in self._fields.values())

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def fields(self) -> dict[str, FieldValidationState]:
        return dict(self._fields)

    def errors(self) -> dict[str, str]:
        """Messages of the invalid fields."""
        return {path: state.message for path, state in self._fields.items() if state.is_invalid}

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self._is_valid,
            "fields": {path: state.to_dict() for path, state in self._fields.items()},
        }

    def __getitem__(self, path: str) -> FieldValidationState:
        return self._fields[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self._is_valid}, invalid={sorted(self.errors())})"


@functools.lru_cache(maxsize=512)
def _context_keywords(fn: PredicateFn) -> frozenset[str]:
    """Which of state=/group= the predicate accepts."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return frozenset()

    accepted: set[str] = set()
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            return frozenset(_CONTEXT_KEYWORDS)
        if param.name in _CONTEXT_KEYWORDS and param.kind in (
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.KEYWORD_ONLY,
        ):
            accepted.add(param.name)
    return frozenset(accepted)


def call_predicate(
    fn: PredicateFn,
    value: Any,
    args: tuple[Any, ...],
    state: Mapping[str, Any],
    group: Mapping[str, Any],
) -> bool:
    """Invoke a predicate with the context arguments its signature asks for."""
    try:
        keywords = _context_keywords(fn)
    except TypeError:
        # unhashable callable
        keywords = _context_keywords.__wrapped__(fn)
    context = {"state": state, "group": group}
    kwargs = {name: context[name] for name in keywords}
    return bool(fn(value, *args, **kwargs))


class FormValidator:
    """
    Validates a form incrementally against field rules.

    Usage:
    ```python
    validator = FormValidator([
        {"field": "username", "name": "required"},
        {"field": "email", "name": "email"},
    ])
    result = validator.validate({"username": ""})
    result.is_valid              # False
    result["username"].message   # "This field is required"
    ```
    """

    def __init__(
        self,
        rules: Iterable[RuleDeclaration | Mapping[str, Any]] | None = None,
        *,
        options: ValidatorOptions | None = None,
        predicates: PredicateLibrary | None = None,
        convert_number_to_string: bool | None = None,
        default_message: str | None = None,
    ):
        options = options or ValidatorOptions()
        if convert_number_to_string is not None:
            options = replace(options, convert_number_to_string=convert_number_to_string)
        if default_message is not None:
            options = replace(options, default_message=default_message)

        self.options = options
        self._predicates = predicates if predicates is not None else default_predicates()
        self._templates: dict[str, RuleTemplate] = registry.global_rules()
        self._cache = FormStateCache()
        self._rules: list[FieldRule] = []
        self._result: ValidationResult | None = None

        if rules:
            self.register_field_rules(rules)

    # -- global scope -------------------------------------------------------

    @classmethod
    def register_global_rules(cls, templates: Iterable[RuleTemplate | Mapping[str, Any]]) -> None:
        """Register templates shared by validators created from now on."""
        registry.register_global_rules(templates)

    @classmethod
    def clear_global_rules(cls) -> None:
        registry.clear_global_rules()

    # -- registration -------------------------------------------------------

    def register_form_rules(self, templates: Iterable[RuleTemplate | Mapping[str, Any]]) -> "FormValidator":
        """Register templates visible to this validator only, shadowing globals."""
        for template in registry.coerce_templates(templates):
            self._templates[template.name] = template
            logger.debug(f"Registered form rule template {template.name!r}")
        return self

    def register_field_rules(self, declarations: Iterable[RuleDeclaration | Mapping[str, Any]]) -> "FormValidator":
        """
        Bind rules to fields.

        A named rule is registered once per (field, name); registering it
        again is a no-op. Unnamed rules are always appended.

        Raises:
            ConfigurationError: If a declaration cannot be resolved
        """
        if isinstance(declarations, (RuleDeclaration, Mapping)):
            raise ConfigurationError("register_field_rules() expects a list of rule declarations")

        for raw in declarations:
            declaration = raw if isinstance(raw, RuleDeclaration) else RuleDeclaration.from_mapping(raw)
            rule = registry.resolve_field_rule(declaration, self._templates)
            if rule.name and any(r.field == rule.field and r.name == rule.name for r in self._rules):
                logger.debug(f"Rule {rule.name!r} already registered for {rule.field!r}; skipping")
                continue
            self._rules.append(rule)
            logger.debug(f"Registered rule {rule.name or rule.method_name!r} for {rule.field!r}")
        return self

    # -- state --------------------------------------------------------------

    def set_field_value(self, path: str, value: Any) -> "FormValidator":
        """Seed a value without validating (e.g. an input's initial value)."""
        self._cache.set_field_value(path, value)
        return self

    @property
    def form_state(self) -> dict[str, Any]:
        """A copy of the merged form state."""
        return copy.deepcopy(self._cache.snapshot)

    @property
    def rules(self) -> tuple[FieldRule, ...]:
        return tuple(self._rules)

    @property
    def templates(self) -> dict[str, RuleTemplate]:
        return dict(self._templates)

    @property
    def result(self) -> ValidationResult | None:
        return self._result

    # -- validation ---------------------------------------------------------

    def _group_context(self, group_id: str, state: Mapping[str, Any]) -> dict[str, Any]:
        group: dict[str, Any] = {}
        for member in self._rules:
            if member.group_id != group_id:
                continue
            value = get_path(state, member.field)
            group[last_segment(member.field)] = None if value is MISSING else value
        return group

    def validate(self, partial_state: Mapping[str, Any] | None = None) -> ValidationResult:
        """
        Merge `partial_state` into the cached form state and run every rule.

        Fields that have never been given a value are skipped, and the first
        failing rule of a field wins within one call. When a grouped rule
        passes, every field flagged by the same group is cleared.
        """
        state = self._cache.merge(partial_state)
        # predicates get a read-only copy so they cannot edit the cache
        readonly_state = MappingProxyType(copy.deepcopy(state))

        fields = self._result.fields if self._result is not None else {}
        for rule in self._rules:
            fields.setdefault(rule.field, VALID)

        invalidated: set[str] = set()

        for rule in self._rules:
            value = get_path(state, rule.field)
            if value is MISSING or rule.field in invalidated:
                continue

            if self.options.convert_number_to_string and is_number(value):
                value = number_to_text(value)

            if rule.skip_if_empty and is_empty_value(value):
                logger.debug(f"Skipping {rule.method_name!r} on empty field {rule.field!r}")
                continue

            group = self._group_context(rule.group_id, state) if rule.group_id else {}
            fn = registry.resolve_method(rule, self._predicates)
            outcome = call_predicate(fn, value, rule.args, readonly_state, group)

            if outcome != rule.valid_when:
                fields[rule.field] = FieldValidationState(
                    is_invalid=True,
                    message=rule.message or self.options.default_message,
                    group_id=rule.group_id,
                )
                invalidated.add(rule.field)
                logger.debug(f"Field {rule.field!r} failed {rule.method_name!r}")
                continue

            fields[rule.field] = VALID
            if rule.group_id:
                for path, entry in list(fields.items()):
                    if entry.group_id == rule.group_id:
                        fields[path] = VALID

        self._result = ValidationResult(fields)
        return self._result

    def __repr__(self) -> str:
        return f"FormValidator(rules={len(self._rules)}, templates={len(self._templates)})"
