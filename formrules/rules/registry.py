"""
Rule template registry and rule resolution.

Global templates live in a process-wide dict. Validators copy it when they
are constructed, so registering or clearing globals afterwards does not
affect validators that already exist. Writers are expected to run before
validation starts; there is no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..errors import ConfigurationError
from .common import COMMON_RULES
from .predicates import PredicateFn, PredicateLibrary
from .schema import FieldRule, RuleDeclaration, RuleTemplate

logger = logging.getLogger(__name__)

# Global registry: template name -> template
_GLOBAL_TEMPLATES: dict[str, RuleTemplate] = {}


def coerce_templates(templates: Iterable[RuleTemplate | Mapping[str, Any]]) -> list[RuleTemplate]:
    """Turn mappings into templates and reject unnamed ones."""
    coerced: list[RuleTemplate] = []
    for raw in templates:
        template = raw if isinstance(raw, RuleTemplate) else RuleTemplate.from_mapping(raw)
        if not template.name:
            raise ConfigurationError(f"Rule template is missing a name: {template!r}")
        coerced.append(template)
    return coerced


def register_global_rules(templates: Iterable[RuleTemplate | Mapping[str, Any]]) -> None:
    """
    Register templates available to every validator created afterwards.

    Args:
        templates: Templates (or template mappings); each needs a name

    Raises:
        ConfigurationError: If a template has no name
    """
    for template in coerce_templates(templates):
        _GLOBAL_TEMPLATES[template.name] = template
        logger.debug(f"Registered global rule template {template.name!r}")


def clear_global_rules() -> None:
    """Remove every global template, the built-in ones included."""
    _GLOBAL_TEMPLATES.clear()


def global_rules() -> dict[str, RuleTemplate]:
    """Copy of the current global templates."""
    return dict(_GLOBAL_TEMPLATES)


def get_global_rule(name: str) -> RuleTemplate | None:
    return _GLOBAL_TEMPLATES.get(name)


def resolve_field_rule(declaration: RuleDeclaration, templates: Mapping[str, RuleTemplate]) -> FieldRule:
    """
    Merge a declaration with the template it names.

    Template method, args, valid_when and skip_if_empty win when the
    template defines them. A message given on the declaration always wins.
    """
    field, name = declaration.field, declaration.name
    if not field and not name:
        raise ConfigurationError("Rule declaration needs a field or a name")
    if not field:
        raise ConfigurationError(f"Rule {name!r} is not bound to a field")

    template = templates.get(name) if name else None
    if name and template is None and declaration.method is None:
        raise ConfigurationError(f"Unknown rule template {name!r} for field {field!r}", field=field)

    def pick(attr: str, default: Any) -> Any:
        if template is not None and getattr(template, attr) is not None:
            return getattr(template, attr)
        declared = getattr(declaration, attr)
        return default if declared is None else declared

    method = pick("method", None)
    if method is None:
        raise ConfigurationError(f"Rule for field {field!r} has neither a method nor a template name", field=field)

    return FieldRule(
        field=field,
        method=method,
        args=tuple(pick("args", ())),
        valid_when=bool(pick("valid_when", True)),
        skip_if_empty=bool(pick("skip_if_empty", True)),
        message=declaration.message or (template.message if template is not None else None),
        name=name,
        group_id=declaration.group_id,
    )


def resolve_method(rule: FieldRule, predicates: PredicateLibrary) -> PredicateFn:
    """Return the callable behind a rule's method."""
    if callable(rule.method):
        return rule.method
    fn = predicates.lookup(rule.method)
    if fn is None:
        raise ConfigurationError(
            f"Unknown validation method {rule.method!r} for field {rule.field!r}",
            field=rule.field,
            method=rule.method,
        )
    return fn


register_global_rules(COMMON_RULES)
