"""
Shorthand rule declarations for input bindings.

A binding describes a field's rules in whichever shape is convenient:

    "required"                      a template name
    "required|email"                several template names
    ["required", {...}, fn]         a list mixing any of these
    lambda value: ...               an inline predicate
    {"method": "isInt", ...}        a full declaration mapping

bind_field_rules() turns all of them into RuleDeclaration objects bound to
one field, ready for FormValidator.register_field_rules().
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from ..errors import ConfigurationError
from .schema import RuleDeclaration, RuleTemplate


def split_shorthand(validate: Any) -> list[Any]:
    """``"a|b"`` -> ``["a", "b"]``; lists pass through; anything else is wrapped."""
    if isinstance(validate, (list, tuple)):
        return list(validate)
    if isinstance(validate, str):
        return [part.strip() for part in validate.split("|") if part.strip()]
    if validate is None:
        return []
    return [validate]


def bind_field_rules(
    field: str,
    validate: Any,
    *,
    message: str | None = None,
    group_id: str | None = None,
    templates: Mapping[str, RuleTemplate] | None = None,
) -> list[RuleDeclaration]:
    """
    Normalize a binding's rule shorthand into declarations for `field`.

    Args:
        field: Field path the rules are bound to
        validate: Shorthand (see module docstring)
        message: Message overriding every rule's own message
        group_id: Group id applied to rules that do not carry one
        templates: When given, template names are checked against it

    Raises:
        ConfigurationError: On an unknown template name or unsupported shape
    """
    declarations: list[RuleDeclaration] = []
    for item in split_shorthand(validate):
        if isinstance(item, str):
            if templates is not None and item not in templates:
                raise ConfigurationError(f"Missing validation rule {item!r}", field=field)
            declaration = RuleDeclaration(name=item)
        elif isinstance(item, RuleDeclaration):
            declaration = item
        elif isinstance(item, Mapping):
            declaration = RuleDeclaration.from_mapping(item)
        elif callable(item):
            declaration = RuleDeclaration(method=item)
        else:
            raise ConfigurationError(f"Unsupported rule shorthand {item!r}", field=field)

        declarations.append(
            replace(
                declaration,
                field=field,
                message=message or declaration.message,
                group_id=group_id or declaration.group_id,
            )
        )
    return declarations
