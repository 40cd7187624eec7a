from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..engine import FormValidator, ValidatorOptions
from ..errors import ConfigurationError, RulesetLoadError
from .predicates import PredicateLibrary
from .schema import RuleDeclaration, RuleTemplate


@dataclass(frozen=True)
class RulesetDef:
    ruleset_id: str
    version: int
    description: str | None = None
    options: ValidatorOptions = field(default_factory=ValidatorOptions)
    templates: list[RuleTemplate] = field(default_factory=list)
    rules: list[RuleDeclaration] = field(default_factory=list)


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _load_options(raw: dict[str, Any]) -> ValidatorOptions:
    defaults = ValidatorOptions()
    convert = raw.get("convert_number_to_string", defaults.convert_number_to_string)
    message = raw.get("default_message", defaults.default_message)
    return ValidatorOptions(
        convert_number_to_string=bool(convert),
        default_message=str(message) if message is not None else defaults.default_message,
    )


def parse_ruleset(data: dict[str, Any], *, source: str | None = None) -> RulesetDef:
    """
    Build a RulesetDef from already-decoded data.

    Rules are data, predicates are code: a ruleset can only refer to
    predicates by name.
    """
    ruleset_id = str(data.get("ruleset_id", "")).strip()
    if not ruleset_id:
        raise RulesetLoadError("ruleset_id is required", path=source)

    try:
        version = int(data.get("version", 1))
    except (TypeError, ValueError):
        raise RulesetLoadError("version must be a positive integer", path=source) from None
    if version <= 0:
        raise RulesetLoadError("version must be a positive integer", path=source)

    templates: list[RuleTemplate] = []
    rules: list[RuleDeclaration] = []
    try:
        for raw in data.get("templates", []):
            if not isinstance(raw, dict):
                raise RulesetLoadError("each [[templates]] entry must be a table", path=source)
            template = RuleTemplate.from_mapping(raw)
            if not template.name:
                raise RulesetLoadError("template is missing a name", path=source)
            templates.append(template)

        for raw in data.get("rules", []):
            if not isinstance(raw, dict):
                raise RulesetLoadError("each [[rules]] entry must be a table", path=source)
            rules.append(RuleDeclaration.from_mapping(raw))
    except ConfigurationError as exc:
        raise RulesetLoadError(str(exc), path=source) from exc

    description = data.get("description")
    return RulesetDef(
        ruleset_id=ruleset_id,
        version=version,
        description=str(description) if isinstance(description, str) else None,
        options=_load_options(_coerce_dict(data.get("options"))),
        templates=templates,
        rules=rules,
    )


def load_ruleset(path: Path) -> RulesetDef:
    """Load a ruleset from TOML."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise RulesetLoadError(f"invalid TOML: {exc}", path=str(path)) from exc
    return parse_ruleset(data, source=str(path))


def build_validator(ruleset: RulesetDef, *, predicates: PredicateLibrary | None = None) -> FormValidator:
    """A FormValidator configured with the ruleset's options, templates and rules."""
    validator = FormValidator(options=ruleset.options, predicates=predicates)
    validator.register_form_rules(ruleset.templates)
    validator.register_field_rules(ruleset.rules)
    return validator
