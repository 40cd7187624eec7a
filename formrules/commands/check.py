"""Check and template listing command implementations."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table

from ..engine import ValidationResult
from ..errors import FormRulesError
from ..rules.load import build_validator, load_ruleset
from ..rules.registry import global_rules
from ..rules.schema import RuleTemplate


def load_form_state(path: Path) -> dict[str, Any]:
    """Read a form state from JSON, or YAML for .yaml/.yml files."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: form state must be a mapping, got {type(data).__name__}")
    return data


def _print_result(console: Console, result: ValidationResult, title: str) -> None:
    table = Table(title=title)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Message")
    table.add_column("Group", style="dim")

    for path, state in result.items():
        status = "[bold red]invalid[/]" if state.is_invalid else "[green]ok[/]"
        table.add_row(path, status, state.message, state.group_id or "")

    console.print(table)


def run_check(ruleset_path: Path, state_path: Path, *, output_json: bool = False) -> int:
    """Validate a form state file against a ruleset.

    Returns:
        Exit code (0 = valid, 1 = invalid fields, 2 = unreadable input)
    """
    err = Console(stderr=True)

    try:
        ruleset = load_ruleset(ruleset_path)
        validator = build_validator(ruleset)
        state = load_form_state(state_path)
        result = validator.validate(state)
    except (FormRulesError, ValueError, yaml.YAMLError) as exc:
        err.print(f"Error: {exc}", style="bold red")
        return 2

    if output_json:
        print(json.dumps({"ruleset": ruleset.ruleset_id, "version": ruleset.version, **result.to_dict()}, indent=2))
    else:
        _print_result(Console(), result, title=f"{ruleset.ruleset_id} v{ruleset.version}")
        invalid = len(result.errors())
        if invalid:
            err.print(f"✗ {invalid} invalid field(s)", style="bold red")
        else:
            err.print("✓ All fields valid", style="bold green")

    return 0 if result.is_valid else 1


def _describe_args(template: RuleTemplate) -> str:
    if not template.args:
        return ""
    return ", ".join(getattr(a, "pattern", None) or repr(a) for a in template.args)


def _template_to_dict(template: RuleTemplate) -> dict[str, Any]:
    return {
        "name": template.name,
        "method": template.method if isinstance(template.method, str) else getattr(template.method, "__name__", None),
        "args": [getattr(a, "pattern", a) for a in (template.args or ())],
        "valid_when": template.valid_when,
        "skip_if_empty": template.skip_if_empty,
        "message": template.message,
    }


def run_templates(ruleset_path: Path | None = None, *, output_json: bool = False) -> int:
    """List the global templates plus those a ruleset defines."""
    err = Console(stderr=True)

    templates = global_rules()
    source = "global"
    if ruleset_path is not None:
        try:
            ruleset = load_ruleset(ruleset_path)
        except FormRulesError as exc:
            err.print(f"Error: {exc}", style="bold red")
            return 2
        templates.update({t.name: t for t in ruleset.templates})
        source = ruleset.ruleset_id

    ordered = sorted(templates.values(), key=lambda t: t.name)

    if output_json:
        print(json.dumps([_template_to_dict(t) for t in ordered], indent=2))
        return 0

    table = Table(title=f"Rule templates ({source})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Method", style="magenta")
    table.add_column("Args", style="dim")
    table.add_column("Message")

    for t in ordered:
        method = _template_to_dict(t)["method"] or ""
        table.add_row(t.name, method, _describe_args(t), t.message or "")

    Console().print(table)
    return 0
