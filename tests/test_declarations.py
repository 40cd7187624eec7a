from __future__ import annotations

import pytest

from formrules import ConfigurationError, FormValidator
from formrules.rules import RuleDeclaration, bind_field_rules, global_rules
from formrules.rules.declarations import split_shorthand


def test_split_shorthand() -> None:
    assert split_shorthand("required|email") == ["required", "email"]
    assert split_shorthand(["required"]) == ["required"]
    assert split_shorthand(None) == []


def test_pipe_separated_names() -> None:
    declarations = bind_field_rules("email", "required|email")
    assert [d.name for d in declarations] == ["required", "email"]
    assert all(d.field == "email" for d in declarations)


def test_mixed_list_with_function_and_mapping() -> None:
    check = lambda value: int(value) > 100  # noqa: E731
    declarations = bind_field_rules(
        "amount",
        ["required", {"method": "isInt", "message": "Digits"}, check],
        group_id="totals",
    )
    assert declarations[0] == RuleDeclaration(field="amount", name="required", group_id="totals")
    assert declarations[1].method == "isInt"
    assert declarations[1].message == "Digits"
    assert declarations[2].method is check
    assert {d.group_id for d in declarations} == {"totals"}


def test_custom_message_overrides_every_rule() -> None:
    declarations = bind_field_rules("amount", ["required", {"method": "isInt", "message": "Digits"}], message="Bad amount")
    assert {d.message for d in declarations} == {"Bad amount"}


def test_existing_group_id_is_kept() -> None:
    declarations = bind_field_rules("a", [{"method": "isInt", "group_id": "own"}], group_id="fallback")
    assert declarations[0].group_id == "own"


def test_unknown_template_name_rejected_when_templates_given() -> None:
    with pytest.raises(ConfigurationError, match="Missing validation rule 'nope'"):
        bind_field_rules("a", "required|nope", templates=global_rules())


def test_unsupported_shape_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unsupported rule shorthand"):
        bind_field_rules("a", [42])


def test_bound_declarations_register_and_validate() -> None:
    validator = FormValidator()
    validator.register_field_rules(bind_field_rules("amount", ["required", lambda v: int(v) > 100], message="Too small"))
    assert validator.validate({"amount": "50"})["amount"].message == "Too small"
    assert validator.validate({"amount": "500"}).is_valid is True
