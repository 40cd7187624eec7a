"""Rule templates, declarations and predicates (rules as data, predicates as code)."""

from .common import COMMON_RULES
from .declarations import bind_field_rules
from .predicates import PREDICATES, PredicateLibrary, default_predicates
from .registry import clear_global_rules, global_rules, register_global_rules, resolve_method
from .schema import FieldRule, RuleDeclaration, RuleTemplate

__all__ = [
    "COMMON_RULES",
    "PREDICATES",
    "FieldRule",
    "PredicateLibrary",
    "RuleDeclaration",
    "RuleTemplate",
    "bind_field_rules",
    "clear_global_rules",
    "default_predicates",
    "global_rules",
    "register_global_rules",
    "resolve_method",
]
