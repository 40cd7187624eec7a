"""formrules - incremental, rule-based form field validation."""

__version__ = "0.1.0"

from .engine import FieldValidationState, FormValidator, ValidationResult, ValidatorOptions
from .errors import ConfigurationError, FormRulesError, RulesetLoadError
from .paths import MISSING, bind_value, get_path, set_path
from .rules import (
    COMMON_RULES,
    PredicateLibrary,
    RuleDeclaration,
    RuleTemplate,
    bind_field_rules,
    clear_global_rules,
    register_global_rules,
)
from .state import FormStateCache

__all__ = [
    "__version__",
    "COMMON_RULES",
    "ConfigurationError",
    "FieldValidationState",
    "FormRulesError",
    "FormStateCache",
    "FormValidator",
    "MISSING",
    "PredicateLibrary",
    "RuleDeclaration",
    "RuleTemplate",
    "RulesetLoadError",
    "ValidationResult",
    "ValidatorOptions",
    "bind_field_rules",
    "bind_value",
    "clear_global_rules",
    "get_path",
    "register_global_rules",
    "set_path",
]
