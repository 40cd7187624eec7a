"""Exceptions raised by formrules.

A failing predicate is never an exception: it is recorded in the
ValidationResult. Only setup mistakes are raised.
"""

from __future__ import annotations


class FormRulesError(Exception):
    """Base class for all formrules errors."""


class ConfigurationError(FormRulesError, ValueError):
    """A rule, template or method reference cannot be resolved."""

    def __init__(self, message: str, *, field: str | None = None, method: str | None = None):
        super().__init__(message)
        self.field = field
        self.method = method


class RulesetLoadError(FormRulesError, ValueError):
    """A ruleset file is malformed."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
