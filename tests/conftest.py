"""Pytest configuration and fixtures."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from formrules.rules import COMMON_RULES, clear_global_rules, register_global_rules


@pytest.fixture(autouse=True)
def reset_global_rules() -> Iterator[None]:
    """Every test starts with only the built-in global templates."""
    clear_global_rules()
    register_global_rules(COMMON_RULES)
    yield
    clear_global_rules()
    register_global_rules(COMMON_RULES)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
