"""Templates available to every validator unless the global scope is cleared."""

from __future__ import annotations

import re

from .schema import RuleTemplate

_DAY = r"(0[1-9]|[12][0-9]|3[01])"
_MONTH = r"(0[1-9]|1[0-2])"
_YEAR = r"(19|20)[0-9]{2}"

COMMON_RULES: list[RuleTemplate] = [
    RuleTemplate(
        name="required",
        method="isEmpty",
        valid_when=False,
        skip_if_empty=False,
        message="This field is required",
    ),
    RuleTemplate(
        name="email",
        method="isEmail",
        valid_when=True,
        message="Invalid email address",
    ),
    RuleTemplate(
        name="phone",
        method="matches",
        args=(re.compile(r"^(\+\d{1,3}[- ]?)?\d{10}$|^$"),),
        valid_when=True,
        message="Must have the format 07XXXXXXXX",
    ),
    RuleTemplate(
        name="orgNo",
        method="matches",
        args=(re.compile(r"^[0-9]+(-[0-9]+)+$"),),
        valid_when=True,
        message="Enter an organisation number, e.g. 554433-2211",
    ),
    RuleTemplate(
        name="personalNumber",
        method="matches",
        args=(re.compile(rf"^{_YEAR}{_MONTH}{_DAY}-[0-9]{{4}}$"),),
        valid_when=True,
        message="Enter a valid personal number, e.g. 19901010-1122",
    ),
    RuleTemplate(
        name="zipCode",
        method="matches",
        args=(re.compile(r"^\d{3}\s?\d{2}$"),),
        valid_when=True,
        message="Enter a valid postcode, e.g. 123 45",
    ),
    RuleTemplate(
        name="number",
        method="isInt",
        valid_when=True,
        message="Enter digits only",
    ),
    RuleTemplate(
        name="numberWithSpace",
        method="matches",
        args=(re.compile(r"^[\d\s]+$"),),
        valid_when=True,
        message="Enter digits only",
    ),
    RuleTemplate(
        name="yyyy-mm-dd",
        method="matches",
        args=(re.compile(rf"^{_YEAR}-{_MONTH}-{_DAY}$"),),
        valid_when=True,
        message="Enter a date in the format YYYY-MM-DD",
    ),
    RuleTemplate(
        name="password",
        method="matches",
        args=(re.compile(r"[0-9a-zA-Z]{6,}"),),
        valid_when=True,
        message="The password must contain at least 6 characters",
    ),
]
