"""Check that units used in values suit their property."""

from __future__ import annotations

import re
import sys

from prettystrict.check_property import Rule
from prettystrict.check_value import AllowedValues, UnitRange, ValueList
from prettystrict.errors import ErrorKind, LintError, PrettystrictError

_UNIT = re.compile(r"-?\d*\.?\d+\s*([a-z%]+)", re.IGNORECASE)


def unit_check(rule: Rule, known_values: ValueList) -> list[LintError]:
    """Report units not permitted for a property, or on keyword properties."""
    errors = []
    for decl in rule.declaration:
        prop = decl.name
        match = _UNIT.fullmatch(decl.value.strip())
        if match is None:
            continue
        unit = match.group(1)
        value_rule = known_values.properties.get(prop)

        if isinstance(value_rule, UnitRange):
            if unit in value_rule.units:
                continue
            message = f"Unit '{unit}' is not allowed for '{prop}'"
            kind = PrettystrictError(ErrorKind.WRONG_UNIT_DECLARED)
        elif isinstance(value_rule, AllowedValues):
            message = f"Unexpected unit '{unit}' for keyword-only property '{prop}'"
            kind = PrettystrictError(ErrorKind.WRONG_UNIT_DECLARED)
        elif value_rule is None:
            message = f"Unknown property '{prop}' — no unit validation rule found"
            kind = PrettystrictError(ErrorKind.UNKNOWN_PROPERTY, prop)
        else:
            print("invalid input", file=sys.stderr)
            continue

        errors.append(
            LintError(selector=rule.selector, property=prop, message=message, kind=kind)
        )
    return errors