"""Value rules and checks of declared values against them."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from prettystrict.check_property import Rule
from prettystrict.errors import ErrorKind, LintError, PrettystrictError

_NUMBER_UNIT = re.compile(r"([0-9]*\.?[0-9]+)([a-zA-Z%]+)")


@dataclass
class Range:
    """Inclusive numeric bounds."""

    min: float
    max: float


@dataclass
class KeywordRule:
    """Properties allowed or ignored alongside a keyword."""

    allowed: list[str] | None = None
    ignores: list[str] | None = None


@dataclass
class AllowedValues:
    """A property whose value must be one of a fixed set."""

    allowed: list[str]


@dataclass
class UnitRange:
    """A property whose value is a number with a unit within a range."""

    units: list[str]
    range: Range


@dataclass
class KeywordGroup:
    """A property whose value is one of a set of keywords with sub-rules."""

    keywords: dict[str, KeywordRule] = field(default_factory=dict)


ValueRule = Union[AllowedValues, UnitRange, KeywordGroup]


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _optional_str_list(data: dict, key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not _is_str_list(value):
        raise ValueError(f"field `{key}` must be a list of strings")
    return list(value)


def _keyword_rule(data: Any) -> KeywordRule:
    if not isinstance(data, dict):
        raise ValueError("keyword rule must be an object")
    return KeywordRule(
        allowed=_optional_str_list(data, "allowed"),
        ignores=_optional_str_list(data, "ignores"),
    )


def parse_value_rule(data: Any) -> ValueRule:
    """Interpret a JSON object as the first value rule shape it fits."""
    if isinstance(data, dict):
        if _is_str_list(data.get("allowed")):
            return AllowedValues(list(data["allowed"]))
        units, bounds = data.get("units"), data.get("range")
        if (
            _is_str_list(units)
            and isinstance(bounds, dict)
            and _is_number(bounds.get("min"))
            and _is_number(bounds.get("max"))
        ):
            return UnitRange(list(units), Range(float(bounds["min"]), float(bounds["max"])))
        keywords = data.get("keywords")
        if isinstance(keywords, dict):
            try:
                return KeywordGroup(
                    {name: _keyword_rule(rule) for name, rule in keywords.items()}
                )
            except ValueError:
                pass
    raise ValueError("data did not match any variant of ValueRule")


@dataclass
class ValueList:
    """Value rules per property plus optional shorthand groupings."""

    properties: dict[str, ValueRule]
    shorthands: dict[str, list[str]] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ValueList":
        """Build from decoded JSON; every key but ``shorthands`` is a property."""
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        properties = {
            name: parse_value_rule(rule)
            for name, rule in data.items()
            if name != "shorthands"
        }
        raw = data.get("shorthands")
        shorthands = None
        if raw is not None:
            if not isinstance(raw, dict) or not all(_is_str_list(v) for v in raw.values()):
                raise ValueError("field `shorthands` must map names to lists of strings")
            shorthands = {name: list(longhands) for name, longhands in raw.items()}
        return cls(properties=properties, shorthands=shorthands)


def load_known_values(path: str | Path) -> ValueList:
    """Load value rules from a JSON file, raising LintError on failure."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise LintError(
            "", "", str(exc), PrettystrictError(ErrorKind.IO_ERROR, str(exc))
        ) from exc
    try:
        return ValueList.from_dict(json.loads(text))
    except ValueError as exc:
        raise LintError(
            "", "", str(exc), PrettystrictError(ErrorKind.JSON_ERROR, str(exc))
        ) from exc


def _unit_value_ok(value: str, rule: UnitRange) -> bool:
    match = _NUMBER_UNIT.fullmatch(value)
    if match is None:
        return False
    number, unit = float(match.group(1)), match.group(2)
    return unit in rule.units and rule.range.min <= number <= rule.range.max


def check_value(rule: Rule, known_values: ValueList) -> list[LintError]:
    """Report declared values that break the known value rules."""
    errors: list[LintError] = []

    def report(prop: str, value: str, message: str) -> None:
        errors.append(
            LintError(
                selector=rule.selector,
                property=prop,
                message=message,
                kind=PrettystrictError(ErrorKind.UNKNOWN_VALUE, value),
            )
        )

    for decl in rule.declaration:
        prop, value = decl.name, decl.value
        value_rule = known_values.properties.get(prop)

        if value_rule is None:
            report(prop, value, f"No known values defined for '{prop}'")
        elif isinstance(value_rule, AllowedValues):
            if value not in value_rule.allowed:
                report(prop, value, f"‘{value}’ is not an allowed value for {prop}")
        elif isinstance(value_rule, UnitRange):
            if not _unit_value_ok(value, value_rule):
                report(prop, value, f"‘{value}’ is not a valid unit/range for {prop}")
        else:
            if prop == "position" and value not in value_rule.keywords:
                report(prop, value, f"Invalid value for position: '{value}'")

            position_value = next(
                (d.value for d in rule.declaration if d.name == "position"), None
            )
            if position_value != "static":
                continue
            position_rule = known_values.properties.get("position")
            if not isinstance(position_rule, KeywordGroup):
                continue
            static_rule = position_rule.keywords.get("static")
            if static_rule is None or static_rule.ignores is None:
                continue
            for other in rule.declaration:
                if other.name in static_rule.ignores:
                    report(prop, value, f"'{other.name}' is not valid for static.")

    return errors