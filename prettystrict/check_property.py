"""Rule data model and checks against the list of known properties."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from prettystrict.errors import ErrorKind, LintError, PrettystrictError


@dataclass
class Property:
    """A single declaration: property name and its value."""

    name: str
    value: str


@dataclass
class Rule:
    """A selector, its declarations and the at-rules enclosing it."""

    selector: str
    declaration: list[Property] = field(default_factory=list)
    at_rule: list[str] = field(default_factory=list)


def _string_list(data: Any, key: str) -> list[str]:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    items = data[key]
    if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
        raise ValueError(f"field `{key}` must be a list of strings")
    return list(items)


@dataclass
class PropertyList:
    """Known property names and at-rules."""

    properties: list[str]
    at_rules: list[str]

    @classmethod
    def from_dict(cls, data: Any) -> "PropertyList":
        """Build from decoded JSON with keys ``properties`` and ``at-rules``."""
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return cls(
            properties=_string_list(data, "properties"),
            at_rules=_string_list(data, "at-rules"),
        )


def load_known_props(path: str | Path) -> PropertyList:
    """Load a property list from a JSON file, raising LintError on failure."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise LintError(
            "", "", str(exc), PrettystrictError(ErrorKind.IO_ERROR, str(exc))
        ) from exc
    try:
        return PropertyList.from_dict(json.loads(text))
    except ValueError as exc:
        raise LintError(
            "", "", str(exc), PrettystrictError(ErrorKind.JSON_ERROR, str(exc))
        ) from exc


def check_props(rule: Rule, known_props: PropertyList) -> list[LintError]:
    """Report declarations whose property name is not known."""
    return [
        LintError(
            selector=rule.selector,
            property=decl.name,
            message=f"{decl.name} is unknown",
            kind=PrettystrictError(ErrorKind.UNKNOWN_PROPERTY, decl.name),
        )
        for decl in rule.declaration
        if decl.name not in known_props.properties
    ]


def check_at_rule(rule: Rule, known_props: PropertyList) -> list[LintError]:
    """Report enclosing at-rules that are not known."""
    errors = []
    for at_rule in rule.at_rule:
        name = at_rule if at_rule.startswith("@") else f"@{at_rule}"
        if name not in known_props.at_rules:
            errors.append(
                LintError(
                    selector="",
                    property=name,
                    message=f"Unknown at-rule: {name}",
                    kind=PrettystrictError(ErrorKind.UNKNOWN_PROPERTY, name),
                )
            )
    return errors