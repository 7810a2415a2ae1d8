"""Checks for repeated, overriding and out-of-order declarations."""

from __future__ import annotations

from dataclasses import dataclass

from prettystrict.check_property import Rule
from prettystrict.check_value import ValueList
from prettystrict.errors import ErrorKind, LintError, PrettystrictError

_PREFERRED_ORDER = {
    name: index
    for index, name in enumerate(
        ["display", "position", "top", "right", "bottom", "left", "z-index", "color", "background"]
    )
}


@dataclass
class Location:
    """A line and column in a stylesheet."""

    line: int
    column: int


def duplicate_declaration(rule: Rule, location: Location) -> list[LintError]:
    """Report every declaration whose property already appeared in the rule."""
    errors = []
    seen: set[str] = set()
    for decl in rule.declaration:
        if decl.name in seen:
            errors.append(
                LintError(
                    selector=rule.selector,
                    property=decl.name,
                    message="<- duplicate property found.",
                    kind=PrettystrictError(ErrorKind.DUPLICATE_PROPERTY),
                )
            )
        seen.add(decl.name)
    return errors


def shorthand_detection(rule: Rule, known_values: ValueList) -> list[LintError]:
    """Report shorthands and longhands that override one another."""
    errors: list[LintError] = []
    if known_values.shorthands is None:
        return errors

    def report(prop: str, message: str) -> None:
        errors.append(
            LintError(
                selector=rule.selector,
                property=prop,
                message=message,
                kind=PrettystrictError(ErrorKind.PROPERTY_OVERRIDE),
            )
        )

    seen: set[str] = set()
    for decl in rule.declaration:
        prop = decl.name
        for shorthand, longhands in known_values.shorthands.items():
            if prop in longhands and shorthand in seen:
                report(prop, f"'{prop}' overrides previously defined shorthand '{shorthand}'")
            if shorthand == prop:
                for longhand in longhands:
                    if longhand in seen:
                        report(
                            prop,
                            f"'{shorthand}' overrides previously defined longhand '{longhand}'",
                        )
        seen.add(prop)
    return errors


def check_order(rule: Rule) -> list[LintError]:
    """Report properties that come before ones they should follow."""
    errors = []
    last_index: int | None = None
    for decl in rule.declaration:
        index = _PREFERRED_ORDER.get(decl.name)
        if index is None:
            continue
        if last_index is not None and index < last_index:
            errors.append(
                LintError(
                    selector=rule.selector,
                    property=decl.name,
                    message="invalid property order found.",
                    kind=PrettystrictError(ErrorKind.PROPERTY_OVERRIDE),
                )
            )
        last_index = index
    return errors