"""Run every rule check against a parsed rule."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

from prettystrict.check_property import PropertyList, Rule, check_at_rule, check_props
from prettystrict.check_value import ValueList, check_value
from prettystrict.duplicate_declaration import (
    Location,
    check_order,
    duplicate_declaration,
    shorthand_detection,
)
from prettystrict.errors import LintError
from prettystrict.unit_check import unit_check


@dataclass(frozen=True)
class _Context:
    rule: Rule
    props: PropertyList
    values: ValueList
    location: Location


# Checks run in this order; their errors are reported in the same order.
_CHECKS: tuple[Callable[[_Context], list[LintError]], ...] = (
    lambda ctx: check_props(ctx.rule, ctx.props),
    lambda ctx: check_value(ctx.rule, ctx.values),
    lambda ctx: duplicate_declaration(ctx.rule, ctx.location),
    lambda ctx: unit_check(ctx.rule, ctx.values),
    lambda ctx: shorthand_detection(ctx.rule, ctx.values),
    lambda ctx: check_order(ctx.rule),
    lambda ctx: check_at_rule(ctx.rule, ctx.props),
)


def _run_checks(ctx: _Context) -> Iterator[LintError]:
    for check in _CHECKS:
        yield from check(ctx)


def lint_rules(
    rule: Rule,
    known_props: PropertyList,
    known_values: ValueList,
    location: Location,
) -> list[LintError]:
    """Collect the errors reported by every check, grouped by check."""
    return list(_run_checks(_Context(rule, known_props, known_values, location)))