# prettystrict

A strict CSS linter. It parses a stylesheet into flat rules and checks every
declaration against JSON lists of known properties, at-rules and values.

## What it checks

Each check lives in its own module and returns a list of `LintError`s:

- `check_property.check_props`: property names missing from the known list
- `check_property.check_at_rule`: enclosing at-rules missing from the known list
- `check_value.check_value`: values not in a property's allowed set, numbers
  with a unit outside the allowed units or range, invalid `position` keywords,
  and properties listed as ignored for `position: static`
- `unit_check.unit_check`: units a property does not accept, or any unit on a
  keyword-only property
- `duplicate_declaration.duplicate_declaration`: properties declared twice in one rule
- `duplicate_declaration.shorthand_detection`: a shorthand and its longhands
  overriding each other
- `duplicate_declaration.check_order`: declarations out of the preferred order
  (`display`, `position`, `top`, `right`, `bottom`, `left`, `z-index`, `color`, `background`)

`lint_rules.lint_rules` runs all of them on one rule, in the order above
except that the at-rule check runs last.

## Installing

```
pip install .
```

## Command line

```
prettystrict
prettystrict check [FILE]
```

With no subcommand the built-in sample stylesheet is linted. `check` reads
`FILE` (default `src/styles.css`), prints `Checking <path>` and lints it.

Options, given before the subcommand:

- `--props PATH`: known properties JSON (default `./src/CSS/Props.json`)
- `--values PATH`: known values JSON (default `./src/CSS/Values.json`)

Each problem is printed on its own line as `[line:column] property: message`.
If a JSON file or the stylesheet cannot be read or parsed, the error is
printed to standard error and the exit status is 1.

## Library use

```python
from prettystrict.check_property import load_known_props
from prettystrict.check_value import load_known_values
from prettystrict.duplicate_declaration import Location
from prettystrict.lint_rules import lint_rules
from prettystrict.parse_css import parse_css

known_props = load_known_props("Props.json")
known_values = load_known_values("Values.json")
location = Location(line=1, column=1)

for rule in parse_css(".box { display: block; color: red; }"):
    for error in lint_rules(rule, known_props, known_values, location):
        print(error.property, error.message)
```

`Props.json` holds a `properties` list and an `at-rules` list. `Values.json`
maps property names to one of `{"allowed": [...]}`,
`{"units": [...], "range": {"min": ..., "max": ...}}` or
`{"keywords": {"<keyword>": {"allowed": [...], "ignores": [...]}}}`, and may
hold a `shorthands` map from each shorthand to its longhands. Loading failures
raise `LintError`.

### Parsing

`parse_css.parse_css` handles style rules, `@media`, `@supports`,
`@keyframes` (including vendor-prefixed forms) and `@font-face`; other
at-rules are skipped. Only a fixed set of common properties is kept in each
rule (for example `color`, `width`, `margin`, `display`, `font-size`,
`border`, `transform`); others and `!important` declarations are dropped.
Colours are written as `#rrggbb` or `rgba(...)`. Malformed input raises
`LintError`.

`parse_css.parse_css_file` reads and parses a file,
`parse_css.parse_css_with_recovery` falls back to the line-based
`parse_css.parse_css_fallback` when parsing fails, and
`parse_css.parse_css_default` parses the built-in sample.

## Limitations

- Source positions are not tracked: every finding is reported at `[1:1]`.
- `check --watch` only prints `Watching for changes...` and exits; files are
  not watched.

## Tests

```
pip install .[test]
pytest
```