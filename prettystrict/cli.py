"""Command-line entry point for the stylesheet linter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from prettystrict.check_property import load_known_props
from prettystrict.check_value import load_known_values
from prettystrict.duplicate_declaration import Location
from prettystrict.errors import ErrorKind, LintError, PrettystrictError
from prettystrict.lint_rules import lint_rules
from prettystrict.parse_css import parse_css, parse_css_default

DEFAULT_STYLESHEET = "src/styles.css"
DEFAULT_PROPS = "./src/CSS/Props.json"
DEFAULT_VALUES = "./src/CSS/Values.json"


def check(file: str | None = None, watch: bool = False) -> str | None:
    """Announce and read a stylesheet; in watch mode only announce watching."""
    path = file if file is not None else DEFAULT_STYLESHEET
    if watch:
        print("Watching for changes...")
        return None
    print(f"Checking {path}")
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise PrettystrictError(ErrorKind.IO_ERROR, str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prettystrict")
    parser.add_argument("--props", default=DEFAULT_PROPS, help="known properties JSON file")
    parser.add_argument("--values", default=DEFAULT_VALUES, help="known values JSON file")
    commands = parser.add_subparsers(dest="command")
    check_parser = commands.add_parser("check", help="lint a stylesheet")
    check_parser.add_argument("file", nargs="?", metavar="FILE")
    check_parser.add_argument("-w", "--watch", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Lint a stylesheet (the built-in sample by default) and print findings."""
    args = _build_parser().parse_args(argv)
    location = Location(line=1, column=1)
    try:
        known_props = load_known_props(args.props)
        known_values = load_known_values(args.values)
        if args.command == "check":
            contents = check(args.file, args.watch)
            if contents is None:
                return 0
            rules = parse_css(contents)
        else:
            rules = parse_css_default()
    except (LintError, PrettystrictError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for rule in rules:
        for error in lint_rules(rule, known_props, known_values, location):
            print(f"[{location.line}:{location.column}] {error.property}: {error.message}")
    return 0