"""Parse stylesheets into flat rules for linting."""

from __future__ import annotations

import re
import struct
import sys
from pathlib import Path

from prettystrict.check_property import Property, Rule
from prettystrict.errors import ErrorKind, LintError, PrettystrictError

_DEFAULT_CSS = """
        .foo {
            color: red;
            font-size: 16px;
        }

        @media (max-width: 600px) {
            .bar {
                background: blue;
            }
        }
    """

_EXTRACTED = frozenset(
    {
        "background-color", "color", "width", "height", "margin", "padding",
        "display", "position", "font-size", "font-weight", "font-family",
        "text-align", "border", "border-radius", "flex-direction",
        "justify-content", "align-items", "box-shadow", "transform", "opacity",
        "z-index", "overflow", "cursor", "visibility", "box-sizing",
        "text-decoration",
    }
)
_PREFIXABLE = frozenset(
    {
        "border-radius", "flex-direction", "justify-content", "align-items",
        "box-shadow", "transform", "box-sizing", "text-decoration",
    }
)
_COLOR_PROPERTIES = frozenset({"color", "background-color"})

_NAMED_COLORS = {
    "black": (0, 0, 0), "silver": (192, 192, 192), "gray": (128, 128, 128),
    "grey": (128, 128, 128), "white": (255, 255, 255), "maroon": (128, 0, 0),
    "red": (255, 0, 0), "purple": (128, 0, 128), "fuchsia": (255, 0, 255),
    "magenta": (255, 0, 255), "green": (0, 128, 0), "lime": (0, 255, 0),
    "olive": (128, 128, 0), "yellow": (255, 255, 0), "navy": (0, 0, 128),
    "blue": (0, 0, 255), "teal": (0, 128, 128), "aqua": (0, 255, 255),
    "cyan": (0, 255, 255), "orange": (255, 165, 0), "pink": (255, 192, 203),
    "brown": (165, 42, 42), "gold": (255, 215, 0), "indigo": (75, 0, 130),
    "violet": (238, 130, 238), "coral": (255, 127, 80), "salmon": (250, 128, 114),
    "khaki": (240, 230, 140), "crimson": (220, 20, 60), "tomato": (255, 99, 71),
    "orchid": (218, 112, 214), "beige": (245, 245, 220), "ivory": (255, 255, 240),
    "lavender": (230, 230, 250), "tan": (210, 180, 140), "chocolate": (210, 105, 30),
    "darkgray": (169, 169, 169), "darkgrey": (169, 169, 169),
    "lightgray": (211, 211, 211), "lightgrey": (211, 211, 211),
    "darkblue": (0, 0, 139), "lightblue": (173, 216, 230),
    "darkgreen": (0, 100, 0), "lightgreen": (144, 238, 144),
    "darkred": (139, 0, 0), "rebeccapurple": (102, 51, 153),
    "steelblue": (70, 130, 180), "skyblue": (135, 206, 235),
    "whitesmoke": (245, 245, 245), "gainsboro": (220, 220, 220),
}

_AT_RULE = re.compile(r"@(-?[A-Za-z_][\w-]*)(.*)", re.S)
_KEYFRAMES = re.compile(r"(-[a-z]+-)?keyframes")
_VENDOR = re.compile(r"-(?:webkit|moz|ms|o)-(.+)")
_IDENT = re.compile(r"-{0,2}[A-Za-z_][\w-]*")
_IMPORTANT = re.compile(r"!\s*important\s*$", re.I)
_HEX = re.compile(r"#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})")
_RGB = re.compile(r"rgba?\((.*)\)", re.S)

Declaration = tuple[str, str, bool]


class _CssSyntaxError(ValueError):
    """Raised internally when the stylesheet cannot be parsed."""


# === LOW-LEVEL SCANNING ===

def _skip_string(text: str, start: int) -> int:
    quote = text[start]
    i = start + 1
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
        elif c == quote:
            return i + 1
        elif c == "\n":
            return i
        else:
            i += 1
    return len(text)


def _strip_comments(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        c = text[i]
        if c in "\"'":
            end = _skip_string(text, i)
            out.append(text[i:end])
            i = end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end < 0 else end + 2
            out.append(" ")
        else:
            out.append(c)
            i += 1
    return "".join(out)


def _matching_brace(text: str, open_index: int) -> int:
    depth = 0
    i = open_index
    while i < len(text):
        c = text[i]
        if c in "\"'":
            i = _skip_string(text, i)
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return len(text)


def _scan_items(text: str) -> list[tuple[str, str | None]]:
    """Split a block into (prelude, body) items; body is None for `;` items."""
    items: list[tuple[str, str | None]] = []
    depth = 0
    start = i = 0
    while i < len(text):
        c = text[i]
        if c in "\"'":
            i = _skip_string(text, i)
            continue
        if c in "([":
            depth += 1
        elif c in ")]":
            depth = max(depth - 1, 0)
        elif c == "}":
            raise _CssSyntaxError("unexpected token '}'")
        elif depth == 0 and c == "{":
            end = _matching_brace(text, i)
            items.append((text[start:i].strip(), text[i + 1 : end]))
            i = start = end + 1
            continue
        elif depth == 0 and c == ";":
            prelude = text[start:i].strip()
            if prelude:
                items.append((prelude, None))
            i = start = i + 1
            continue
        i += 1
    rest = text[start:].strip()
    if rest:
        items.append((rest, None))
    return items


def _tidy(text: str, combinators: str = "", colon: bool = False) -> str:
    """Collapse whitespace and normalise spacing around separators."""
    out: list[str] = []
    depth = 0
    space = False
    i = 0
    while i < len(text):
        c = text[i]
        if c in "\"'":
            end = _skip_string(text, i)
            token = text[i:end]
            i = end
        else:
            i += 1
            if c.isspace():
                space = True
                continue
            if c == "," or (colon and c == ":") or (depth == 0 and c in combinators):
                out.append(f"{c} " if c in ",:" else f" {c} ")
                space = False
                continue
            if c in ")]":
                depth = max(depth - 1, 0)
                space = False
            elif c in "([":
                depth += 1
            token = c
        if space and out and not out[-1].endswith((" ", "(", "[")):
            out.append(" ")
        space = False
        out.append(token)
    return "".join(out).strip()


# === DECLARATIONS ===

def _declarations(body: str) -> list[Declaration]:
    decls = []
    for prelude, block in _scan_items(body):
        if block is not None:
            continue
        name, sep, value = prelude.partition(":")
        name = name.strip()
        if not sep or not _IDENT.fullmatch(name):
            raise _CssSyntaxError(f"invalid declaration '{prelude}'")
        custom = name.startswith("--")
        if not custom:
            name = name.lower()
        value = value.strip()
        important = _IMPORTANT.search(value)
        if important is not None:
            value = value[: important.start()].rstrip()
        if not value and not custom:
            raise _CssSyntaxError(f"invalid declaration '{prelude}'")
        decls.append((name, value, important is not None))
    return decls


def _f32_text(number: float) -> str:
    single = struct.unpack("f", struct.pack("f", number))[0]
    text = repr(single)
    for digits in range(1, 10):
        text = f"{single:.{digits}g}"
        if struct.unpack("f", struct.pack("f", float(text)))[0] == single:
            break
    if "e" in text:
        text = f"{float(text):.12f}".rstrip("0").rstrip(".")
    return text


def _channel(text: str) -> int:
    number = float(text[:-1]) * 2.55 if text.endswith("%") else float(text)
    return round(min(max(number, 0.0), 255.0))


def _alpha(text: str) -> int:
    number = float(text[:-1]) / 100 if text.endswith("%") else float(text)
    return round(min(max(number, 0.0), 1.0) * 255)


def _rgba(value: str) -> tuple[int, int, int, int] | None:
    lower = value.lower()
    if lower in _NAMED_COLORS:
        return (*_NAMED_COLORS[lower], 255)
    if lower == "transparent":
        return (0, 0, 0, 0)
    match = _HEX.fullmatch(lower)
    if match is not None:
        digits = match.group(1)
        if len(digits) <= 4:
            digits = "".join(d * 2 for d in digits)
        if len(digits) == 6:
            digits += "ff"
        r, g, b, a = (int(digits[k : k + 2], 16) for k in range(0, 8, 2))
        return (r, g, b, a)
    match = _RGB.fullmatch(lower)
    if match is not None:
        args = [a for a in re.split(r"[\s,/]+", match.group(1).strip()) if a]
        if len(args) not in (3, 4):
            return None
        try:
            r, g, b = (_channel(a) for a in args[:3])
            a = _alpha(args[3]) if len(args) == 4 else 255
        except ValueError:
            return None
        return (r, g, b, a)
    return None


def _format_color(value: str) -> str:
    tidy = _tidy(value)
    rgba = _rgba(tidy)
    if rgba is None:
        return "currentColor" if tidy.lower() == "currentcolor" else tidy
    r, g, b, a = rgba
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"rgba({r}, {g}, {b}, {_f32_text(a / 255.0)})"


def _extract_property(name: str, value: str) -> Property | None:
    prefixed = _VENDOR.fullmatch(name)
    if prefixed is not None and prefixed.group(1) in _PREFIXABLE:
        name = prefixed.group(1)
    if name not in _EXTRACTED:
        return None
    formatted = _format_color(value) if name in _COLOR_PROPERTIES else _tidy(value)
    return Property(name=name, value=formatted)


def _extract_all(decls: list[Declaration]) -> list[Property]:
    return [
        prop
        for name, value, important in decls
        if not important and (prop := _extract_property(name, value)) is not None
    ]


# === RULE TRAVERSAL ===

def _print_keyframes(at_name: str, name: str, frames: list[tuple[str, list[Declaration]]]) -> str:
    blocks = []
    for selector, decls in frames:
        lines = [f"  {selector} {{"]
        lines += [
            f"    {n}: {_tidy(v)}{' !important' if imp else ''};" for n, v, imp in decls
        ]
        lines.append("  }")
        blocks.append("\n".join(lines))
    header = f"@{at_name} {name} {{"
    if not blocks:
        return f"{header}\n}}"
    return f"{header}\n" + "\n\n".join(blocks) + "\n}"


def _at_rule(prelude: str, block: str | None, rules: list[Rule], stack: list[str]) -> None:
    match = _AT_RULE.fullmatch(prelude)
    if match is None:
        raise _CssSyntaxError("invalid rule")
    name, rest = match.group(1).lower(), match.group(2).strip()

    if name in ("media", "supports"):
        if block is None:
            raise _CssSyntaxError("invalid rule body")
        stack.append(f"@{name} {_tidy(rest, colon=True)}")
        _traverse(_scan_items(block), rules, stack)
        stack.pop()
    elif _KEYFRAMES.fullmatch(name):
        if block is None or not rest:
            raise _CssSyntaxError("invalid rule body")
        frames = []
        for selector, body in _scan_items(block):
            if body is None:
                raise _CssSyntaxError(f"invalid keyframe '{selector}'")
            frames.append((_tidy(selector.lower()), _declarations(body)))
        stack.append(_print_keyframes(name, _tidy(rest), frames))
        for selector, decls in frames:
            rules.append(Rule(selector, _extract_all(decls), list(stack)))
        stack.pop()
    elif name == "font-face":
        if block is None:
            raise _CssSyntaxError("invalid rule body")
        decls = [
            Property("font-face-property", f"{n}: {_tidy(v)}")
            for n, v, _ in _declarations(block)
        ]
        rules.append(Rule("", decls, ["@font-face"]))


def _traverse(items: list[tuple[str, str | None]], rules: list[Rule], stack: list[str]) -> None:
    for prelude, block in items:
        if prelude.startswith("@"):
            _at_rule(prelude, block, rules, stack)
            continue
        if block is None:
            raise _CssSyntaxError(f"qualified rule invalid: '{prelude}'")
        selector = _tidy(prelude, combinators=">+~")
        if not selector:
            raise _CssSyntaxError("invalid selector")
        rules.append(Rule(selector, _extract_all(_declarations(block)), list(stack)))


# === PUBLIC API ===

def parse_css(css_content: str) -> list[Rule]:
    """Parse a stylesheet into rules, raising LintError if it is malformed."""
    rules: list[Rule] = []
    try:
        _traverse(_scan_items(_strip_comments(css_content)), rules, [])
    except _CssSyntaxError as exc:
        raise LintError(
            selector="",
            property="",
            message=f"Failed to parse CSS: {exc}",
            kind=PrettystrictError(ErrorKind.CUSTOM, "parse_css"),
        ) from exc
    return rules


def parse_css_file(file_path: str | Path) -> list[Rule]:
    """Read and parse a stylesheet file."""
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise LintError(
            selector="",
            property="",
            message=f"Failed to read CSS file: {exc}",
            kind=PrettystrictError(ErrorKind.IO_ERROR, str(exc)),
        ) from exc
    return parse_css(content)


def parse_css_with_recovery(css_content: str) -> list[Rule]:
    """Parse a stylesheet, falling back to a line-based reader on failure."""
    try:
        return parse_css(css_content)
    except LintError as exc:
        print(
            f"Warning: CSS parsing failed, attempting recovery: {exc.message}",
            file=sys.stderr,
        )
        return parse_css_fallback(css_content)


def _extract_at_rules_simple(css: str) -> list[str]:
    return [line.strip() for line in css.split("\n") if line.strip().startswith("@")]


def parse_css_fallback(css_content: str) -> list[Rule]:
    """Read rules line by line, tolerating malformed input."""
    rules: list[Rule] = []
    at_rules = _extract_at_rules_simple(css_content)
    current: Rule | None = None
    in_rule = False
    brace_count = 0

    for line in css_content.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue
        brace_count += trimmed.count("{") - trimmed.count("}")

        if "{" in trimmed and not in_rule:
            current = Rule(trimmed.replace("{", "").strip(), [], list(at_rules))
            in_rule = True
        elif "}" in trimmed and brace_count == 0:
            if current is not None:
                rules.append(current)
                current = None
            in_rule = False
        elif in_rule and ":" in trimmed and current is not None:
            name, _, value = trimmed.partition(":")
            current.declaration.append(Property(name.strip(), value.strip().rstrip(";")))

    return rules


def parse_css_default() -> list[Rule]:
    """Parse the built-in sample stylesheet."""
    return parse_css(_DEFAULT_CSS)